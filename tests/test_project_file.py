""" Whole project files: the happy path, the project body, tasks, resources and the range checks. """
import datetime, os, tempfile, unittest
from tjparse import loads, load, ParseAborted, ProjectFileParser, MessageHandler
from tjparse.model.scheduling import Vacation, Interval
from project_samples import parse


class TestHappyPath(unittest.TestCase):
	def test_00_one_task_with_effort(self):
		project = loads('project "p" "Demo" "1.0" 2024-01-01 - 2024-02-01 { task "t1" "Task 1" { effort 2d } }')
		self.assertEqual(1, len(project.tasks))
		task = project.task('t1')
		self.assertEqual('Task 1', task.name)
		self.assertEqual(16, task['effort', 0])
		self.assertTrue(task.provided('effort', 0))
		self.assertEqual((datetime.datetime(2024, 1, 1), datetime.datetime(2024, 2, 1)), project.interval)

	def test_01_tasks_after_the_project(self):
		project = parse(after='task a "A" { task b "B" { milestone } }')
		self.assertEqual(['a', 'a.b'], [t.full_id for t in project.tasks])
		self.assertTrue(project.task('a').is_container)
		self.assertTrue(project.task('a.b')['milestone', 0])
		self.assertEqual(1, project.task('a.b').level)
		self.assertEqual([1, 2], [t.sequence_no for t in project.tasks])

	def test_02_parser_reports_instead_of_raising(self):
		messages = MessageHandler(quiet=True)
		parser = ProjectFileParser(messages)
		self.assertIsNone(parser.parse_text('project "p" "Demo" "1.0" 2024-01-01 - 2024-02-01 { task "t" "T" { complete 150 } }'))
		self.assertEqual(['task_complete'], [d.code for d in messages.errors])
		self.assertEqual('t', messages.errors[0].subject)

	def test_03_trailing_garbage(self):
		with self.assertRaises(ParseAborted) as cm: parse(after='}')
		self.assertEqual('unexpected_token', cm.exception.code)


class TestProjectBody(unittest.TestCase):
	def test_00_settings(self):
		project = parse('''
			currency "USD"
			dailyworkinghours 6
			yearlyworkingdays 250
			timeformat "%d.%m.%Y"
			shorttimeformat "%H.%M"
			timezone "Europe/Berlin"
			weekstartssunday
			now 2024-01-15
			numberformat "(" ")" "." "," "2"
			copyright "ACME"
		''')
		self.assertEqual('USD', project['currency'])
		self.assertEqual(6, project['dailyworkinghours'])
		self.assertEqual(250, project['yearlyworkingdays'])
		self.assertEqual('%d.%m.%Y', project['timeformat'])
		self.assertEqual('%H.%M', project['shorttimeformat'])
		self.assertEqual('Europe/Berlin', project['timezone'])
		self.assertFalse(project['weekstartsmonday'])
		self.assertEqual(datetime.datetime(2024, 1, 15), project['now'])
		self.assertEqual('(', project['numberformat'].negative_prefix)
		self.assertEqual('ACME', project['copyright'])

	def test_01_timing_resolution(self):
		project = parse('timingresolution 30 min task t "T" { effort 1h duration 1d }')
		self.assertEqual(1800, project['scheduleGranularity'])
		self.assertEqual(2, project.task('t')['effort', 0])
		self.assertEqual(48, project.task('t')['duration', 0])
		for minutes, code in [(2, 'min_timing_res'), (90, 'max_timing_res')]:
			with self.subTest(minutes=minutes):
				with self.assertRaises(ParseAborted) as cm: parse('timingresolution %d min'%minutes)
				self.assertEqual(code, cm.exception.code)

	def test_02_durations(self):
		project = parse('task t "T" { duration 1w length 1d } task u "U" { effort 1.5d } task v "V" { duration 90min }')
		self.assertEqual(168, project.task('t')['duration', 0])
		self.assertEqual(8, project.task('t')['length', 0])
		self.assertEqual(12, project.task('u')['effort', 0])
		self.assertEqual(1, project.task('v')['duration', 0])

	def test_03_global_working_hours(self):
		project = parse('workinghours fri - mon 8:00 - 9:00, 10:00 - 11:00 workinghours sat 10:00 - 14:00')
		hours = project['workinghours']
		self.assertEqual([(36000, 50400)], hours.on_day(6))
		for day in (5, 0, 1):
			self.assertEqual([(28800, 32400), (36000, 39600)], hours.on_day(day))
		self.assertEqual([(9*3600, 12*3600), (13*3600, 18*3600)], hours.on_day(2))

	def test_04_global_vacation(self):
		project = parse('vacation "Xmas" 2024-01-10 - 2024-01-12, 2024-01-20 + 2d')
		self.assertEqual([
			Vacation('Xmas', Interval(datetime.datetime(2024, 1, 10), datetime.datetime(2024, 1, 12))),
			Vacation('Xmas', Interval(datetime.datetime(2024, 1, 20), datetime.datetime(2024, 1, 22))),
		], project['vacations'])

	def test_05_flags(self):
		messages = MessageHandler(quiet=True)
		project = parse('flags important, later flags important task t "T" { flags important }', messages=messages)
		self.assertEqual(['important', 'later'], project['flags'])
		self.assertEqual(['flag_redeclared'], [d.code for d in messages.warnings])
		self.assertEqual(['important'], project.task('t')['flags', 0])
		with self.assertRaises(ParseAborted) as cm: parse('task t "T" { flags nope }')
		self.assertEqual('undecl_flag', cm.exception.code)

	def test_06_macros(self):
		project = loads('macro work [2d]\n%s { task t "T" { effort ${work} start ${projectstart} } }'%'project "p" "Demo" "1.0" 2024-01-01 - 2024-02-01')
		task = project.task('t')
		self.assertEqual(16, task['effort', 0])
		self.assertEqual(datetime.datetime(2024, 1, 1), task['start', 0])

	def test_07_bad_ids(self):
		with self.assertRaises(ParseAborted) as cm: parse('task "not an id" "T"')
		self.assertEqual('bad_id', cm.exception.code)


class TestTasks(unittest.TestCase):
	def test_00_dates_set_the_direction(self):
		project = parse('task a "A" { end 2024-01-20 } task b "B" { start 2024-01-05 scheduling alap }')
		self.assertEqual(datetime.datetime(2024, 1, 20), project.task('a')['end', 0])
		self.assertFalse(project.task('a')['forward', 0])
		self.assertFalse(project.task('b')['forward', 0])

	def test_01_period(self):
		task = parse('task t "T" { period 2024-01-05 - 2024-01-10 }').task('t')
		self.assertEqual(datetime.datetime(2024, 1, 5), task['start', 0])
		self.assertEqual(datetime.datetime(2024, 1, 10), task['end', 0])

	def test_02_dependencies(self):
		project = parse('''
			task a "A"
			task b "B" { depends a { gapduration 2d }, c.d { onstart } }
			task c "C" { task d "D" { precedes !e { gaplength 1d } } task e "E" }
		''')
		first, second = project.task('b')['depends', 0]
		self.assertEqual(('a', True, 48), (first.task_id, first.on_end, first.gap_duration))
		self.assertEqual(('c.d', False), (second.task_id, second.on_end))
		self.assertTrue(project.task('b')['forward', 0])
		[follower] = project.task('c.d')['precedes', 0]
		self.assertEqual(('c.e', False, 8), (follower.task_id, follower.on_end, follower.gap_length))
		self.assertFalse(project.task('c.d')['forward', 0])

	def test_03_too_many_bangs(self):
		with self.assertRaises(ParseAborted) as cm: parse('task a "A" { depends !!b }')
		self.assertEqual('too_many_bangs', cm.exception.code)

	def test_04_priority_is_inherited(self):
		project = parse('task a "A" { priority 700 task b "B" } task c "C"')
		self.assertEqual(700, project.task('a.b')['priority', 0])
		self.assertEqual(500, project.task('c')['priority', 0])

	def test_05_supplement(self):
		project = parse('task t "T" { note "first" }', after='supplement task t { note "second" effort 1d }')
		task = project.task('t')
		self.assertEqual('second', task.get('note'))
		self.assertEqual(8, task['effort', 0])

	def test_06_references_must_resolve(self):
		for body, code in [
			('supplement task nope { }', 'unknown_task'),
			('task t "T" { responsible nobody }', 'resource_id_expct'),
			('task t "T" { nope:effort 1d }', 'unknown_scenario_id'),
			('task t "T" task t "Again"', 'task_exists'),
		]:
			with self.subTest(code=code):
				with self.assertRaises(ParseAborted) as cm: parse(body)
				self.assertEqual(code, cm.exception.code)

	def test_07_range_checks(self):
		resource = 'resource r1 "R1"\n'
		for body, code in [
			('task t "T" { complete 150 }', 'task_complete'),
			('task t "T" { complete -1 }', 'unexpected_token'),
			('task t "T" { priority 1001 }', 'task_priority'),
			('task t "T" { effort 0d }', 'effort_zero'),
			(resource + 'task t "T" { booking r1 2024-01-02 - 2024-01-03 { overtime 3 } }', 'overtime_range'),
			(resource + 'task t "T" { booking r1 2024-01-02 - 2024-01-03 { sloppy 5 } }', 'sloppy_range'),
			(resource + 'task t "T" { booking r1 2024-01-05 - 2024-01-03 }', 'interval_end'),
			('task t "T" { start 2025-01-01 }', 'date_in_range'),
			('task t "T" { period 2023-12-01 - 2024-01-10 }', 'interval_start_in_range'),
			('task t "T" { period 2024-01-10 - 2024-03-01 }', 'interval_end_in_range'),
			('workinghours mon 12:00 - 9:00', 'time_interval'),
		]:
			with self.subTest(code=code):
				with self.assertRaises(ParseAborted) as cm: parse(body)
				self.assertEqual(code, cm.exception.code)
				self.assertIsNotNone(cm.exception.diagnostic.location)

	def test_08_project_interval_must_not_be_backwards(self):
		with self.assertRaises(ParseAborted) as cm: loads('project "p" "Demo" "1.0" 2024-02-01 - 2024-01-01 { }')
		self.assertEqual('interval_end', cm.exception.code)

	def test_09_bookings(self):
		project = parse('resource r1 "R1" task t "T" { booking r1 2024-01-02 - 2024-01-03, 2024-01-04 + 4h { overtime 1 sloppy 2 } }')
		[booking] = project.task('t')['bookings', 0]
		self.assertIs(project.resource('r1'), booking.resource)
		self.assertEqual(2, len(booking.intervals))
		self.assertEqual(datetime.datetime(2024, 1, 4, 4), booking.intervals[1].end)
		self.assertEqual((1, 2), (booking.overtime, booking.sloppy))


class TestResources(unittest.TestCase):
	def test_00_nested_resources_have_global_ids(self):
		resources = parse('resource team "Team" { resource dev "Dev" }').resources
		self.assertEqual(['team', 'dev'], [r.full_id for r in resources])
		self.assertIs(resources['team'], resources['dev'].parent)

	def test_01_flags_and_vacations(self):
		project = parse('''
			flags core
			resource team "Team" { flags core resource dev "Dev" { vacation 2024-01-08 - 2024-01-10 } }
		''')
		dev = project.resource('dev')
		self.assertEqual(['core'], dev['flags', 0])
		self.assertEqual([None], [v.name for v in dev['vacations', 0]])
		self.assertEqual([], project.resource('team')['vacations', 0])

	def test_02_working_hours(self):
		project = parse('resource r "R" { workinghours mon - wed off }')
		hours = project.resource('r').working_hours(0)
		self.assertEqual([], hours.on_day(1))
		self.assertEqual([], hours.on_day(3))
		self.assertNotEqual([], hours.on_day(4))
		self.assertNotEqual([], project['workinghours'].on_day(1))

	def test_03_resource_booking(self):
		project = parse('task t "T" resource r "R" { booking t 2024-01-02 - 2024-01-03 }')
		[booking] = project.task('t')['bookings', 0]
		self.assertIs(project.resource('r'), booking.resource)

	def test_04_duplicates_rejected(self):
		with self.assertRaises(ParseAborted) as cm: parse('resource r "R" resource r "Again"')
		self.assertEqual('resource_exists', cm.exception.code)

	def test_05_supplement(self):
		project = parse('resource r "R"', after='supplement resource r { workinghours sun 9:00 - 10:00 }')
		self.assertEqual([(32400, 36000)], project.resource('r').working_hours(0).on_day(0))


class TestFiles(unittest.TestCase):
	def setUp(self):
		self.tmp = tempfile.TemporaryDirectory()
		self.dir = self.tmp.name

	def tearDown(self):
		self.tmp.cleanup()

	def write(self, name, content):
		path = os.path.join(self.dir, name)
		with open(path, 'w', encoding='utf-8') as fh: fh.write(content)
		return path

	def test_00_include(self):
		self.write('resources.tji', 'resource r "R"\n')
		self.write('tasks.tji', 'task t "T" { allocate r }\n')
		master = self.write('plan.tjp', 'project "p" "Demo" "1.0" 2024-01-01 - 2024-02-01 { include "resources.tji" }\ninclude "tasks.tji"\ntask u "U"\n')
		project = load(master)
		self.assertEqual(['t', 'u'], [t.id for t in project.tasks])
		self.assertEqual(1, len(project.task('t')['allocate', 0]))

	def test_01_missing_files(self):
		with self.assertRaises(ParseAborted) as cm: load(os.path.join(self.dir, 'nope.tjp'))
		self.assertEqual('file_open', cm.exception.code)
		master = self.write('plan.tjp', 'project "p" "Demo" "1.0" 2024-01-01 - 2024-02-01 { include "nope.tji" }')
		with self.assertRaises(ParseAborted) as cm: load(master)
		self.assertEqual('file_open', cm.exception.code)


if __name__ == '__main__':
	unittest.main()
