"""
Rules shared all over the project file language: numbers and durations, dates and
intervals, working hours, flags, and references to tasks, resources and scenarios.

Durations come in two flavors. Calendar durations count wall-clock time; working
durations count working time, so a day is ``dailyworkinghours`` long and a year has
``yearlyworkingdays`` days. Both end up as a number of scheduling slots, whose size
is the project's timing resolution.
"""

import datetime, re

from ..grammar.builders import list_rule, comma_list_rule, single_pattern
from ..grammar.registry import Registry, PatternDoc
from ..grammar.symbols import K, N, INTEGER, FLOAT, DATE, TIME, STRING, ID, ID_WITH_COLON, ABSOLUTE_ID, MACRO
from ..model.properties import Resource
from ..model.scheduling import Interval, WEEKDAYS
from ..scanning.tokens import Macro

DURATION_UNITS = [
	('min', 'minutes'),
	('h', 'hours'),
	('d', 'days'),
	('w', 'weeks'),
	('m', 'months'),
	('y', 'years'),
]

CALENDAR_SECONDS = (60, 60*60, 60*60*24, 60*60*24*7, 60*60*24*30.4167, 60*60*24*365)

IDENTIFIER = re.compile(r'[A-Za-z_]\w*$')

def working_seconds(project, unit:int) -> float:
	day = 60 * 60 * project['dailyworkinghours']
	per_year = project['yearlyworkingdays']
	return (60, 60*60, day, day * per_year / 52.1429, day * per_year / 12, day * per_year)[unit]

def date_text(moment:datetime.datetime) -> str:
	""" Spelled so the scanner reads it back as the same date. """
	return moment.strftime('%Y-%m-%d-%H:%M')

def close_interval(ctx, start, end_spec) -> Interval:
	mode, value = end_spec
	end = value if mode == 'date' else start + datetime.timedelta(seconds=value)
	if end <= start:
		ctx.error('interval_end', "End date %s must be after the start date %s."%(end, start))
	return Interval(start, end)

def _constant(value): return lambda ctx: value


def declare(grammar:Registry):
	grammar.define_rule('number')
	single_pattern(grammar, 'number', INTEGER)
	single_pattern(grammar, 'number', FLOAT)

	grammar.define_rule('durationUnit')
	for index, (unit, meaning) in enumerate(DURATION_UNITS):
		grammar.add_pattern('durationUnit', [K(unit)], _constant(index), PatternDoc(None, meaning))

	grammar.define_rule('calendarDuration')
	@grammar.pattern('calendarDuration', N('number'), N('durationUnit'), args={0:('value', 'A floating point or integer number')})
	def calendar_duration(ctx, value, unit):
		return int(value * CALENDAR_SECONDS[unit] / ctx.project['scheduleGranularity'])

	grammar.define_rule('workingDuration')
	@grammar.pattern('workingDuration', N('number'), N('durationUnit'), args={0:('value', 'A floating point or integer number')})
	def working_duration(ctx, value, unit):
		return int(round(value * working_seconds(ctx.project, unit) / ctx.project['scheduleGranularity']))

	grammar.define_rule('intervalDuration')
	@grammar.pattern('intervalDuration', INTEGER, N('durationUnit'), args={0:('duration', 'The duration of the interval')})
	def interval_duration(ctx, value, unit):
		return int(value * CALENDAR_SECONDS[unit])

	# Intervals

	grammar.define_rule('intervalEnd')
	@grammar.pattern('intervalEnd', K('-'), DATE, args={1:('end date', 'The end date of the interval')})
	def end_date(ctx, end): return ('date', end)
	@grammar.pattern('intervalEnd', K('+'), N('intervalDuration'))
	def end_after(ctx, seconds): return ('span', seconds)

	grammar.define_rule('interval')
	@grammar.pattern('interval', DATE, N('intervalEnd'), args={0:('start date', 'The start date of the interval')})
	def interval(ctx, start, end_spec):
		return close_interval(ctx, start, end_spec)

	list_rule(grammar, 'intervals', N('interval'))

	grammar.define_rule('valDate')
	@grammar.pattern('valDate', DATE)
	def val_date(ctx, moment):
		start, end = ctx.project.interval
		if moment < start or moment > end:
			ctx.error('date_in_range', "Date must be within the project time frame %s - %s."%(start, end))
		return moment

	grammar.define_rule('valInterval')
	@grammar.pattern('valInterval', DATE, N('intervalEnd'))
	def val_interval(ctx, start, end_spec):
		iv = close_interval(ctx, start, end_spec)
		start, end = ctx.project.interval
		if iv.start < start or iv.start >= end:
			ctx.error('interval_start_in_range', "Start date %s must be within the project time frame."%iv.start)
		if iv.end <= start or iv.end > end:
			ctx.error('interval_end_in_range', "End date %s must be within the project time frame."%iv.end)
		return iv

	# Working hours

	grammar.define_rule('weekday')
	for index, name in enumerate(WEEKDAYS):
		grammar.add_pattern('weekday', [K(name)], _constant(index))

	grammar.define_rule('weekDayIntervalEnd', optional=True)
	grammar.pattern('weekDayIntervalEnd', K('-'), N('weekday'), args={1:('end weekday', 'Weekday (sun - sat). It is included in the interval.')})(None)

	grammar.define_rule('weekDayInterval')
	@grammar.pattern('weekDayInterval', N('weekday'), N('weekDayIntervalEnd'), args={0:('weekday', 'Weekday (sun - sat)')})
	def week_day_interval(ctx, first, last):
		if last is None: return {first}
		return {(first + i) % 7 for i in range((last - first) % 7 + 1)}

	list_rule(grammar, 'listOfDays', N('weekDayInterval'))

	grammar.define_rule('timeInterval')
	@grammar.pattern('timeInterval', TIME, K('-'), TIME)
	def time_interval(ctx, start, end):
		if start >= end: ctx.error('time_interval', "End time of interval must be larger than start time.")
		return (start, end)

	comma_list_rule(grammar, 'moreTimeIntervals', N('timeInterval'))
	grammar.define_rule('listOfTimes')
	grammar.pattern('listOfTimes', K('off'))(lambda ctx: [])
	@grammar.pattern('listOfTimes', N('timeInterval'), N('moreTimeIntervals'))
	def list_of_times(ctx, first, rest): return [first] + rest

	grammar.define_rule('workinghours')
	@grammar.pattern('workinghours', K('workinghours'), N('listOfDays'), N('listOfTimes'), keyword='workinghours', doc="""
		The working hours specification limits the availability of resources to certain
		time slots of week days. Outside a resource it sets the project default.
	""")
	def workinghours(ctx, days, times):
		resource = ctx.current(Resource)
		hours = (ctx.project['workinghours'] if resource is None else resource.working_hours(ctx.scenario_idx)).copy()
		for day in set().union(*days): hours.set_working_hours(day, times)
		if resource is None: ctx.project['workinghours'] = hours
		else: resource['workinghours', ctx.scenario_idx] = hours

	# Flags

	grammar.define_rule('flag')
	@grammar.pattern('flag', ID)
	def flag(ctx, name):
		if name not in ctx.project['flags']: ctx.error('undecl_flag', "Undeclared flag %s"%name)
		return name

	list_rule(grammar, 'flagList', N('flag'))
	list_rule(grammar, 'declareFlagList', ID)

	# Source-level directives

	grammar.define_rule('include')
	@grammar.pattern('include', K('include'), STRING, keyword='include', doc="""
		Includes the specified file as if its contents were written instead of the include
		directive. File names are relative to the file the directive appears in.
	""", args={1:('filename', 'The file to include')})
	def include(ctx, path): ctx.source.include(path)

	grammar.define_rule('macro')
	@grammar.pattern('macro', K('macro'), ID, MACRO, keyword='macro', doc="""
		Defines a macro. Later on, ${name} is replaced by the text between the brackets.
	""")
	def macro(ctx, name, body): ctx.source.add_macro(Macro(name, body, ctx.location))

	grammar.define_rule('timezone')
	grammar.pattern('timezone', K('timezone'), STRING, keyword='timezone', doc="""
		Sets the default time zone of the project, as for the TZ environment variable.
	""", args={1:('zone', 'Time zone to use, e.g. Europe/Berlin')})(None)

	# Identifiers and references

	grammar.define_rule('newId')
	single_pattern(grammar, 'newId', ID)
	@grammar.pattern('newId', STRING)
	def quoted_id(ctx, text):
		if not IDENTIFIER.match(text): ctx.error('bad_id', "%r is not a valid ID."%text)
		return text

	grammar.define_rule('scenarioId')
	@grammar.pattern('scenarioId', ID_WITH_COLON)
	def scenario_id(ctx, id):
		idx = ctx.project.scenario_idx(id)
		if idx is None: ctx.error('unknown_scenario_id', "Unknown scenario: %s"%id)
		ctx.scenario_idx = idx

	grammar.define_rule('scenarioIdx')
	@grammar.pattern('scenarioIdx', ID)
	def scenario_idx(ctx, id):
		idx = ctx.project.scenario_idx(id)
		if idx is None: ctx.error('unknown_scenario_idx', "Unknown scenario %s"%id)
		return idx

	list_rule(grammar, 'scenarioIdList', N('scenarioIdx'))

	grammar.define_rule('taskIdUnverified')
	single_pattern(grammar, 'taskIdUnverified', ABSOLUTE_ID)
	single_pattern(grammar, 'taskIdUnverified', ID)

	grammar.define_rule('taskId')
	@grammar.pattern('taskId', N('taskIdUnverified'))
	def task_id(ctx, id):
		task = ctx.project.task(id)
		if task is None: ctx.error('unknown_task', "Unknown task %s"%id)
		return task

	grammar.define_rule('resourceId')
	@grammar.pattern('resourceId', ID, args={0:('resource', 'The ID of a defined resource')})
	def resource_id(ctx, id):
		resource = ctx.project.resource(id)
		if resource is None: ctx.error('resource_id_expct', "Resource ID expected, not %s"%id)
		return resource

	list_rule(grammar, 'resourceList', N('resourceId'))

	grammar.define_rule('vacationName', optional=True)
	grammar.pattern('vacationName', STRING, args={0:('name', 'An optional name for the vacation')})(None)
