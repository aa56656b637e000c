""" Scenario trees, and values that resolve through them. """
import unittest
from tjparse import ParseAborted, MessageHandler
from tjparse.model.project import Project
from tjparse.model.properties import Scenario, Task
from project_samples import parse


class TestScenarioValues(unittest.TestCase):
	def setUp(self):
		project = self.project = Project('p', 'P', '1.0')
		project.replace_default_scenario()
		plan = Scenario(project, 'plan', 'Plan')
		delayed = Scenario(project, 'delayed', 'Delayed', plan)
		Scenario(project, 'worse', 'Even worse', delayed)
		self.task = Task(project, 't', 'T')

	def test_00_indices_and_parents(self):
		self.assertEqual(2, self.project.scenario_idx('worse'))
		self.assertEqual(1, self.project.scenario_parent_index(2))
		self.assertIsNone(self.project.scenario_parent_index(0))
		self.assertIsNone(self.project.scenario_idx('nope'))
		self.assertEqual([0, 1, 2], [s.index for s in self.project.scenarios])
		self.assertEqual((0, 1), (self.task.index, self.task.sequence_no))

	def test_01_child_inherits_unset_values(self):
		self.task['effort', 0] = 10
		self.assertEqual(10, self.task['effort', 1])
		self.assertEqual(10, self.task['effort', 2])
		self.assertFalse(self.task.provided('effort', 2))

	def test_02_override_leaves_the_parent_alone(self):
		self.task['effort', 0] = 10
		self.task['effort', 1] = 20
		self.assertEqual(10, self.task['effort', 0])
		self.assertEqual(20, self.task['effort', 2])
		self.assertEqual({0: 10, 1: 20}, self.task.values('effort').explicit())

	def test_03_defaults_are_fresh(self):
		flags = self.task['flags', 1]
		flags.append('oops')
		self.assertEqual([], self.task['flags', 0])

	def test_04_scenario_specificity_is_enforced(self):
		with self.assertRaises(AssertionError): self.task.get('effort')
		with self.assertRaises(AssertionError): self.task['note', 0]


class TestScenarioSyntax(unittest.TestCase):
	def test_00_declaration_replaces_the_default(self):
		project = parse('scenario actual "Actual" { projection { strict } scenario test "Test" { disabled } }')
		self.assertEqual(['actual', 'test'], [s.id for s in project.scenarios])
		actual, test = project.scenario('actual'), project.scenario(1)
		self.assertIs(actual, test.parent)
		self.assertTrue(test.get('projection'))
		self.assertTrue(test.get('strict'))
		self.assertFalse(test.get('enabled'))
		self.assertTrue(actual.get('enabled'))

	def test_01_values_per_scenario(self):
		project = parse('''
			scenario plan "Plan" { scenario delayed "Delayed" }
			task a "A" { effort 2d delayed:effort 4d }
			task b "B" { effort 3d }
		''')
		a, b = project.task('a'), project.task('b')
		self.assertEqual((16, 32), (a['effort', 0], a['effort', 1]))
		self.assertEqual((24, 24), (b['effort', 0], b['effort', 1]))

	def test_02_prefix_applies_to_one_attribute(self):
		project = parse('''
			scenario plan "Plan" { scenario delayed "Delayed" }
			task a "A" { delayed:effort 4d effort 2d }
		''')
		self.assertEqual((16, 32), (project.task('a')['effort', 0], project.task('a')['effort', 1]))

	def test_03_mistakes(self):
		for body, code in [
			('scenario a "A" scenario b "B"', 'scenario_top_level'),
			('scenario a "A" { scenario b "B" scenario b "Again" }', 'scenario_exists'),
			('task t "T" { delayed:effort 4d }', 'unknown_scenario_id'),
		]:
			with self.subTest(code=code):
				with self.assertRaises(ParseAborted) as cm: parse(body)
				self.assertEqual(code, cm.exception.code)


if __name__ == '__main__':
	unittest.main()
