""" Resource allocations, including the persistent flag. """
import unittest
from tjparse import ParseAborted
from tjparse.model.scheduling import Allocation, SelectionMode
from project_samples import parse

RESOURCES = 'resource r1 "R1" resource r2 "R2" resource r3 "R3"\n'


class TestAllocation(unittest.TestCase):
	def test_00_defaults(self):
		project = parse(RESOURCES + 'task t "T" { allocate r1 }')
		[allocation] = project.task('t')['allocate', 0]
		self.assertEqual((project.resource('r1'),), allocation.candidates)
		self.assertIs(SelectionMode.MINALLOCATED, allocation.selection_mode)
		self.assertFalse(allocation.persistent)
		self.assertFalse(allocation.mandatory)

	def test_01_options(self):
		project = parse(RESOURCES + 'task t "T" { allocate r1 { alternative r2, r3 select order persistent mandatory }, r2 }')
		r1, r2, r3 = (project.resource(id) for id in ('r1', 'r2', 'r3'))
		self.assertEqual([
			Allocation((r1, r2, r3), SelectionMode.ORDER, persistent=True, mandatory=True),
			Allocation((r2,)),
		], project.task('t')['allocate', 0])

	def test_02_persistent_alone(self):
		project = parse(RESOURCES + 'task t "T" { allocate r1 { persistent } }')
		[allocation] = project.task('t')['allocate', 0]
		self.assertTrue(allocation.persistent)
		self.assertIs(SelectionMode.MINALLOCATED, allocation.selection_mode)

	def test_03_allocations_accumulate_and_inherit(self):
		project = parse(RESOURCES + 'task a "A" { allocate r1 allocate r2 { select random } task b "B" }')
		allocations = project.task('a.b')['allocate', 0]
		self.assertEqual([SelectionMode.MINALLOCATED, SelectionMode.RANDOM], [a.selection_mode for a in allocations])

	def test_04_unknown_resource(self):
		with self.assertRaises(ParseAborted) as cm: parse(RESOURCES + 'task t "T" { allocate r9 }')
		self.assertEqual('resource_id_expct', cm.exception.code)
		with self.assertRaises(ParseAborted) as cm: parse(RESOURCES + 'task t "T" { allocate r1 { select nearest } }')
		self.assertEqual('unknown_attribute', cm.exception.code)


if __name__ == '__main__':
	unittest.main()
