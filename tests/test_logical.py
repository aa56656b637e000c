""" Report filter expressions: left-to-right chains, tight negation, and the checks made while parsing. """
import datetime, unittest
from tjparse import ParseAborted
from tjparse.model.logical import LogicalOperation, LogicalFlag, LogicalAttribute, fold
from project_samples import parse

def hidetask(expression, declarations='flags a, b, c'):
	project = parse('%s\nhtmltaskreport "r.html" { hidetask %s }'%(declarations, expression))
	return project.reports[0].element.hide_task


class TestLogicalTree(unittest.TestCase):
	def test_00_fold(self):
		a, b, c = LogicalFlag('a'), LogicalFlag('b'), LogicalFlag('c')
		self.assertEqual('a', str(fold(a, [])))
		self.assertEqual('((a & b) | c)', str(fold(a, [('&', b), ('|', c)])))
		self.assertEqual('(~a & b)', str(fold(LogicalOperation(a, '~'), [('&', b)])))

	def test_01_rendering_of_literals(self):
		self.assertEqual('"x"', str(LogicalOperation('x')))
		self.assertEqual('2024-01-02-00:00', str(LogicalOperation(datetime.datetime(2024, 1, 2))))
		self.assertEqual('(effort[1] >= 5)', str(LogicalOperation(LogicalAttribute('effort', 1), '>=', LogicalOperation(5))))


class TestLogicalSyntax(unittest.TestCase):
	def test_00_negation_binds_tightly(self):
		self.assertEqual('(~a & b)', str(hidetask('~a & b')))

	def test_01_left_to_right(self):
		self.assertEqual('((a & b) | c)', str(hidetask('a & b | c')))
		self.assertEqual('(a & (b | c))', str(hidetask('a & (b | c)')))

	def test_02_operands(self):
		self.assertEqual('((effort[0] > 5) | "x")', str(hidetask('plan.effort > 5 | "x"')))
		self.assertEqual('(start[0] <= 2024-01-15-00:00)', str(hidetask('plan.start <= 2024-01-15')))
		self.assertEqual('~~a', str(hidetask('~~a')))

	def test_03_source_position(self):
		expression = hidetask('a')
		self.assertEqual(3, expression.line)

	def test_04_checks(self):
		for expression, code in [
			('nope', 'operand_unkn_flag'),
			('nope.effort', 'operand_unkn_scen'),
			('plan.effort.more', 'operand_attribute'),
			('a &', 'unexpected_token'),
		]:
			with self.subTest(expression=expression):
				with self.assertRaises(ParseAborted) as cm: hidetask(expression)
				self.assertEqual(code, cm.exception.code)


if __name__ == '__main__':
	unittest.main()
