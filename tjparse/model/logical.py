"""
Logical expressions, as used by report filters such as ``hidetask``.

The parser builds the tree; reports evaluate it later, per property and scenario.
Each binary node holds exactly one operator. Operators have no precedence among
themselves: a chain folds strictly left to right, so ``A & B | C`` becomes
``((A & B) | C)``. Negation applies to the operand right after it.

``str()`` of a tree is fully parenthesized, which makes the grouping easy to see
in diagnostics and tests.
"""

import datetime

BINARY_OPERATORS = ('|', '&', '>', '<', '=', '>=', '<=')
NEGATION = '~'

class LogicalOperation:
	"""
	With no operator, this just wraps operand1 (a literal value or another node).
	With '~', it negates operand1. Otherwise it combines operand1 and operand2.
	"""
	def __init__(self, operand1, operator=None, operand2=None):
		assert operator in (None, NEGATION) or operator in BINARY_OPERATORS, operator
		assert (operand2 is None) == (operator in (None, NEGATION))
		self.operand1 = operand1
		self.operator = operator
		self.operand2 = operand2

	def __str__(self):
		if self.operator is None: return _render(self.operand1)
		if self.operator == NEGATION: return NEGATION + _render(self.operand1)
		return "(%s %s %s)"%(_render(self.operand1), self.operator, _render(self.operand2))

	def __repr__(self): return "<LogicalOperation %s>"%self

class LogicalAttribute:
	""" The value of some attribute in a particular scenario, written ``scenario.attribute``. """
	def __init__(self, attribute:str, scenario_idx:int):
		self.attribute = attribute
		self.scenario_idx = scenario_idx

	def __str__(self): return "%s[%d]"%(self.attribute, self.scenario_idx)

class LogicalFlag:
	def __init__(self, name:str):
		self.name = name

	def __str__(self): return self.name

class LogicalExpression:
	""" The root of a tree, remembering where it was written. """
	def __init__(self, operation:LogicalOperation, source_file=None, line=None):
		self.operation = operation
		self.source_file = source_file
		self.line = line

	def __str__(self): return str(self.operation)
	def __repr__(self): return "<LogicalExpression %s at %s:%s>"%(self, self.source_file, self.line)

def fold(first, rest) -> LogicalOperation:
	""" ``rest`` is a sequence of (operator, operand) pairs. """
	operation = first if isinstance(first, LogicalOperation) else LogicalOperation(first)
	for operator, operand in rest:
		operation = LogicalOperation(operation, operator, operand)
	return operation

def _render(operand) -> str:
	if isinstance(operand, str): return '"%s"'%operand
	if isinstance(operand, datetime.datetime): return operand.strftime('%Y-%m-%d-%H:%M')
	return str(operand)
