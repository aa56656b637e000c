"""
The little filter language of ``hidetask``, ``hideresource`` and ``rolluptask``.

	operation := operand (operator operand)*
	operand   := ( operation ) | ~ operand | scenario.attribute | DATE | flag | INTEGER | STRING

Binary operators chain strictly left to right with no precedence among them. The
tilde applies only to the operand right after it, so it binds tighter than anything.
"""

from ..grammar.registry import Registry
from ..grammar.symbols import K, N, ABSOLUTE_ID, DATE, ID, INTEGER, STRING
from ..model.logical import LogicalOperation, LogicalAttribute, LogicalFlag, LogicalExpression, BINARY_OPERATORS, NEGATION, fold

OPERATOR_NAMES = {
	'|': 'or', '&': 'and', '>': 'greater than', '<': 'smaller than',
	'=': 'equal', '>=': 'greater-or-equal', '<=': 'smaller-or-equal',
}

OPERAND_DOC = """
	An operand is a date, a text string or a number. It can also be the name of a
	declared flag, a scenario-qualified attribute, a negated operand (prefixed with ~),
	or another operation enclosed in parentheses.
"""

def declare(grammar:Registry):
	grammar.define_rule('logicalExpression')
	@grammar.pattern('logicalExpression', N('operation'), keyword='logicalexpression', doc="""
		A logical expression combines operands with '&' (and), '|' (or), '>', '<', '=',
		'>=' and '<='. It is evaluated from left to right; '~' (not) binds tighter than
		the other operators. Use parentheses to group operations differently.
	""")
	def logical_expression(ctx, operation):
		location = ctx.location
		return LogicalExpression(operation, location and location.filename, location and location.line)

	grammar.define_rule('operation')
	grammar.pattern('operation', N('operand'), N('operatorAndOperand'), args={0:('operand', OPERAND_DOC)})(lambda ctx, first, rest: fold(first, rest))

	grammar.define_rule('operatorAndOperand', optional=True, repeatable=True)
	grammar.pattern('operatorAndOperand', N('operator'), N('operand'), args={1:('operand', OPERAND_DOC)})(None)

	grammar.define_rule('operator')
	for symbol in BINARY_OPERATORS:
		grammar.pattern('operator', K(symbol), doc="The '%s' operator"%OPERATOR_NAMES[symbol])(None)

	grammar.define_rule('operand')
	grammar.pattern('operand', K('('), N('operation'), K(')'))(None)

	@grammar.pattern('operand', K(NEGATION), N('operand'))
	def negation(ctx, operand): return LogicalOperation(operand, NEGATION)

	@grammar.pattern('operand', ABSOLUTE_ID)
	def attribute(ctx, text):
		if text.count('.') > 1:
			ctx.error('operand_attribute', 'Attributes must be specified as <scenarioID>.<attribute>')
		scenario, name = text.split('.')
		idx = ctx.project.scenario_idx(scenario)
		if idx is None: ctx.error('operand_unkn_scen', "Unknown scenario ID %s"%scenario)
		return LogicalAttribute(name, idx)

	@grammar.pattern('operand', ID)
	def flag(ctx, name):
		if name not in ctx.project['flags']: ctx.error('operand_unkn_flag', "Undeclared flag %s"%name)
		return LogicalFlag(name)

	for terminal in (DATE, INTEGER, STRING):
		grammar.pattern('operand', terminal)(_literal)

def _literal(ctx, value): return LogicalOperation(value)
