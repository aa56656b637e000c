"""
Shorthand for the shapes that come up over and over in a real grammar.

None of these are engine concepts. Each one is a handful of ``define_rule`` and
``add_pattern`` calls with a sensible action, and you could write them out longhand.
"""

from .registry import Registry
from .symbols import K, N, Symbol, is_void

def more_name(name:str) -> str:
	""" 'flagList' -> 'moreFlagList' """
	return 'more' + name[:1].upper() + name[1:]

def comma_list_rule(grammar:Registry, name:str, item:Symbol):
	"""
	Zero or more repetitions of ``, item``. The rule's value is the list of item values.
	"""
	grammar.define_rule(name, optional=True, repeatable=True)
	grammar.add_pattern(name, [K(','), item], _first_value)

def list_rule(grammar:Registry, name:str, item:Symbol):
	"""
	One item, then any number of comma-separated items. The value is a Python list.
	The helper rule for the tail is named like ``moreThings``.
	"""
	tail = more_name(name)
	comma_list_rule(grammar, tail, item)
	grammar.define_rule(name)
	grammar.add_pattern(name, [item, N(tail)], _prepend)

def options_rule(grammar:Registry, name:str, attributes:str):
	"""
	An optional brace-delimited body containing the named attribute rule.
	The value is whatever the attribute rule yields (a list, if it is repeatable),
	or None if the braces are absent.
	"""
	grammar.define_rule(name, optional=True)
	grammar.add_pattern(name, [K('{'), N(attributes), K('}')], _first_value)

def single_pattern(grammar:Registry, rule:str, symbol:Symbol, doc=None):
	"""
	A pattern of just one symbol, yielding the symbol's value.
	For a keyword, the value is the keyword's own text.
	"""
	if is_void(symbol):
		text = symbol.text
		return grammar.add_pattern(rule, [symbol], lambda ctx: text, doc)
	return grammar.add_pattern(rule, [symbol], _first_value, doc)

def _first_value(ctx, value): return value

def _prepend(ctx, head, tail): return [head] + tail
