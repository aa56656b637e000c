""" The engine against hand-built grammars and pre-scanned tokens. """
import unittest
from tjparse.grammar.engine import Engine, Match, Failure
from tjparse.grammar.registry import Registry
from tjparse.grammar.interface import SemanticError
from tjparse.grammar.symbols import K, N, ID, INTEGER, STRING
from tjparse.scanning.tokens import TokenList, TokenKind
from tjparse.support.failureprone import Diagnostic, Severity, ErrorKind

def word(text): return (TokenKind.ID, text)
def lit(text): return (TokenKind.LITERAL, text)
def num(n): return (TokenKind.INTEGER, n)
def text(s): return (TokenKind.STRING, s)

def settings_grammar():
	g = Registry()
	g.define_rule('settings', optional=True, repeatable=True)
	g.pattern('settings', K('set'), ID, INTEGER)(lambda ctx, name, value: (name, value))
	g.pattern('settings', K('flag'))(None)
	g.pattern('settings', K('pair'), STRING, STRING)(None)
	g.define_rule('block')
	g.pattern('block', K('{'), N('settings'), K('}'))(None)
	return g

def run(grammar, rule, tokens):
	return Engine(grammar, TokenList(tokens)).parse(rule, None)


class TestEngine(unittest.TestCase):
	def test_00_smoke_test(self):
		outcome = run(settings_grammar(), 'settings', [word('set'), word('x'), num(1), word('set'), word('y'), num(2)])
		self.assertIsInstance(outcome, Match)
		self.assertEqual([('x', 1), ('y', 2)], outcome.value)

	def test_01_values_without_actions(self):
		outcome = run(settings_grammar(), 'settings', [word('flag'), word('pair'), text('a'), text('b')])
		self.assertEqual(['flag', ('a', 'b')], outcome.value)
		outcome = run(settings_grammar(), 'block', [lit('{'), word('flag'), lit('}')])
		self.assertEqual(['flag'], outcome.value)

	def test_02_optional_rules(self):
		g = settings_grammar()
		self.assertEqual(Match([], False), Engine(g, TokenList([])).match_rule('settings', None))
		g.define_rule('maybe', optional=True)
		g.pattern('maybe', K('yes'))(None)
		self.assertEqual(Match(None, False), Engine(g, TokenList([word('no')])).match_rule('maybe', None))

	def test_03_unexpected_token(self):
		outcome = run(settings_grammar(), 'block', [lit('('), lit(')')])
		self.assertIsInstance(outcome, Failure)
		self.assertEqual('unexpected_token', outcome.code)
		self.assertIs(ErrorKind.SYNTAX, outcome.diagnostic.kind)

	def test_04_unexpected_eof(self):
		outcome = run(settings_grammar(), 'block', [lit('{'), word('set'), word('x')])
		self.assertEqual('unexpected_eof', outcome.code)

	def test_05_unknown_attribute(self):
		outcome = run(settings_grammar(), 'block', [lit('{'), word('Foo'), text('bar'), lit('}')])
		self.assertEqual('unknown_attribute', outcome.code)
		self.assertIn("'Foo'", outcome.diagnostic.message)
		self.assertIn("'set'", outcome.diagnostic.message)
		self.assertIn("'}'", outcome.diagnostic.message)

	def test_06_trailing_input(self):
		outcome = run(settings_grammar(), 'block', [lit('{'), lit('}'), word('flag')])
		self.assertEqual('unexpected_token', outcome.code)
		self.assertIn('end of input', outcome.diagnostic.message)

	def test_07_semantic_errors_become_failures(self):
		g = Registry()
		g.define_rule('percent')
		@g.pattern('percent', INTEGER)
		def percent(ctx, value):
			if value > 100: raise SemanticError(Diagnostic(Severity.ERROR, 'too_big', 'Too big'))
			return value
		self.assertEqual(50, run(g, 'percent', [num(50)]).value)
		self.assertEqual('too_big', run(g, 'percent', [num(150)]).code)

	def test_08_grammar_grows_during_the_parse(self):
		g = Registry()
		store = {}
		g.define_rule('statements', optional=True, repeatable=True)
		@g.pattern('statements', K('declare'), ID)
		def declare(ctx, name):
			def assign(ctx, value): store[name] = value
			g.extend('statements', [K(name), INTEGER], assign)
		g.validate()
		tokens = [word('declare'), word('Foo'), word('Foo'), num(3), word('declare'), word('Bar'), word('Bar'), num(4)]
		outcome = run(g, 'statements', tokens)
		self.assertIsInstance(outcome, Match)
		self.assertEqual({'Foo': 3, 'Bar': 4}, store)

	def test_09_keyword_beats_identifier(self):
		g = Registry()
		g.define_rule('item')
		g.pattern('item', K('tree'))(lambda ctx: 'TREE')
		g.pattern('item', ID)(lambda ctx, name: 'id:' + name)
		self.assertEqual('TREE', run(g, 'item', [word('tree')]).value)
		self.assertEqual('id:start', run(g, 'item', [word('start')]).value)

	def test_10_token_value_must_match_its_kind(self):
		with self.assertRaises(TypeError) as cm:
			run(settings_grammar(), 'settings', [word('set'), word('x'), (TokenKind.INTEGER, '12')])
		self.assertIn('INTEGER', str(cm.exception))


if __name__ == '__main__':
	unittest.main()
