""" The grammar registry: declaring rules, FIRST sets, validation, and growth in mid-flight. """
import unittest
from tjparse.grammar.registry import Registry
from tjparse.grammar.interface import GrammarFault
from tjparse.grammar.symbols import K, N, ID, INTEGER, STRING, Keyword, NonTerminal
from tjparse.grammar import builders


def small_grammar():
	g = Registry()
	g.define_rule('body', optional=True)
	g.define_rule('attrs', optional=True, repeatable=True)
	g.add_pattern('body', [K('{'), N('attrs'), K('}')])
	g.pattern('attrs', K('note'), STRING)(None)
	g.pattern('attrs', K('effort'), INTEGER)(None)
	return g


class TestRegistry(unittest.TestCase):
	def test_00_symbols_of_different_classes_differ(self):
		self.assertNotEqual(K('task'), N('task'))
		self.assertEqual(2, len({K('task'), N('task')}))
		self.assertEqual(Keyword('task'), K('task'))
		self.assertEqual(NonTerminal('task'), N('task'))

	def test_01_define_and_lookup(self):
		g = small_grammar()
		self.assertIn('attrs', g)
		rule = g.lookup('attrs')
		self.assertTrue(rule.optional)
		self.assertTrue(rule.repeatable)
		self.assertEqual(2, len(rule.patterns))
		self.assertEqual(1, rule.patterns[0].arity)

	def test_02_lookup_unknown_rule_is_a_fault(self):
		with self.assertRaises(GrammarFault): small_grammar().lookup('nonesuch')

	def test_03_redeclaring_a_rule_is_a_fault(self):
		g = small_grammar()
		with self.assertRaises(GrammarFault): g.define_rule('attrs')

	def test_04_forgotten_action(self):
		g = small_grammar()
		g.pattern('attrs', K('length'), INTEGER)
		with self.assertRaises(AssertionError):
			g.pattern('attrs', K('duration'), INTEGER)

	def test_05_first_sets_see_through_nullable_rules(self):
		g = small_grammar()
		g.define_rule('task')
		g.add_pattern('task', [N('body'), K('end')])
		self.assertTrue(g.nullable('body'))
		self.assertFalse(g.nullable('task'))
		self.assertEqual({K('{'), K('end')}, set(g.first('task')))
		self.assertEqual(["'effort'", "'note'"], g.expected('attrs'))

	def test_06_first_sets_do_not_confuse_rules_with_keywords(self):
		g = Registry()
		g.define_rule('statement')
		g.define_rule('task')
		g.add_pattern('statement', [N('task')])
		g.add_pattern('task', [K('task'), ID])
		self.assertEqual({K('task')}, set(g.first('statement')))

	def test_07_validate_finds_undeclared_rules(self):
		g = small_grammar()
		g.add_pattern('attrs', [K('depends'), N('taskList')])
		with self.assertRaises(GrammarFault): g.validate()

	def test_08_validate_finds_ambiguity(self):
		g = small_grammar()
		g.add_pattern('attrs', [K('note'), ID])
		with self.assertRaises(GrammarFault): g.validate()

	def test_09_keyword_and_identifier_may_share_a_position(self):
		g = Registry()
		g.define_rule('item')
		g.add_pattern('item', [K('tree')])
		g.add_pattern('item', [ID])
		g.validate()

	def test_10_extend_is_visible_immediately(self):
		g = small_grammar()
		self.assertNotIn(K('Foo'), g.first('attrs'))
		g.extend('attrs', [K('Foo'), STRING])
		self.assertIn(K('Foo'), g.first('attrs'))

	def test_11_extend_refuses_a_colliding_pattern(self):
		g = small_grammar()
		with self.assertRaises(GrammarFault): g.extend('attrs', [K('note'), INTEGER])

	def test_12_keyword_docs(self):
		g = small_grammar()
		g.pattern('attrs', K('length'), INTEGER, keyword='length', doc="""
			How long it takes,
			in working time.
		""")(None)
		docs = g.keyword_docs()
		self.assertEqual(['length'], [keyword for keyword, doc in docs])
		self.assertEqual("How long it takes,\nin working time.", docs[0][1].text)

	def test_13_marking_rules(self):
		g = Registry()
		g.define_rule('unit')
		g.add_pattern('unit', [K('d')])
		self.assertFalse(g.nullable('unit'))
		g.mark_optional('unit')
		g.mark_repeatable('unit')
		self.assertTrue(g.nullable('unit'))
		self.assertTrue(g.lookup('unit').repeatable)

	def test_14_builders(self):
		g = Registry()
		g.define_rule('thing')
		builders.single_pattern(g, 'thing', ID)
		builders.list_rule(g, 'things', N('thing'))
		builders.options_rule(g, 'thingBody', 'things')
		self.assertIn('moreThings', g)
		self.assertTrue(g.lookup('moreThings').repeatable)
		self.assertTrue(g.lookup('thingBody').optional)
		g.validate()


if __name__ == '__main__':
	unittest.main()
