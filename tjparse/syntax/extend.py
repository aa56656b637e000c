"""
User-defined attributes: ``extend task { text Foo "Foo" { inherit scenariospecific } }``.

Declaring an attribute changes the language for the rest of the parse. The
declaration registers an AttributeDefinition with the tasks (or resources), makes the
name usable as a report column, and adds a pattern ``Foo <value>`` to the attribute
rules of the property. Scenario specific attributes go to the rule that can follow a
scenario prefix, and their values are stored for the current scenario. The others are
stored once per property.

The new keyword is the attribute's name, which must start with a capital letter.
All built-in keywords are lower case, so user names never collide with them.
"""

import logging

from ..grammar.builders import options_rule
from ..grammar.registry import Registry, PatternDoc
from ..grammar.symbols import K, N, STRING, DATE, ID
from ..model.attributes import AttributeDefinition, AttributeType
from ..model.scheduling import Reference

logger = logging.getLogger(__name__)

# kind of property -> (attribute rule, scenario attribute rule, property set name)
EXTENSIBLE = {
	'task': ('taskAttributes', 'taskScenarioAttributes', 'tasks'),
	'resource': ('resourceAttributes', 'resourceScenarioAttributes', 'resources'),
}

def _storing(name:str, scenario_specific:bool, convert):
	""" The action for a synthesized attribute pattern. """
	if scenario_specific:
		def store(ctx, *values): ctx.property[name, ctx.scenario_idx] = convert(*values)
	else:
		def store(ctx, *values): ctx.property.set(name, convert(*values))
	return store

def _reference(url, labels):
	return Reference(url, labels[-1] if labels else None)

VALUE_SYMBOLS = {
	AttributeType.DATE: ([DATE], lambda moment: moment),
	AttributeType.TEXT: ([STRING], lambda text: text),
	AttributeType.REFERENCE: ([STRING, N('referenceBody')], _reference),
}

def extend_property_set(ctx, attribute_type:AttributeType, name:str, title:str, options) -> AttributeDefinition:
	"""
	Do everything a declaration entails, in this order: check, define, make reportable,
	make parseable. A failure in the check leaves the grammar untouched.
	"""
	options = options or []
	property_set = ctx.property_set
	if property_set.knows(name):
		ctx.error('extend_attr_redefined', "The %s attribute %s is already defined."%(property_set.kind, name))
	definition = AttributeDefinition(
		name, title, attribute_type,
		inherited='inherit' in options,
		scenario_specific='scenariospecific' in options,
		user_defined=True,
	)
	property_set.add_attribute_type(definition)

	grammar = ctx.grammar
	keyword = K(name)
	if keyword not in grammar.first('reportableAttributes'):
		grammar.extend('reportableAttributes', [keyword], lambda ctx: name, PatternDoc(name, title))

	symbols, convert = VALUE_SYMBOLS[attribute_type]
	target = ctx.rule_to_extend_with_scenario if definition.scenario_specific else ctx.rule_to_extend
	grammar.extend(target, [keyword] + symbols, _storing(name, definition.scenario_specific, convert), PatternDoc(name, title))
	logger.debug("%s attribute %s (%s) added to rule %s", property_set.kind, name, attribute_type.value, target)
	return definition


def declare(grammar:Registry):
	grammar.define_rule('extendPropertyId')
	grammar.pattern('extendPropertyId', K('task'))(None)
	grammar.pattern('extendPropertyId', K('resource'))(None)

	grammar.define_rule('extendProperty')
	@grammar.pattern('extendProperty', N('extendPropertyId'))
	def extend_property(ctx, kind):
		ctx.rule_to_extend, ctx.rule_to_extend_with_scenario, set_name = EXTENSIBLE[kind]
		ctx.property_set = getattr(ctx.project, set_name)

	options_rule(grammar, 'extendBody', 'extendAttributes')
	grammar.define_rule('extendAttributes', optional=True, repeatable=True)
	for keyword, attribute_type, text in [
		('date', AttributeType.DATE, 'Extend the property with a new attribute of type date.'),
		('reference', AttributeType.REFERENCE, """
			Extend the property with a new attribute of type reference. A reference is a URL
			and an optional text that will be shown instead of the URL if needed.
		"""),
		('text', AttributeType.TEXT, """
			Extend the property with a new attribute of type text. A text is a character
			sequence enclosed in single or double quotes.
		"""),
	]:
		grammar.pattern('extendAttributes', K(keyword), N('extendId'), STRING, N('extendOptionsBody'), keyword='extend.'+keyword, doc=text, args={
			2:('name', 'The name of the new attribute. It is used as header in report columns and the like.'),
		})(_declaring(attribute_type))

	grammar.define_rule('extendId')
	@grammar.pattern('extendId', ID, args={0:('id', 'The ID of the new attribute. It can be used like the built-in IDs.')})
	def extend_id(ctx, name):
		if not name[:1].isupper() or not name[:1].isascii():
			ctx.error('extend_id_cap', "User defined attributes IDs must start with a capital letter")
		return name

	options_rule(grammar, 'extendOptionsBody', 'extendOptions')
	grammar.define_rule('extendOptions', optional=True, repeatable=True)
	grammar.pattern('extendOptions', K('inherit'), keyword='extend.inherit', doc="""
		The attribute is inherited by child properties from their parent property.
	""")(None)
	grammar.pattern('extendOptions', K('scenariospecific'), keyword='extend.scenariospecific', doc="""
		The attribute is scenario specific. A different value can be set for each scenario.
	""")(None)

	options_rule(grammar, 'referenceBody', 'referenceAttributes')
	grammar.define_rule('referenceAttributes', optional=True, repeatable=True)
	grammar.pattern('referenceAttributes', K('label'), STRING, args={1:('text', 'Shown instead of the URL')})(None)

def _declaring(attribute_type):
	def declaration(ctx, name, title, options):
		extend_property_set(ctx, attribute_type, name, title, options)
	return declaration
