"""
Scenarios: ``scenario plan "Plan" { scenario delayed "Delayed" { projection } }``.

There is one top-level scenario. A project starts out with a default one called
``plan``; the first top-level declaration in the file replaces it. Nested scenarios
inherit every value they do not set themselves.
"""

from ..grammar.builders import options_rule
from ..grammar.registry import Registry
from ..grammar.symbols import K, N, STRING
from ..model.properties import Scenario

def declare(grammar:Registry):
	grammar.define_rule('scenario')
	@grammar.pattern('scenario', N('scenarioHeader'), N('scenarioBody'), keyword='scenario', doc="""
		Declares a project scenario. A scenario nested in another one inherits all
		inheritable values from the enclosing scenario, and can override them to create a
		slightly different variant of its parent. This is useful for plan/actual
		comparisons and what-if analysis.
	""")
	def scenario(ctx, header, body): ctx.close_property()

	grammar.define_rule('scenarioHeader')
	@grammar.pattern('scenarioHeader', K('scenario'), N('newId'), STRING, args={
		1:('id', 'The ID of the scenario'),
		2:('name', 'The name of the scenario'),
	})
	def scenario_header(ctx, id, name):
		project = ctx.project
		parent = ctx.current(Scenario)
		if parent is None:
			if not project.default_scenario:
				ctx.error('scenario_top_level', "There can only be one top-level scenario; %s must be nested."%id)
			project.replace_default_scenario()
		elif id in project.scenarios:
			ctx.error('scenario_exists', "Scenario %s has already been defined."%id)
		node = Scenario(project, id, name, parent)
		node.location = ctx.location
		node.inherit_attributes()
		ctx.open_property(node)
		return node

	options_rule(grammar, 'scenarioBody', 'scenarioAttributes')
	grammar.define_rule('scenarioAttributes', optional=True, repeatable=True)
	@grammar.pattern('scenarioAttributes', K('projection'), N('projection'), keyword='projection', doc="""
		Enables the projection mode for the scenario: tasks are scheduled taking the
		bookings into account, and the remaining work is scheduled from the current date.
	""")
	def projection(ctx, options): ctx.property.set('projection', True)

	grammar.pattern('scenarioAttributes', N('scenario'))(None)

	@grammar.pattern('scenarioAttributes', K('enabled'), keyword='enabled', doc="The scenario is scheduled and reported.")
	def enabled(ctx): ctx.property.set('enabled', True)

	@grammar.pattern('scenarioAttributes', K('disabled'), keyword='disabled', doc="""
		The scenario is ignored for scheduling. Reports drop it from their scenario lists.
	""")
	def disabled(ctx): ctx.property.set('enabled', False)

	options_rule(grammar, 'projection', 'projectionAttributes')
	grammar.define_rule('projectionAttributes', optional=True, repeatable=True)
	@grammar.pattern('projectionAttributes', K('sloppy'), keyword='projection.sloppy', doc="""
		In sloppy mode tasks with no bookings will be filled from the original start.
	""")
	def sloppy(ctx): ctx.property.set('strict', False)

	@grammar.pattern('projectionAttributes', K('strict'), keyword='projection.strict', doc="""
		In strict mode all tasks will be filled starting with the current date. No bookings
		will be added prior to the current date.
	""")
	def strict(ctx): ctx.property.set('strict', True)
