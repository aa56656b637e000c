"""
Resources, and the ``supplement`` statement that reopens a task or resource declared
earlier so more attributes can be added to it.
"""

from ..grammar.builders import options_rule
from ..grammar.registry import Registry
from ..grammar.symbols import K, N, STRING
from ..model.properties import Resource
from ..model.scheduling import Booking, Vacation

def declare(grammar:Registry):
	grammar.define_rule('resource')
	@grammar.pattern('resource', N('resourceHeader'), N('resourceBody'), keyword='resource', doc="""
		Tasks with an effort specification need resources to do the work. Use this
		property to define resources or groups of resources.
	""")
	def resource(ctx, header, body): ctx.close_property()

	grammar.define_rule('resourceHeader')
	@grammar.pattern('resourceHeader', K('resource'), N('newId'), STRING, args={
		1:('id', 'The ID of the resource. Resource IDs must be unique within the whole project.'),
		2:('name', 'The name of the resource'),
	})
	def resource_header(ctx, id, name):
		if id in ctx.project.resources:
			ctx.error('resource_exists', "Resource %s has already been defined."%id)
		node = Resource(ctx.project, id, name, ctx.current(Resource))
		node.location = ctx.location
		node.inherit_attributes()
		ctx.open_property(node)
		return node

	options_rule(grammar, 'resourceBody', 'resourceAttributes')
	grammar.define_rule('resourceAttributes', optional=True, repeatable=True)
	grammar.pattern('resourceAttributes', N('resource'))(None)
	grammar.pattern('resourceAttributes', N('resourceScenarioAttributes'))(None)
	@grammar.pattern('resourceAttributes', N('scenarioId'), N('resourceScenarioAttributes'))
	def scenario_prefixed(ctx, ignore, value): ctx.scenario_idx = 0

	rule = 'resourceScenarioAttributes'
	grammar.define_rule(rule)
	@grammar.pattern(rule, K('flags'), N('flagList'), keyword='resource.flags', doc="""
		Attach a set of flags. Flags can be used in logical expressions to filter
		properties from reports.
	""")
	def flags(ctx, names):
		ctx.property['flags', ctx.scenario_idx] = ctx.property['flags', ctx.scenario_idx] + names

	grammar.pattern(rule, K('booking'), N('resourceBooking'), keyword='booking', doc="""
		Report completed work. When a scenario is scheduled in projection mode, only the
		work reported with bookings counts as done, and the rest is scheduled from now.
	""")(None)

	@grammar.pattern(rule, K('vacation'), N('vacationName'), N('intervals'), keyword='resource.vacation', doc="""
		A vacation period for the resource. It can also block out the time before a
		resource joined or after it left.
	""")
	def vacation(ctx, name, intervals):
		vacations = [Vacation(name, iv) for iv in intervals]
		ctx.property['vacations', ctx.scenario_idx] = ctx.property['vacations', ctx.scenario_idx] + vacations

	grammar.pattern(rule, N('workinghours'))(None)

	grammar.define_rule('resourceBooking')
	@grammar.pattern('resourceBooking', N('resourceBookingHeader'), N('bookingBody'))
	def resource_booking(ctx, booking, body):
		booking.task.add_booking(ctx.scenario_idx, booking)

	grammar.define_rule('resourceBookingHeader')
	@grammar.pattern('resourceBookingHeader', N('taskId'), N('intervals'), args={0:('id', 'Absolute ID of a defined task')})
	def resource_booking_header(ctx, task, intervals):
		booking = ctx.booking = Booking(ctx.property, task, intervals)
		booking.location = ctx.location
		return booking

	grammar.define_rule('supplement')
	@grammar.pattern('supplement', N('supplementResource'), N('resourceBody'))
	def supplement_resource(ctx, resource, body): ctx.close_property()
	@grammar.pattern('supplement', N('supplementTask'), N('taskBody'))
	def supplement_task(ctx, task, body): ctx.close_property()

	grammar.define_rule('supplementResource')
	@grammar.pattern('supplementResource', K('resource'), N('resourceId'))
	def reopen_resource(ctx, node): ctx.open_property(node)

	grammar.define_rule('supplementTask')
	@grammar.pattern('supplementTask', K('task'), N('taskId'))
	def reopen_task(ctx, node):
		ctx.open_property(node)
		ctx.scenario_idx = 0
