"""
Tasks, and everything that can be said about one: allocations, bookings,
dependencies, durations, dates and the like.

Most task attributes are scenario specific. They live in ``taskScenarioAttributes``,
which can be reached either directly (the values go to the current scenario, normally
the top one) or after a scenario prefix such as ``delayed:``, which switches the
current scenario for just the one attribute.
"""

from ..grammar.builders import list_rule, comma_list_rule, options_rule
from ..grammar.registry import Registry
from ..grammar.symbols import K, N, STRING, INTEGER, ID, ABSOLUTE_ID, RELATIVE_ID
from ..model.properties import Task
from ..model.scheduling import Allocation, Booking, SelectionMode, TaskDependency

def resolve_relative_id(ctx, id:str) -> str:
	""" Each leading '!' moves the scope one level up from the current task. """
	task = ctx.current(Task)
	while task is not None and id.startswith('!'):
		id = id[1:]
		task = task.parent
	if id.startswith('!'):
		ctx.error('too_many_bangs', "Too many '!' for relative task in this context.", ctx.property)
	return id if task is None else task.full_id + '.' + id

def _allocation(ctx, resource, attributes) -> Allocation:
	candidates = [resource]
	options = {}
	for key, value in attributes or ():
		if key == 'alternative': candidates.extend(value)
		else: options[key] = value
	return Allocation(tuple(candidates), **options)

def declare(grammar:Registry):
	grammar.define_rule('task')
	@grammar.pattern('task', N('taskHeader'), N('taskBody'), keyword='task', doc="""
		Tasks are the central elements of a project plan. Depending on its attributes a
		task is a container, a milestone or a regular leaf task which may have resources
		assigned. Dependencies force a certain sequence of tasks.
	""")
	def task(ctx, header, body): ctx.close_property()

	grammar.define_rule('taskHeader')
	@grammar.pattern('taskHeader', K('task'), N('newId'), STRING, args={
		1:('id', 'The ID of the task'),
		2:('name', 'The name of the task'),
	})
	def task_header(ctx, id, name):
		parent = ctx.current(Task)
		full_id = id if parent is None else parent.full_id + '.' + id
		if full_id in ctx.project.tasks:
			ctx.error('task_exists', "Task %s has already been defined."%full_id, parent)
		node = Task(ctx.project, id, name, parent)
		node.location = ctx.location
		node.inherit_attributes()
		ctx.open_property(node)
		ctx.scenario_idx = 0
		return node

	options_rule(grammar, 'taskBody', 'taskAttributes')
	grammar.define_rule('taskAttributes', optional=True, repeatable=True)
	@grammar.pattern('taskAttributes', K('note'), STRING, keyword='task.note', doc="""
		Attach a note to the task. This is usually a more detailed specification of what
		the task is about.
	""")
	def note(ctx, text): ctx.property.set('note', text)
	grammar.pattern('taskAttributes', N('task'))(None)
	grammar.pattern('taskAttributes', N('taskScenarioAttributes'))(None)
	@grammar.pattern('taskAttributes', N('scenarioId'), N('taskScenarioAttributes'))
	def scenario_prefixed(ctx, ignore, value): ctx.scenario_idx = 0

	declare_scenario_attributes(grammar)
	declare_bookings(grammar)
	declare_dependencies(grammar)
	declare_allocations(grammar)

def declare_scenario_attributes(grammar:Registry):
	rule = 'taskScenarioAttributes'
	grammar.define_rule(rule)

	def accumulate(attribute):
		def action(ctx, values):
			ctx.property[attribute, ctx.scenario_idx] = ctx.property[attribute, ctx.scenario_idx] + values
		return action

	def assign(attribute, forward=None):
		def action(ctx, value):
			ctx.property[attribute, ctx.scenario_idx] = value
			if forward is not None: ctx.property['forward', ctx.scenario_idx] = forward
		return action

	def flag_on(attribute):
		def action(ctx): ctx.property[attribute, ctx.scenario_idx] = True
		return action

	grammar.pattern(rule, K('allocate'), N('resourceAllocations'), keyword='allocate', doc="""
		Specify which resources should be allocated to the task. The optional attributes
		control which resource is used and when exactly it is assigned to the task.
	""")(accumulate('allocate'))

	grammar.pattern(rule, K('booking'), N('taskBooking'), keyword='task.booking', doc="""
		Report already completed work by specifying the exact time intervals a certain
		resource has worked on this task.
	""")(None)

	@grammar.pattern(rule, K('complete'), N('number'), keyword='complete', doc="""
		Specifies what percentage of the task is already completed. It is meant for
		documentation and tracking; the scheduler ignores it.
	""", args={1:('percent', 'The percent value. It must be between 0 and 100.')})
	def complete(ctx, percent):
		if percent < 0 or percent > 100:
			ctx.error('task_complete', "Complete value must be between 0 and 100", ctx.property)
		ctx.property['complete', ctx.scenario_idx] = percent

	@grammar.pattern(rule, K('depends'), N('taskDepList'), keyword='depends', doc="""
		The task cannot start before the specified tasks have been finished. This also
		sets the scheduling policy to asap.
	""")
	def depends(ctx, dependencies):
		accumulate('depends')(ctx, dependencies)
		ctx.property['forward', ctx.scenario_idx] = True

	grammar.pattern(rule, K('duration'), N('calendarDuration'), keyword='duration', doc="""
		The time the task occupies its resources. This is calendar time, not working time:
		7d means one week.
	""", also=('effort', 'length'))(assign('duration'))

	@grammar.pattern(rule, K('effort'), N('workingDuration'), keyword='effort', doc="""
		The effort needed to complete the task. An effort of 4d can be done by two
		full-time resources in two days.
	""", also=('duration', 'length'))
	def effort(ctx, slots):
		if slots <= 0: ctx.error('effort_zero', "Effort value must be larger than 0", ctx.property)
		ctx.property['effort', ctx.scenario_idx] = slots

	grammar.pattern(rule, K('end'), N('valDate'), keyword='end', doc="""
		The end date of the task. This also sets the scheduling policy to alap.
	""")(assign('end', forward=False))

	grammar.pattern(rule, K('flags'), N('flagList'), keyword='task.flags', doc="""
		Attach a set of flags. Flags can be used in logical expressions to filter
		properties from reports.
	""")(accumulate('flags'))

	grammar.pattern(rule, K('length'), N('workingDuration'), keyword='length', doc="""
		The time the task occupies its resources, in working time: 7d means 7 working
		days, not one week.
	""", also=('duration', 'effort'))(assign('length'))

	for attribute, text in [
		('maxend', 'Specifies the maximum wanted end time of the task.'),
		('maxstart', 'Specifies the maximum wanted start time of the task.'),
	]:
		grammar.pattern(rule, K(attribute), N('valDate'), keyword=attribute, doc=text)(assign(attribute))

	grammar.pattern(rule, K('milestone'), keyword='milestone', doc="""
		Turns the task into a special task that has no duration.
	""")(flag_on('milestone'))

	for attribute, text in [
		('minend', 'Specifies the minimum wanted end time of the task.'),
		('minstart', 'Specifies the minimum wanted start time of the task.'),
	]:
		grammar.pattern(rule, K(attribute), N('valDate'), keyword=attribute, doc=text)(assign(attribute))

	@grammar.pattern(rule, K('period'), N('valInterval'), keyword='period', doc="""
		A shortcut for setting start and end at the same time. It does not change the
		scheduling direction. The period must be within the project time frame.
	""")
	def period(ctx, interval):
		ctx.property['start', ctx.scenario_idx] = interval.start
		ctx.property['end', ctx.scenario_idx] = interval.end

	@grammar.pattern(rule, K('precedes'), N('taskPredList'), keyword='precedes', doc="""
		The specified tasks cannot start before this task has been finished. This also
		sets the scheduling policy to alap.
	""")
	def precedes(ctx, followers):
		accumulate('precedes')(ctx, followers)
		ctx.property['forward', ctx.scenario_idx] = False

	@grammar.pattern(rule, K('priority'), INTEGER, keyword='priority', doc="""
		A task with higher priority is more likely to get the requested resources. The
		default priority is 500. Subtasks declared afterwards inherit it.
	""", args={1:('value', 'Priority value (0 - 1000)')})
	def priority(ctx, value):
		if value < 0 or value > 1000:
			ctx.error('task_priority', "Priority must have a value between 0 and 1000", ctx.property)
		ctx.property['priority', ctx.scenario_idx] = value

	grammar.pattern(rule, K('responsible'), N('resourceList'), keyword='responsible', doc="""
		The resources responsible for this task. For documentation purposes only.
	""")(assign('responsible'))

	grammar.pattern(rule, K('scheduled'), keyword='scheduled', doc="""
		The task can be ignored for scheduling in the scenario.
	""")(flag_on('scheduled'))

	@grammar.pattern(rule, K('scheduling'), N('schedulingDirection'), keyword='scheduling', doc="""
		Explicitly set the scheduling policy: asap schedules from start to end, alap from
		end to start.
	""", args={1:('policy', 'Possible values are asap or alap')})
	def scheduling(ctx, direction): ctx.property['forward', ctx.scenario_idx] = direction == 'asap'

	grammar.pattern(rule, K('start'), N('valDate'), keyword='start', doc="""
		The start date of the task. This also sets the scheduling policy to asap.
	""", also=('end', 'period', 'maxstart', 'minstart', 'scheduling'))(assign('start', forward=True))

	grammar.define_rule('schedulingDirection')
	grammar.pattern('schedulingDirection', K('alap'))(None)
	grammar.pattern('schedulingDirection', K('asap'))(None)

def declare_bookings(grammar:Registry):
	grammar.define_rule('taskBooking')
	@grammar.pattern('taskBooking', N('taskBookingHeader'), N('bookingBody'))
	def task_booking(ctx, booking, body):
		booking.task.add_booking(ctx.scenario_idx, booking)

	grammar.define_rule('taskBookingHeader')
	@grammar.pattern('taskBookingHeader', N('resourceId'), N('intervals'))
	def task_booking_header(ctx, resource, intervals):
		booking = ctx.booking = Booking(resource, ctx.property, intervals)
		booking.location = ctx.location
		return booking

	options_rule(grammar, 'bookingBody', 'bookingAttributes')
	grammar.define_rule('bookingAttributes', optional=True, repeatable=True)
	@grammar.pattern('bookingAttributes', K('overtime'), INTEGER, keyword='booking.overtime', doc="""
		Allows the booking to override working hours and vacations.
	""")
	def overtime(ctx, value):
		if value < 0 or value > 2:
			ctx.error('overtime_range', "Overtime value %d out of range (0 - 2)."%value, ctx.property)
		ctx.booking.overtime = value

	@grammar.pattern('bookingAttributes', K('sloppy'), INTEGER, keyword='booking.sloppy', doc="""
		Controls how strictly booking intervals are checked against vacations and other
		bookings.
	""")
	def sloppy(ctx, value):
		if value < 0 or value > 2:
			ctx.error('sloppy_range', "Sloppyness value %d out of range (0 - 2)."%value, ctx.property)
		ctx.booking.sloppy = value

def declare_dependencies(grammar:Registry):
	grammar.define_rule('taskDepId')
	grammar.pattern('taskDepId', ABSOLUTE_ID)(None)
	grammar.pattern('taskDepId', ID)(None)
	grammar.pattern('taskDepId', RELATIVE_ID)(resolve_relative_id)

	grammar.define_rule('taskDepHeader')
	@grammar.pattern('taskDepHeader', N('taskDepId'))
	def task_dep_header(ctx, id):
		ctx.task_dependency = TaskDependency(id, True)

	grammar.define_rule('taskPredHeader')
	@grammar.pattern('taskPredHeader', N('taskDepId'))
	def task_pred_header(ctx, id):
		ctx.task_dependency = TaskDependency(id, False)

	grammar.define_rule('taskDep')
	grammar.pattern('taskDep', N('taskDepHeader'), N('taskDepBody'), keyword='taskreference', doc="""
		Reference to another task.
	""", args={0:('id', """
		Absolute or relative ID of a task. An absolute ID is the IDs of all enclosing tasks
		and the task itself, joined by dots. A relative ID starts with one or more bangs;
		each moves the scope to the parent of the current task.
	""")})(_current_dependency)

	grammar.define_rule('taskPred')
	grammar.pattern('taskPred', N('taskPredHeader'), N('taskDepBody'))(_current_dependency)

	list_rule(grammar, 'taskDepList', N('taskDep'))
	list_rule(grammar, 'taskPredList', N('taskPred'))

	options_rule(grammar, 'taskDepBody', 'taskDepAttributes')
	grammar.define_rule('taskDepAttributes', optional=True, repeatable=True)
	@grammar.pattern('taskDepAttributes', K('gapduration'), N('calendarDuration'), keyword='gapduration', doc="""
		The minimum gap between the two tasks, in calendar time.
	""")
	def gap_duration(ctx, slots): ctx.task_dependency.gap_duration = slots

	@grammar.pattern('taskDepAttributes', K('gaplength'), N('workingDuration'), keyword='gaplength', doc="""
		The minimum gap between the two tasks, in working time.
	""")
	def gap_length(ctx, slots): ctx.task_dependency.gap_length = slots

	@grammar.pattern('taskDepAttributes', K('onend'), keyword='onend', doc="The target of the dependency is the end of the task.")
	def on_end(ctx): ctx.task_dependency.on_end = True

	@grammar.pattern('taskDepAttributes', K('onstart'), keyword='onstart', doc="The target of the dependency is the start of the task.")
	def on_start(ctx): ctx.task_dependency.on_end = False

def _current_dependency(ctx, header, body): return ctx.task_dependency

def declare_allocations(grammar:Registry):
	list_rule(grammar, 'resourceAllocations', N('resourceAllocation'))

	grammar.define_rule('resourceAllocation')
	grammar.pattern('resourceAllocation', N('resourceId'), N('allocationAttributes'), keyword='allocate.resources', args={
		0:('resource', 'A resource ID'),
	})(_allocation)

	options_rule(grammar, 'allocationAttributes', 'allocationAttribute')
	grammar.define_rule('allocationAttribute', optional=True, repeatable=True)
	@grammar.pattern('allocationAttribute', K('alternative'), N('resourceId'), N('moreAlternatives'), keyword='alternative', doc="""
		Resources that may be allocated instead of the first one.
	""")
	def alternative(ctx, first, rest): return ('alternative', [first] + rest)

	@grammar.pattern('allocationAttribute', K('select'), N('allocationSelectionMode'), keyword='select', doc="""
		Controls which resource is picked from an allocation and its alternatives.
	""")
	def select(ctx, mode): return ('selection_mode', mode)

	@grammar.pattern('allocationAttribute', K('persistent'), keyword='persistent', doc="""
		Once a resource is picked from the alternatives, it is used for the whole task.
	""")
	def persistent(ctx): return ('persistent', True)

	@grammar.pattern('allocationAttribute', K('mandatory'), keyword='mandatory', doc="""
		Resources are only allocated for a time slot when all mandatory resources are
		available.
	""")
	def mandatory(ctx): return ('mandatory', True)

	comma_list_rule(grammar, 'moreAlternatives', N('resourceId'))

	grammar.define_rule('allocationSelectionMode')
	for mode, text in [
		(SelectionMode.MAXLOADED, 'Pick the available resource that has been used the most so far.'),
		(SelectionMode.MINLOADED, 'Pick the available resource that has been used the least so far.'),
		(SelectionMode.MINALLOCATED, 'Pick the resource with the smallest allocation factor. This is the default.'),
		(SelectionMode.ORDER, 'Pick the first available resource from the list.'),
		(SelectionMode.RANDOM, 'Pick a random resource from the list.'),
	]:
		grammar.pattern('allocationSelectionMode', K(mode.value), doc=text)(_constant(mode))

def _constant(value): return lambda ctx: value
