"""
Report definitions: ``htmltaskreport``, ``htmlresourcereport`` and ``export``.

The header creates the report and makes its element current; the attributes in the
body then fill in the element.
"""

from ..grammar.builders import list_rule, options_rule
from ..grammar.registry import Registry, PatternDoc
from ..grammar.symbols import K, N, STRING, ID, ABSOLUTE_ID
from ..model.reports import Report, TableColumnDefinition, SortCriterion, TREE

REPORTABLE = [
	('complete', 'The completion degree of a task'),
	('criticalness', 'A measure for how much effort the resource is allocated for, or how strained the allocated resources of a task are'),
	('daily', 'A group of columns with one column for each day'),
	('duration', 'The duration of a task'),
	('duties', 'List of tasks that the resource is allocated to'),
	('efficiency', 'Measure for how efficient a resource can perform tasks'),
	('effort', 'The total allocated effort'),
	('email', 'The email address of a resource'),
	('end', 'The end date of a task'),
	('flags', 'List of attached flags'),
	('fte', 'The Full-Time-Equivalent of a resource or group'),
	('headcount', 'The headcount number of the resource or group'),
	('hourly', 'A group of columns with one column for each hour'),
	('index', 'The index of the item based on the nesting hierarchy'),
	('maxend', 'The latest allowed end of a task'),
	('maxstart', 'The latest allowed start of a task'),
	('minend', 'The earliest allowed end of a task'),
	('minstart', 'The earliest allowed start of a task'),
	('monthly', 'A group of columns with one column for each month'),
	('no', 'The index in the report'),
	('name', 'The name or description of the item'),
	('pathcriticalness', 'The criticalness of the task with respect to all the paths that it is a part of.'),
	('priority', 'The priority of a task'),
	('quarterly', 'A group of columns with one column for each quarter'),
	('responsible', 'The responsible people for this task'),
	('seqno', 'The index of the item based on the declaration order'),
	('start', 'The start date of the task'),
	('wbs', 'The hierarchical or work breakdown structure index'),
	('weekly', 'A group of columns with one column for each week'),
	('yearly', 'A group of columns with one column for each year'),
]

CRITERION_EXPECTED = "Sorting criterion expected (e.g. tree, start.up or plan.end.down)."

def sort_criterion(ctx, text:str) -> SortCriterion:
	parts = text.split('.')
	if len(parts) not in (2, 3): ctx.error('sorting_crit_exptd', CRITERION_EXPECTED)
	attribute, direction = parts[-2:]
	scenario_idx = None
	if len(parts) == 3:
		scenario_idx = ctx.project.scenario_idx(parts[0])
		if scenario_idx is None: ctx.error('sort_unknown_scen', "Unknown scenario %s in sorting criterion"%parts[0])
	if direction not in ('up', 'down'): ctx.error('sort_direction', "Sorting direction must be 'up' or 'down'")
	return SortCriterion(attribute, direction == 'up', scenario_idx)

def _report_header(kind):
	def header(ctx, filename):
		ctx.report = Report(ctx.project, filename, kind)
		ctx.report_element = ctx.report.element
		return ctx.report
	return header

def _element_setter(field):
	def action(ctx, value): setattr(ctx.report_element, field, value)
	return action

def declare(grammar:Registry):
	for rule, keyword, body, text in [
		('htmlTaskReport', 'htmltaskreport', 'reportBody', """
			The report lists all tasks and their respective values as an HTML page. The
			resources allocated to each task can be listed as well.
		"""),
		('htmlResourceReport', 'htmlresourcereport', 'reportBody', """
			The report lists all resources and their respective values as an HTML page. The
			tasks the resources are allocated to can be listed as well.
		"""),
	]:
		header = rule + 'Header'
		grammar.define_rule(rule)
		grammar.pattern(rule, N(header), N(body), keyword=keyword, doc=text)(_first)
		grammar.define_rule(header)
		grammar.pattern(header, K(keyword), STRING, args={
			1:('filename', 'The name of the report file to generate. It should end with a .html extension.'),
		})(_report_header(keyword))

	grammar.define_rule('export')
	grammar.pattern('export', N('exportHeader'), N('exportBody'), keyword='export', doc="""
		The export report looks like a regular project file but contains fixed start and
		end dates for all tasks. A file name ending in .tjp yields a complete project; one
		ending in .tji yields only the tasks and resource allocations.
	""")(_first)
	grammar.define_rule('exportHeader')
	@grammar.pattern('exportHeader', K('export'), STRING, args={
		1:('filename', 'The name of the report file to generate. It must end with a .tjp or .tji extension.'),
	})
	def export_header(ctx, filename):
		if not filename.endswith(('.tjp', '.tji')):
			ctx.error('export_bad_extn', 'Export report files must have a .tjp or .tji extension.')
		return _report_header('export')(ctx, filename)

	options_rule(grammar, 'exportBody', 'exportAttributes')
	grammar.define_rule('exportAttributes', optional=True, repeatable=True)
	for name in ('hideresource', 'hidetask', 'reportEnd', 'reportPeriod', 'reportStart'):
		grammar.pattern('exportAttributes', N(name))(None)

	options_rule(grammar, 'reportBody', 'reportAttributes')
	grammar.define_rule('reportAttributes', optional=True, repeatable=True)
	attrs = 'reportAttributes'

	@grammar.pattern(attrs, K('columns'), N('columnList'), keyword='columns', doc="""
		Specifies which columns shall be included in a report.
	""")
	def columns(ctx, defs): ctx.report_element.columns = defs

	grammar.pattern(attrs, N('reportEnd'))(None)
	grammar.pattern(attrs, K('headline'), STRING, keyword='headline', doc="Specifies the headline for a report.")(_element_setter('headline'))
	grammar.pattern(attrs, N('hideresource'))(None)
	grammar.pattern(attrs, N('hidetask'))(None)
	grammar.pattern(attrs, N('reportPeriod'))(None)
	grammar.pattern(attrs, K('rolluptask'), N('logicalExpression'), keyword='rolluptask', doc="""
		Do not show sub-tasks of tasks that match the specified logical expression.
	""")(_element_setter('rollup_task'))

	@grammar.pattern(attrs, K('scenarios'), N('scenarioIdList'), keyword='scenarios', doc="""
		List of scenarios that should be included in the report. Disabled scenarios are
		left out.
	""")
	def scenarios(ctx, indices):
		kept = []
		for idx in indices:
			scenario = ctx.project.scenario(idx)
			if scenario.get('enabled'): kept.append(idx)
			else: ctx.warning('scenario_disabled', "Scenario %s is disabled and will not be reported."%scenario.id)
		ctx.report_element.scenarios = kept

	grammar.pattern(attrs, K('sortresources'), N('sortCriteria'), keyword='sortresources', doc="""
		How resources are sorted in the report. When one criterion leaves a tie, the next
		one decides.
	""")(_element_setter('sort_resources'))
	grammar.pattern(attrs, K('sorttasks'), N('sortCriteria'), keyword='sorttasks', doc="""
		How tasks are sorted in the report. When one criterion leaves a tie, the next one
		decides.
	""")(_element_setter('sort_tasks'))
	grammar.pattern(attrs, N('reportStart'))(None)
	grammar.pattern(attrs, K('taskroot'), N('taskId'), keyword='taskroot', doc="""
		Only tasks below the specified root task are reported.
	""")(_element_setter('task_root'))
	grammar.pattern(attrs, K('timeformat'), STRING, keyword='report.timeformat', doc="""
		Determines how time specifications in the report look, as a strftime format.
	""")(_element_setter('timeformat'))

	grammar.define_rule('reportEnd')
	grammar.pattern('reportEnd', K('end'), N('valDate'), keyword='report.end', doc="""
		The end date of the report. Task reports only list tasks that start before it.
	""")(_element_setter('end'))

	grammar.define_rule('reportStart')
	grammar.pattern('reportStart', K('start'), N('valDate'), keyword='report.start', doc="""
		The start date of the report. Task reports only list tasks that end after it.
	""")(_element_setter('start'))

	grammar.define_rule('reportPeriod')
	@grammar.pattern('reportPeriod', K('period'), N('valInterval'), keyword='report.period', doc="""
		A shortcut for setting start and end at the same time. The period must be within
		the project time frame.
	""")
	def report_period(ctx, interval):
		ctx.report_element.start, ctx.report_element.end = interval

	grammar.define_rule('hideresource')
	grammar.pattern('hideresource', K('hideresource'), N('logicalExpression'), keyword='hideresource', doc="""
		Do not include resources that match the logical expression.
	""")(_element_setter('hide_resource'))

	grammar.define_rule('hidetask')
	grammar.pattern('hidetask', K('hidetask'), N('logicalExpression'), keyword='hidetask', doc="""
		Do not include tasks that match the logical expression.
	""")(_element_setter('hide_task'))

	# Columns

	list_rule(grammar, 'columnList', N('columnDef'))
	grammar.define_rule('columnDef')
	grammar.pattern('columnDef', N('columnId'), N('columnBody'))(_first)

	grammar.define_rule('columnId')
	@grammar.pattern('columnId', N('reportableAttributes'), keyword='columnid', doc="""
		In addition to the listed IDs all user defined attributes can be used as column IDs.
	""")
	def column_id(ctx, id):
		ctx.column = TableColumnDefinition(id, ctx.report_element.default_column_title(id))
		return ctx.column

	options_rule(grammar, 'columnBody', 'columnOptions')
	grammar.define_rule('columnOptions', optional=True, repeatable=True)
	@grammar.pattern('columnOptions', K('title'), STRING, keyword='columntitle', doc="""
		Specifies an alternative title for a report column.
	""", args={1:('text', 'The new column title.')})
	def column_title(ctx, text): ctx.column.title = text

	grammar.define_rule('reportableAttributes')
	for keyword, text in REPORTABLE:
		grammar.add_pattern('reportableAttributes', [K(keyword)], None, PatternDoc(None, text))

	# Sorting

	list_rule(grammar, 'sortCriteria', N('sortCriterion'))
	grammar.define_rule('sortCriterion')
	grammar.pattern('sortCriterion', ABSOLUTE_ID)(sort_criterion)
	@grammar.pattern('sortCriterion', ID)
	def tree(ctx, word):
		if word != 'tree': ctx.error('sorting_crit_exptd', CRITERION_EXPECTED)
		return TREE

def _first(ctx, first, rest): return first
