"""
Report definitions. Rendering is somebody else's job; this is just what the project
file asked for: which columns, which scenarios, what to hide and how to sort.
"""

from typing import NamedTuple, Optional

COLUMN_TITLES = {
	'complete': 'Completion',
	'criticalness': 'Criticalness',
	'daily': '',
	'duration': 'Duration',
	'duties': 'Duties',
	'efficiency': 'Efficiency',
	'effort': 'Effort',
	'email': 'Email',
	'end': 'End',
	'flags': 'Flags',
	'fte': 'FTE',
	'headcount': 'Headcount',
	'hourly': '',
	'index': 'Index',
	'maxend': 'Max. End',
	'maxstart': 'Max. Start',
	'minend': 'Min. End',
	'minstart': 'Min. Start',
	'monthly': '',
	'name': 'Name',
	'no': 'No.',
	'pathcriticalness': 'Path Criticalness',
	'priority': 'Priority',
	'quarterly': '',
	'responsible': 'Responsible',
	'seqno': 'Seq. No.',
	'start': 'Start',
	'wbs': 'WBS',
	'weekly': '',
	'yearly': '',
}

REPORT_KINDS = ('htmltaskreport', 'htmlresourcereport', 'export')

class TableColumnDefinition:
	def __init__(self, id:str, title:str):
		self.id = id
		self.title = title

	def __repr__(self): return "<Column %s %r>"%(self.id, self.title)

class SortCriterion(NamedTuple):
	"""
	Sort by ``attribute``. A ``scenario_idx`` of None means whatever scenario the
	report is showing. The pseudo-attribute 'tree' keeps the hierarchy.
	"""
	attribute: str
	ascending: bool = True
	scenario_idx: Optional[int] = None

TREE = SortCriterion('tree')

class ReportElement:
	def __init__(self, report:"Report"):
		project = report.project
		self.report = report
		self.columns:list[TableColumnDefinition] = []
		self.headline = None
		self.hide_task = None
		self.hide_resource = None
		self.rollup_task = None
		self.scenarios = [0]
		self.sort_tasks = [TREE]
		self.sort_resources = [TREE]
		self.start = project['start']
		self.end = project['end']
		self.task_root = None
		self.timeformat = project['timeformat']

	def default_column_title(self, column_id:str) -> str:
		""" User-defined attributes are titled as declared; the rest have stock titles. """
		project = self.report.project
		for property_set in (project.tasks, project.resources):
			if property_set.knows(column_id) and property_set.definition(column_id).user_defined:
				return property_set.definition(column_id).title
		return COLUMN_TITLES.get(column_id, column_id)

class Report:
	def __init__(self, project, filename:str, kind:str):
		assert kind in REPORT_KINDS, kind
		self.project = project
		self.filename = filename
		self.kind = kind
		self.element = ReportElement(self)
		project.reports.append(self)

	def __repr__(self): return "<Report %s %s>"%(self.kind, self.filename)
