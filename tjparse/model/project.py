"""
The Project: root of the model a project file describes.

A project has a handful of global attributes (working hours, time frame, number
formats...) accessed by subscript, and one PropertySet each for scenarios, tasks and
resources. There is always at least one scenario; until the file says otherwise it is
the default ``plan`` scenario.
"""

import datetime
from typing import Optional, Union

from .properties import PropertySet, Scenario, Task, Resource, TASK_ATTRIBUTES, RESOURCE_ATTRIBUTES, SCENARIO_ATTRIBUTES
from .scheduling import WorkingHours, RealFormat


DEFAULT_SCENARIO = ('plan', 'Plan Scenario')

def _defaults():
	return {
		'copyright': None,
		'currency': 'EUR',
		'currencyformat': RealFormat('-', '', ',', '.', '0'),
		'dailyworkinghours': 8.0,
		'end': None,
		'flags': [],
		'now': datetime.datetime.now().replace(second=0, microsecond=0),
		'numberformat': RealFormat('-', '', ',', '.', '1'),
		'scheduleGranularity': 3600,  # seconds
		'shorttimeformat': '%H:%M',
		'start': None,
		'timeformat': '%Y-%m-%d',
		'timezone': None,
		'vacations': [],
		'weekstartsmonday': True,
		'workinghours': WorkingHours.default(),
		'yearlyworkingdays': 260.714,
	}

class Project:
	def __init__(self, id:str, name:str, version:str):
		self.id = id
		self.name = name
		self.version = version
		self.__attributes = _defaults()
		self.scenarios = PropertySet(self, 'scenario', SCENARIO_ATTRIBUTES)
		self.tasks = PropertySet(self, 'task', TASK_ATTRIBUTES)
		self.resources = PropertySet(self, 'resource', RESOURCE_ATTRIBUTES)
		self.reports = []
		self.default_scenario = True
		Scenario(self, *DEFAULT_SCENARIO)

	def __getitem__(self, attribute:str):
		return self.__attributes[attribute]

	def __setitem__(self, attribute:str, value):
		if attribute not in self.__attributes: raise KeyError("Projects have no attribute %r"%attribute)
		self.__attributes[attribute] = value

	def replace_default_scenario(self):
		""" The first scenario a file declares takes the place of the built-in one. """
		assert self.default_scenario
		self.scenarios.clear()
		self.default_scenario = False

	def scenario_idx(self, id:str) -> Optional[int]:
		scenario = self.scenarios.get(id)
		return None if scenario is None else scenario.index

	def scenario(self, key:Union[int, str]) -> Scenario:
		if isinstance(key, int): return list(self.scenarios)[key]
		return self.scenarios[key]

	def scenario_parent_index(self, idx:int) -> Optional[int]:
		parent = self.scenario(idx).parent
		return None if parent is None else parent.index

	def task(self, full_id:str) -> Optional[Task]: return self.tasks.get(full_id)
	def resource(self, id:str) -> Optional[Resource]: return self.resources.get(id)

	@property
	def interval(self):
		return self['start'], self['end']

	def summary(self) -> str:
		return "project %s (%s) with %d scenario(s), %d task(s), %d resource(s), %d report(s)"%(
			self.id, self.name, len(self.scenarios), len(self.tasks), len(self.resources), len(self.reports),
		)

	def __repr__(self): return "<Project %s>"%self.id
