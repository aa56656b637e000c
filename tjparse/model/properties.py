"""
Properties: the tasks, resources and scenarios of a project.

All three are trees. Each property belongs to a ``PropertySet`` (one per kind, per
project), which owns the attribute definitions for that kind and an index of its
members by full ID. A property's full ID is its parent's full ID, a dot, and its own
ID; top-level properties are known by their plain ID.

Attribute access comes in two flavors, following the definition:

	task.get('note'), task.set('note', text)        # one value per property
	task['effort', idx], task['effort', idx] = n     # one value per scenario
"""

from typing import Optional, Iterator

from .attributes import AttributeDefinition, AttributeType, ScenarioValues
from ..support.foundation import allocate

T = AttributeType

def _table(*rows) -> list[AttributeDefinition]:
	return [AttributeDefinition(*row) for row in rows]

#            name           title            type        inherited  scenario  default
TASK_ATTRIBUTES = _table(
	('allocate', 'Allocations', T.LIST, True, True, []),
	('bookings', 'Bookings', T.LIST, False, True, []),
	('complete', 'Completion', T.NUMBER, False, True, None),
	('depends', 'Dependencies', T.LIST, False, True, []),
	('duration', 'Duration', T.DURATION, False, True, 0),
	('effort', 'Effort', T.DURATION, False, True, 0),
	('end', 'End', T.DATE, False, True, None),
	('flags', 'Flags', T.LIST, True, True, []),
	('forward', 'Scheduling Direction', T.BOOLEAN, True, True, True),
	('length', 'Length', T.DURATION, False, True, 0),
	('maxend', 'Max. End', T.DATE, False, True, None),
	('maxstart', 'Max. Start', T.DATE, False, True, None),
	('milestone', 'Milestone', T.BOOLEAN, False, True, False),
	('minend', 'Min. End', T.DATE, False, True, None),
	('minstart', 'Min. Start', T.DATE, False, True, None),
	('note', 'Note', T.TEXT, False, False, None),
	('precedes', 'Followers', T.LIST, False, True, []),
	('priority', 'Priority', T.INTEGER, True, True, 500),
	('responsible', 'Responsible', T.LIST, True, True, []),
	('scheduled', 'Scheduled', T.BOOLEAN, False, True, False),
	('start', 'Start', T.DATE, False, True, None),
)

RESOURCE_ATTRIBUTES = _table(
	('flags', 'Flags', T.LIST, True, True, []),
	('vacations', 'Vacations', T.LIST, True, True, []),
	('workinghours', 'Working Hours', T.WORKING_HOURS, True, True, None),
)

SCENARIO_ATTRIBUTES = _table(
	('enabled', 'Enabled', T.BOOLEAN, True, False, True),
	('projection', 'Projection Mode', T.BOOLEAN, True, False, False),
	('strict', 'Strict Projection', T.BOOLEAN, True, False, False),
)


class PropertySet:
	""" All the properties of one kind in one project, plus the definitions of their attributes. """
	def __init__(self, project, kind:str, definitions=()):
		self.project = project
		self.kind = kind
		self.definitions:dict[str, AttributeDefinition] = {}
		self.__by_id = {}
		self.__members = []
		for definition in definitions: self.add_attribute_type(definition)

	def add_attribute_type(self, definition:AttributeDefinition):
		assert definition.name not in self.definitions, definition.name
		self.definitions[definition.name] = definition

	def knows(self, attribute:str) -> bool: return attribute in self.definitions

	def definition(self, attribute:str) -> AttributeDefinition:
		try: return self.definitions[attribute]
		except KeyError: raise KeyError("%s has no attribute %r"%(self.kind, attribute)) from None

	def user_defined(self) -> list[AttributeDefinition]:
		return [d for d in self.definitions.values() if d.user_defined]

	def add(self, node:"PropertyTreeNode") -> int:
		assert node.full_id not in self.__by_id, node.full_id
		self.__by_id[node.full_id] = node
		return allocate(self.__members, node)

	def clear(self):
		self.__by_id.clear()
		self.__members.clear()

	def get(self, full_id:str) -> Optional["PropertyTreeNode"]: return self.__by_id.get(full_id)
	def __getitem__(self, full_id:str) -> "PropertyTreeNode": return self.__by_id[full_id]
	def __contains__(self, full_id): return full_id in self.__by_id
	def __iter__(self) -> Iterator["PropertyTreeNode"]: return iter(self.__members)
	def __len__(self): return len(self.__members)



class PropertyTreeNode:
	"""
	Common machinery for tasks, resources and scenarios.
	Creating a node links it to its parent and registers it with its property set.
	"""
	def __init__(self, property_set:PropertySet, id:str, name:str, parent:Optional["PropertyTreeNode"]):
		self.property_set = property_set
		self.project = property_set.project
		self.id = id
		self.name = name
		self.parent = parent
		self.children = []
		self.location = None
		self.__values = {}
		self.__scenario_values = {}
		if parent is not None: parent.children.append(self)
		self.index = property_set.add(self)
		self.sequence_no = self.index + 1

	@property
	def full_id(self) -> str:
		return self.id if self.parent is None else self.parent.full_id + '.' + self.id

	@property
	def level(self) -> int:
		return 0 if self.parent is None else 1 + self.parent.level

	def __definition(self, attribute:str, scenario_specific:bool) -> AttributeDefinition:
		definition = self.property_set.definition(attribute)
		assert definition.scenario_specific == scenario_specific, "%s.%s is %sscenario specific"%(
			self.property_set.kind, attribute, '' if definition.scenario_specific else 'not ')
		return definition

	def __slot(self, attribute:str) -> ScenarioValues:
		if attribute not in self.__scenario_values:
			definition = self.__definition(attribute, True)
			self.__scenario_values[attribute] = ScenarioValues(definition, self.project.scenario_parent_index)
		return self.__scenario_values[attribute]

	def get(self, attribute:str):
		definition = self.__definition(attribute, False)
		return self.__values[attribute] if attribute in self.__values else definition.fresh_default()

	def set(self, attribute:str, value):
		self.__definition(attribute, False)
		self.__values[attribute] = value

	def __getitem__(self, key):
		attribute, idx = key
		return self.__slot(attribute).resolve(idx)

	def __setitem__(self, key, value):
		attribute, idx = key
		self.__slot(attribute)[idx] = value

	def provided(self, attribute:str, idx:int=None) -> bool:
		""" Was the attribute given a value of its own (for that scenario, if it is scenario specific)? """
		if self.property_set.definition(attribute).scenario_specific:
			return attribute in self.__scenario_values and self.__scenario_values[attribute].provided(idx or 0)
		return attribute in self.__values

	def values(self, attribute:str) -> ScenarioValues:
		return self.__slot(attribute)

	def inherit_attributes(self):
		""" Copy whatever the parent has for every inherited attribute. Call right after creation. """
		if self.parent is None: return
		for definition in self.property_set.definitions.values():
			if not definition.inherited: continue
			if definition.scenario_specific:
				self.__slot(definition.name).adopt(self.parent.__slot(definition.name))
			elif self.parent.provided(definition.name):
				self.__values[definition.name] = self.parent.get(definition.name)

	def __repr__(self): return "<%s %s>"%(type(self).__name__, self.full_id)


class Task(PropertyTreeNode):
	def __init__(self, project, id, name, parent=None):
		super().__init__(project.tasks, id, name, parent)

	def add_booking(self, idx:int, booking):
		self['bookings', idx] = self['bookings', idx] + [booking]

	@property
	def is_container(self) -> bool: return bool(self.children)

class Resource(PropertyTreeNode):
	def __init__(self, project, id, name, parent=None):
		super().__init__(project.resources, id, name, parent)

	@property
	def full_id(self) -> str:
		""" Resources share one global name space. """
		return self.id

	def working_hours(self, idx:int):
		""" The resource's own working hours, or else the project's. """
		return self['workinghours', idx] or self.project['workinghours']

class Scenario(PropertyTreeNode):
	def __init__(self, project, id, name, parent=None):
		super().__init__(project.scenarios, id, name, parent)

	@property
	def full_id(self) -> str:
		""" Scenario IDs are global; nesting only expresses inheritance. """
		return self.id
