"""
Attribute definitions and scenario-indexed storage.

Each kind of property (task, resource, scenario) has a table of attribute definitions.
A definition says what the attribute is called, what type of value it holds, whether a
child property starts out with its parent's value (``inherited``), and whether it can
differ from one scenario to the next (``scenario_specific``).

Scenario-specific values live in a ``ScenarioValues``: a mapping from scenario index to
value. A scenario that was never given a value of its own answers with its parent
scenario's value, and so on up the chain to the attribute's default. Nothing is copied
when a scenario is created, so changing a child never disturbs the parent.
"""

import copy
from enum import Enum
from typing import NamedTuple, Any, Callable, Optional

class AttributeType(Enum):
	TEXT = 'text'
	DATE = 'date'
	REFERENCE = 'reference'
	INTEGER = 'integer'
	NUMBER = 'number'
	BOOLEAN = 'boolean'
	DURATION = 'duration'
	LIST = 'list'
	WORKING_HOURS = 'working hours'

class AttributeDefinition(NamedTuple):
	name: str
	title: str
	type: AttributeType
	inherited: bool = False
	scenario_specific: bool = False
	default: Any = None
	user_defined: bool = False

	def fresh_default(self):
		""" Mutable defaults are never handed out directly. """
		return copy.copy(self.default)


class ScenarioValues:
	"""
	Values of one attribute of one property, keyed by scenario index.
	``parent_of`` maps a scenario index to its parent scenario's index, or None at the top.
	"""
	def __init__(self, definition:AttributeDefinition, parent_of:Callable[[int], Optional[int]]):
		self.definition = definition
		self.parent_of = parent_of
		self.__values = {}

	def __getitem__(self, idx:int): return self.resolve(idx)

	def __setitem__(self, idx:int, value):
		self.__values[idx] = value

	def resolve(self, idx:int):
		scenario = idx
		while scenario is not None:
			if scenario in self.__values: return self.__values[scenario]
			scenario = self.parent_of(scenario)
		return self.definition.fresh_default()

	def provided(self, idx:int) -> bool:
		""" Was a value given for exactly this scenario? """
		return idx in self.__values

	def explicit(self) -> dict:
		return dict(self.__values)

	def adopt(self, other:"ScenarioValues"):
		""" Start out with another property's explicit values. Used for inheritance from a parent property. """
		self.__values.update(other.explicit())

	def __repr__(self): return "ScenarioValues(%s, %r)"%(self.definition.name, self.__values)
