"""
The small value types a project file is made of: intervals, working hours, bookings,
allocations, dependencies. The parser fills them in; the scheduler reads them.
"""

import datetime
from enum import Enum
from typing import NamedTuple, Optional

class Interval(NamedTuple):
	start: datetime.datetime
	end: datetime.datetime

WEEKDAYS = ('sun', 'mon', 'tue', 'wed', 'thu', 'fri', 'sat')

def hours(h, m=0): return h * 3600 + m * 60

class WorkingHours:
	"""
	Seven lists of (start, end) pairs, in seconds since midnight, indexed Sunday first.
	An empty list means the day is off.
	"""
	def __init__(self, days=None):
		self.days = [list(d) for d in days] if days is not None else [[] for _ in WEEKDAYS]

	@classmethod
	def default(cls) -> "WorkingHours":
		office = [(hours(9), hours(12)), (hours(13), hours(18))]
		return cls([[], office, office, office, office, office, []])

	def copy(self) -> "WorkingHours": return WorkingHours(self.days)

	def set_working_hours(self, day:int, intervals):
		self.days[day] = list(intervals)

	def on_day(self, day:int) -> list: return self.days[day]

	def __eq__(self, other): return isinstance(other, WorkingHours) and self.days == other.days
	def __repr__(self): return "WorkingHours(%r)"%self.days

class Booking:
	""" Work that has already been done (or firmly planned): a resource on a task during some intervals. """
	def __init__(self, resource, task, intervals):
		self.resource = resource
		self.task = task
		self.intervals = list(intervals)
		self.overtime = 0
		self.sloppy = 0
		self.location = None

	def __repr__(self): return "<Booking %s on %s>"%(self.resource.full_id, self.task.full_id)

class SelectionMode(Enum):
	""" How the scheduler picks among the candidates of an allocation. """
	MAXLOADED = 'maxloaded'
	MINLOADED = 'minloaded'
	MINALLOCATED = 'minallocated'
	ORDER = 'order'
	RANDOM = 'random'

class Allocation(NamedTuple):
	candidates: tuple
	selection_mode: SelectionMode = SelectionMode.MINALLOCATED
	persistent: bool = False
	mandatory: bool = False

class TaskDependency:
	"""
	A reference to another task, by ID, resolved only once all tasks are known.
	``on_end`` says whether the dependency is on the other task's end (the usual case for
	``depends``) or its start (the usual case for ``precedes``).
	Gaps are in scheduling slots.
	"""
	def __init__(self, task_id:str, on_end:bool):
		self.task_id = task_id
		self.on_end = on_end
		self.gap_duration = 0
		self.gap_length = 0

	def __repr__(self): return "<TaskDependency %s on %s>"%(self.task_id, 'end' if self.on_end else 'start')

class RealFormat(NamedTuple):
	negative_prefix: str
	negative_suffix: str
	thousands_separator: str
	fraction_separator: str
	fraction_digits: str

class Reference(NamedTuple):
	""" A URL, and optionally the text to show instead of it. """
	url: str
	label: Optional[str] = None

class Vacation(NamedTuple):
	name: Optional[str]
	interval: Interval
