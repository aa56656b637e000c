"""
The Parse Context: everything a semantic action may need, in one place.

Actions get the context as their first argument. Through it they reach the project
being built, the property currently being filled in, the scenario that scenario
specific attributes go to, the token source (for includes and macros) and the grammar
(for ``extend``). There is nothing global; two parsers never share a context.

Properties nest. A header action calls ``open_property`` with the new task, resource
or scenario; the rule that wraps header and body calls ``close_property`` when the body
is done, which brings back whatever was current before.
"""

from typing import Optional

from .grammar.interface import SemanticError, TokenSource
from .grammar.registry import Registry
from .support.failureprone import MessageHandler, Diagnostic, Severity, ErrorKind

class ParseContext:
	def __init__(self, grammar:Registry, source:TokenSource, messages:MessageHandler):
		self.grammar = grammar
		self.source = source
		self.messages = messages
		self.project = None
		self.property = None
		self.scenario_idx = 0
		# Helpers that a header creates and the attributes after it fill in.
		self.booking = None
		self.task_dependency = None
		self.report = None
		self.report_element = None
		self.column = None
		# Targets of the extend declaration being parsed.
		self.rule_to_extend = None
		self.rule_to_extend_with_scenario = None
		self.property_set = None
		self.__scopes = []

	@property
	def location(self):
		return self.source.location

	def error(self, code:str, message:str, property=None):
		""" Abandon the parse. The engine turns this into a Failure. """
		subject = None if property is None else property.full_id
		raise SemanticError(Diagnostic(Severity.ERROR, code, message, self.location, subject, ErrorKind.SEMANTIC))

	def warning(self, code:str, message:str, property=None) -> Diagnostic:
		subject = None if property is None else property.full_id
		return self.messages.warning(code, message, location=self.location, subject=subject)

	def open_property(self, node):
		self.__scopes.append(self.property)
		self.property = node

	def close_property(self):
		self.property = self.__scopes.pop()

	def current(self, kind:type) -> Optional[object]:
		""" The current property, if it is of the given kind. """
		return self.property if isinstance(self.property, kind) else None
