"""
Parsing Interface Definitions

The engine needs only a handful of things from the outside world: a token source with
one token of lookahead and push-back, and an agreed way to complain. This module holds
those agreements together with the exception types the machinery deals in.
"""

from typing import Protocol

from ..support.failureprone import Diagnostic, Location

class LanguageError(ValueError):
	""" Base class of all exceptions arising from the language machinery. """

class GrammarFault(LanguageError):
	"""
	The grammar itself is malformed: an undeclared rule, a pattern that cannot be told
	apart from its sibling by one token of lookahead, and so forth. This is a bug in
	whoever built the grammar, never in the input, so it is raised on the spot.
	"""

class DiagnosticError(LanguageError):
	""" An exception that carries a complete Diagnostic along. """
	def __init__(self, diagnostic:Diagnostic):
		super().__init__(diagnostic.message)
		self.diagnostic = diagnostic

	@property
	def code(self): return self.diagnostic.code

class SemanticError(DiagnosticError):
	""" Raised by semantic actions (via ParseContext.error) when the input makes no sense. """

class ScanError(DiagnosticError):
	""" Raised by a token source: unreadable files, garbage characters, undefined macros. """

class ParseAborted(DiagnosticError):
	""" Raised by the convenience loaders when the parse fails. The diagnostic has already been reported. """


class TokenSource(Protocol):
	"""
	Implement this interface to feed tokens to the engine.
	The engine reads one token at a time and may hand one back.
	"""
	def next_token(self):
		""" Return the next Token. At the end of all input, keep returning an EOF token. """

	def return_token(self, token):
		""" Push the token back so the next call to next_token() yields it again. """

	@property
	def location(self) -> Location:
		""" Where the most recently delivered token came from. """

	def include(self, path:str):
		""" Splice the named file into the token stream at the current position. """

	def add_macro(self, macro):
		""" Make a macro available for expansion in the rest of the input. """
