"""
Token Definitions.

A scanner turns characters into tokens. Each token has a kind (from the closed set
below), a semantic value of the Python type that kind promises, the original text,
and the location where it was found.
"""
import datetime
from enum import Enum
from typing import NamedTuple, Any, Optional, Iterable

from ..support.failureprone import Location

class TokenKind(Enum):
	"""
	The classes of token a project file contains. The second member of each value is
	the Python type of the token's semantic value, which is what a pattern promises
	its action when it names the kind.
	"""
	INTEGER = ('integer', int)
	FLOAT = ('floating point number', float)
	DATE = ('date', datetime.datetime)
	TIME = ('time of day', int)  # seconds since midnight
	STRING = ('string', str)
	ID = ('identifier', str)
	ID_WITH_COLON = ('scenario qualifier', str)  # value excludes the colon
	RELATIVE_ID = ('relative identifier', str)
	ABSOLUTE_ID = ('absolute identifier', str)
	MACRO = ('macro body', str)
	LITERAL = ('literal', str)
	EOF = ('end of input', type(None))

	@property
	def description(self) -> str: return self.value[0]

	@property
	def value_type(self) -> type: return self.value[1]

	def __repr__(self): return self.name

class Macro(NamedTuple):
	""" A named piece of text. Wherever ${name} appears later on, the text takes its place. """
	name: str
	value: str
	location: Optional[Location] = None

# Token kinds whose text may spell a keyword.
KEYWORD_KINDS = frozenset([TokenKind.ID, TokenKind.LITERAL])

class Token(NamedTuple):
	kind: TokenKind
	value: Any
	text: str
	location: Optional[Location] = None

	def describe(self) -> str:
		if self.kind is TokenKind.EOF: return 'end of input'
		return "%s %r"%(self.kind.description, self.text)

	def spells(self, keyword:str) -> bool:
		return self.kind in KEYWORD_KINDS and self.text == keyword


class TokenList:
	"""
	A token source over a pre-scanned sequence. Handy for embedding the engine behind
	some other scanner, and for tests. Accepts Token objects or (kind, value) pairs;
	for pairs, the text is the value rendered as a string.
	"""
	def __init__(self, tokens:Iterable, filename='<tokens>'):
		self.__tokens = [self.__coerce(t, i) for i, t in enumerate(tokens)]
		self.__position = 0
		self.__filename = filename
		self.__last = None
		self.macros = {}
		self.included = []

	def __coerce(self, token, index):
		if isinstance(token, Token): return token
		kind, value = token
		text = value if isinstance(value, str) else str(value)
		return Token(kind, value, text, Location('<tokens>', 1, index+1))

	def next_token(self) -> Token:
		if self.__position < len(self.__tokens):
			token = self.__tokens[self.__position]
			self.__position += 1
		else:
			token = Token(TokenKind.EOF, None, '', Location(self.__filename, 1, len(self.__tokens)+1))
		self.__last = token
		return token

	def return_token(self, token:Token):
		if token.kind is TokenKind.EOF: return
		self.__position -= 1
		assert self.__tokens[self.__position] is token, "Tokens must be returned in reverse order of delivery."

	@property
	def location(self) -> Optional[Location]:
		return None if self.__last is None else self.__last.location

	def include(self, path:str):
		self.included.append(path)

	def add_macro(self, macro):
		self.macros[macro.name] = macro
