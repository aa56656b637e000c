"""
Grammar symbols.

A pattern is a sequence of symbols, and a symbol is exactly one of three things:

* a Keyword, which matches a token spelled exactly so (``task``, ``{``, ``>=``);
* a Terminal, which matches any token of a given kind (any DATE, any STRING);
* a NonTerminal, which matches whatever the named rule matches.

Keywords are void: they tell you which alternative you are in, and that is all the
information they carry, so they do not appear among the values handed to a semantic
action. Terminals and non-terminals each contribute one value.

Symbols of different classes never compare equal, even when their fields do:
the keyword ``task`` and the rule named ``task`` are different things.
"""

from typing import NamedTuple, Union

from ..scanning.tokens import TokenKind, Token

def _same(self, other): return type(self) is type(other) and tuple.__eq__(self, other)
def _differ(self, other): return not _same(self, other)
def _hash(self): return hash((type(self).__name__,) + tuple(self))

class Keyword(NamedTuple):
	text: str
	def accepts(self, token:Token) -> bool: return token.spells(self.text)
	def __str__(self): return repr(self.text)
	__eq__, __ne__, __hash__ = _same, _differ, _hash

class Terminal(NamedTuple):
	kind: TokenKind
	def accepts(self, token:Token) -> bool: return token.kind is self.kind
	def __str__(self): return '$'+self.kind.name
	__eq__, __ne__, __hash__ = _same, _differ, _hash

class NonTerminal(NamedTuple):
	name: str
	def __str__(self): return '!'+self.name
	__eq__, __ne__, __hash__ = _same, _differ, _hash

Symbol = Union[Keyword, Terminal, NonTerminal]

def is_void(symbol:Symbol) -> bool:
	return isinstance(symbol, Keyword)

# Abbreviations, so that grammar declarations read like grammar.
K = Keyword
N = NonTerminal

INTEGER = Terminal(TokenKind.INTEGER)
FLOAT = Terminal(TokenKind.FLOAT)
DATE = Terminal(TokenKind.DATE)
TIME = Terminal(TokenKind.TIME)
STRING = Terminal(TokenKind.STRING)
ID = Terminal(TokenKind.ID)
ID_WITH_COLON = Terminal(TokenKind.ID_WITH_COLON)
RELATIVE_ID = Terminal(TokenKind.RELATIVE_ID)
ABSOLUTE_ID = Terminal(TokenKind.ABSOLUTE_ID)
MACRO = Terminal(TokenKind.MACRO)
