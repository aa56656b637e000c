"""
The Parser Engine: recursive descent over a Registry, one token of lookahead.

To match a rule, peek at the next token and ask the registry which pattern (if any)
that token begins. Then walk the pattern: keywords and terminals consume a token each,
non-terminals recurse. When the pattern is done, hand the collected values to the
pattern's action along with the parse context, and the action's result becomes the
value of the match. Repeatable rules go around again until the lookahead fits no
pattern. Optional rules are allowed not to match at all.

Errors travel as values rather than exceptions: ``match_rule`` returns either a
``Match`` or a ``Failure``, and every caller checks. Semantic actions and token sources
are allowed to raise (``SemanticError`` and ``ScanError`` respectively), but the engine
catches those at the point they happen and turns them into a Failure. Nothing is
recovered; a Failure just unwinds to whoever started the parse.

Error messages need to know what would have been acceptable. When an optional rule
declines a token, the engine remembers that until the token is consumed. If some
mandatory rule then chokes on the same token, the message lists everything that could
have appeared there, not just what the last rule wanted.
"""

import logging
from typing import NamedTuple, Any, Union

from .interface import SemanticError, ScanError, TokenSource
from .registry import Registry, Rule, Pattern
from .symbols import Keyword, Terminal, NonTerminal
from ..scanning.tokens import Token, TokenKind
from ..support.failureprone import Diagnostic, Severity, ErrorKind

logger = logging.getLogger(__name__)

class Match(NamedTuple):
	value: Any
	consumed: bool

class Failure(NamedTuple):
	diagnostic: Diagnostic

	@property
	def code(self): return self.diagnostic.code

Outcome = Union[Match, Failure]

class Engine:
	"""
	One engine per parse. It holds the token source and the registry; the parse
	context is passed to each call so that actions can find it.
	"""
	def __init__(self, grammar:Registry, source:TokenSource):
		self.grammar = grammar
		self.source = source
		self.__declined = []  # Rules that declined the current lookahead token.
		self.__declined_at = None

	def parse(self, root:Union[Rule, str], context) -> Outcome:
		""" Match the root rule, and insist that nothing follows it. """
		outcome = self.match_rule(root, context)
		if isinstance(outcome, Failure): return outcome
		token = self.__next()
		if isinstance(token, Failure): return token
		if token.kind is not TokenKind.EOF:
			self.source.return_token(token)
			return self.__syntax_error(['end of input'], token)
		return outcome

	def match_rule(self, rule:Union[Rule, str], context) -> Outcome:
		if isinstance(rule, str): rule = self.grammar.lookup(rule)
		values, consumed = [], False
		while True:
			token = self.__peek()
			if isinstance(token, Failure): return token
			pattern = self.grammar.select(rule, token)
			if pattern is None:
				self.__decline(rule, token)
				if consumed or rule.optional: break
				return self.__syntax_error(self.grammar.expected(rule), token)
			outcome = self.__match_pattern(pattern, context)
			if isinstance(outcome, Failure): return outcome
			consumed = True
			if not rule.repeatable: return Match(outcome.value, True)
			values.append(outcome.value)
		return Match(values if rule.repeatable else None, consumed)

	def __match_pattern(self, pattern:Pattern, context) -> Outcome:
		args = []
		for symbol in pattern.symbols:
			if isinstance(symbol, NonTerminal):
				outcome = self.match_rule(symbol.name, context)
				if isinstance(outcome, Failure): return outcome
				args.append(outcome.value)
				continue
			token = self.__next()
			if isinstance(token, Failure): return token
			if not symbol.accepts(token):
				self.source.return_token(token)
				return self.__syntax_error([_describe(symbol)], token)
			self.__declined.clear()
			if isinstance(symbol, Terminal):
				if not isinstance(token.value, symbol.kind.value_type):
					raise TypeError("The token source delivered %s %r with a %s value; that kind carries %s."%(token.kind.name, token.text, type(token.value).__name__, symbol.kind.value_type.__name__))
				args.append(token.value)
		return self.__reduce(pattern, args, context)

	def __reduce(self, pattern:Pattern, args:list, context) -> Outcome:
		if pattern.action is None:
			if len(pattern.symbols) == 1 and isinstance(pattern.symbols[0], Keyword): value = pattern.symbols[0].text
			elif len(args) == 1: value = args[0]
			else: value = tuple(args)
			return Match(value, True)
		try: return Match(pattern.action(context, *args), True)
		except (SemanticError, ScanError) as ex: return Failure(ex.diagnostic)
		except Exception:
			logger.error("While running the action for pattern %s declared at %s:%s", pattern, *pattern.provenance)
			raise

	def __next(self) -> Union[Token, Failure]:
		try: return self.source.next_token()
		except ScanError as ex: return Failure(ex.diagnostic)

	def __peek(self) -> Union[Token, Failure]:
		token = self.__next()
		if isinstance(token, Token): self.source.return_token(token)
		return token

	def __decline(self, rule:Rule, token:Token):
		if self.__declined_at is not token:
			self.__declined, self.__declined_at = [], token
		self.__declined.append(rule)

	def __syntax_error(self, expected:list, token:Token) -> Failure:
		declined = self.__declined if self.__declined_at is token else []
		offered = set(expected)
		for rule in declined: offered.update(self.grammar.expected(rule))
		listing = ', '.join(sorted(offered))
		if token.kind is TokenKind.EOF:
			return self.__fail('unexpected_eof', "Unexpected end of input. Expecting one of: %s"%listing, token)
		if token.kind is TokenKind.ID and any(isinstance(s, Keyword) for rule in declined for s in self.grammar.first(rule)):
			return self.__fail('unknown_attribute', "Unknown attribute or keyword '%s'. Expecting one of: %s"%(token.text, listing), token)
		return self.__fail('unexpected_token', "Unexpected %s. Expecting one of: %s"%(token.describe(), listing), token)

	def __fail(self, code, message, token:Token) -> Failure:
		return Failure(Diagnostic(Severity.ERROR, code, message, token.location, None, ErrorKind.SYNTAX))


def _describe(symbol) -> str:
	return repr(symbol.text) if isinstance(symbol, Keyword) else symbol.kind.description
