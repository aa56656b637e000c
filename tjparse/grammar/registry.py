"""
# Rules, Patterns, and the Grammar Registry

A grammar here is a table of named rules. Each rule is a list of alternative patterns;
each pattern is a sequence of symbols (see ``symbols``) with an optional semantic action.
A rule may be *optional* (it may match nothing at all) and *repeatable* (it may match
over and over). Those two flags do the work that EBNF does with ``?``, ``*`` and ``+``:

	optional only:           zero or one
	repeatable only:         one or more
	optional and repeatable: zero or more

The parser decides among alternatives by looking at one token. That only works if the
alternatives of a rule can be told apart by their first tokens, so the registry works
out the FIRST set of every rule and pattern, and ``validate`` complains about overlaps.
There is one deliberate exception: a rule may offer both a keyword and the identifier
class in the same position. Keywords win. This is what lets a project file say
``task`` where an identifier could also appear.

# Mutation

Unlike the usual parser-generator arrangement, this registry is not frozen once parsing
begins. Project files can declare new attributes, and those declarations become new
patterns on existing rules while the parse is underway. Everything the registry derives
from the rules (nullability, FIRST sets, dispatch tables) is therefore computed lazily
and thrown away on every mutation. A lookup immediately after ``extend`` sees the new
pattern; there is no separate recompilation step to forget.

# Documentation

Patterns can carry documentation: a keyword, a paragraph of text, notes on individual
arguments, and cross references. None of it affects parsing. It feeds ``keyword_docs``
and whatever reference manual somebody may care to generate.
"""

import inspect, logging
from typing import Optional, Callable, NamedTuple, Protocol, Iterable, Union

from .symbols import Keyword, Terminal, NonTerminal, Symbol, is_void
from .interface import GrammarFault
from ..scanning.tokens import Token, KEYWORD_KINDS
from ..support import foundation

logger = logging.getLogger(__name__)

Action = Callable[..., object]

class ArgDoc(NamedTuple):
	name: str
	text: str

class PatternDoc(NamedTuple):
	"""
	keyword: the name under which the pattern is documented (often the leading keyword).
	text: what the construct means.
	args: pairs of (symbol index, ArgDoc).
	also: keywords of related constructs.
	"""
	keyword: Optional[str]
	text: str
	args: tuple = ()
	also: tuple = ()

class Pattern:
	""" One alternative of a rule: symbols, what to do when they match, and where it was declared. """
	def __init__(self, symbols:Iterable[Symbol], action:Optional[Action]=None, doc:Optional[PatternDoc]=None, provenance=None):
		self.symbols = tuple(symbols)
		self.action = action
		self.doc = doc
		self.provenance = provenance

	@property
	def arity(self) -> int:
		""" How many values the action receives (besides the parse context). """
		return sum(1 for s in self.symbols if not is_void(s))

	def __str__(self): return ' '.join(map(str, self.symbols))
	def __repr__(self): return "<Pattern %s>"%self

class Rule:
	"""
	A named production. Patterns are only ever appended, through the registry.
	"""
	def __init__(self, name:str, *, optional=False, repeatable=False, description=None):
		self.name = name
		self.patterns:list[Pattern] = []
		self.optional = optional
		self.repeatable = repeatable
		self.description = description

	def __str__(self):
		flags = ('?' if self.optional else '') + ('*' if self.repeatable else '')
		return "%s%s -> %s"%(self.name, flags, ' | '.join(map(str, self.patterns)))
	def __repr__(self): return "<Rule %s>"%self.name


class FaultHandler(Protocol):
	"""
	This generic handler just raises exceptions.
	More sophisticated handlers might collect the faults for display instead.
	"""
	def undeclared_rule(self, name, referrer:Rule):
		raise GrammarFault("Rule %r mentions undeclared rule %r."%(referrer.name, name))

	def rule_redeclared(self, name):
		raise GrammarFault("Rule %r is declared twice."%name)

	def empty_pattern(self, rule:Rule):
		raise GrammarFault("Rule %r has a pattern with no symbols."%rule.name)

	def ambiguous_alternatives(self, rule:Rule, symbol, patterns):
		where = ', '.join(str(p.provenance) for p in patterns)
		raise GrammarFault("Rule %r cannot choose between alternatives starting with %s (declared at %s)."%(rule.name, symbol, where))

	def rule_without_patterns(self, rule:Rule):
		raise GrammarFault("Rule %r has no patterns."%rule.name)

class SimpleFaultHandler(FaultHandler):
	""" Protocols cannot be instantiated, so here's a simple way to get "raise for everything" behavior. """
	pass


class _Dispatch(NamedTuple):
	by_keyword: dict
	by_kind: dict

RuleRef = Union[Rule, str]

class Registry:
	"""
	Owns every rule of one grammar. Each parser must have its own registry, because
	project files extend the grammar as they go.
	"""
	def __init__(self):
		self.__rules:dict[str, Rule] = {}
		self.__awaiting_action = False
		self.__forget()

	def __forget(self):
		self.__nullable = None
		self.__first = {}
		self.__pattern_first = {}
		self.__dispatch = {}

	# Declaration API

	def define_rule(self, name:str, *, optional=False, repeatable=False, description=None) -> Rule:
		if name in self.__rules: SimpleFaultHandler().rule_redeclared(name)
		rule = self.__rules[name] = Rule(name, optional=optional, repeatable=repeatable, description=description)
		self.__forget()
		return rule

	def lookup(self, name:str) -> Rule:
		try: return self.__rules[name]
		except KeyError: raise GrammarFault("No rule named %r has been declared."%name) from None

	def __resolve(self, rule:RuleRef) -> Rule:
		return self.lookup(rule) if isinstance(rule, str) else rule

	def mark_optional(self, rule:RuleRef):
		self.__resolve(rule).optional = True
		self.__forget()

	def mark_repeatable(self, rule:RuleRef):
		self.__resolve(rule).repeatable = True
		self.__forget()

	def add_pattern(self, rule:RuleRef, symbols:Iterable[Symbol], action:Optional[Action]=None, doc:Optional[PatternDoc]=None, provenance=None) -> Pattern:
		rule = self.__resolve(rule)
		if provenance is None:
			caller = inspect.currentframe().f_back
			provenance = inspect.getframeinfo(caller)[:2]
		pattern = Pattern(symbols, action, doc, provenance)
		if not pattern.symbols: SimpleFaultHandler().empty_pattern(rule)
		rule.patterns.append(pattern)
		self.__forget()
		return pattern

	def extend(self, rule:RuleRef, symbols:Iterable[Symbol], action:Optional[Action]=None, doc:Optional[PatternDoc]=None) -> Pattern:
		"""
		Add a pattern to a rule while a parse may be underway. The new alternative must
		not collide with any existing one, since there is nobody left to validate it.
		"""
		rule = self.__resolve(rule)
		caller = inspect.currentframe().f_back
		pattern = self.add_pattern(rule, symbols, action, doc, provenance=inspect.getframeinfo(caller)[:2])
		self.__check_dispatch(rule, SimpleFaultHandler())
		logger.debug("extended rule %s with %s", rule.name, pattern)
		return pattern

	def pattern(self, name:str, *symbols:Symbol, keyword=None, doc=None, args=None, also=()):
		"""
		Decorates a callable as applying when the given pattern is recognized.
		The callable receives the parse context and then one value per non-keyword symbol.
		For patterns that need no action, call as
			grammar.pattern('number', INTEGER)(None)
		For normal patterns, call as
			@grammar.pattern('taskHeader', K('task'), N('newId'), STRING)
			def task_header(ctx, task_id, name): ...
		"""
		assert not self.__awaiting_action, "You forgot to provide the action for the prior pattern."
		self.__awaiting_action = True
		rule = self.lookup(name)
		documentation = None
		if doc is not None or args:
			argdocs = tuple(sorted((i, ArgDoc(*a)) for i, a in (args or {}).items()))
			documentation = PatternDoc(keyword, inspect.cleandoc(doc or ''), argdocs, tuple(also))
		provenance = inspect.getframeinfo(inspect.currentframe().f_back)[:2]
		def decorate(fn=None):
			assert self.__awaiting_action
			self.__awaiting_action = False
			self.add_pattern(rule, symbols, fn, documentation, provenance=provenance)
			return fn
		return decorate

	# Questions the engine asks

	def __contains__(self, name): return name in self.__rules
	def __iter__(self): return iter(self.__rules.values())
	def __len__(self): return len(self.__rules)

	def nullable(self, rule:RuleRef) -> bool:
		""" Can the rule match without consuming anything? """
		if self.__nullable is None:
			def grow(known):
				for r in self.__rules.values():
					if r.name not in known and any(all(self.__symbol_nullable(s, known) for s in p.symbols) for p in r.patterns):
						yield r.name
			self.__nullable = foundation.fixed_point({r.name for r in self.__rules.values() if r.optional}, grow)
		return self.__resolve(rule).name in self.__nullable

	@staticmethod
	def __symbol_nullable(symbol, known) -> bool:
		return isinstance(symbol, NonTerminal) and symbol.name in known

	def __leading(self, symbols) -> Iterable[Symbol]:
		""" The symbols whose FIRST sets contribute to the FIRST set of a symbol sequence. """
		for symbol in symbols:
			yield symbol
			if not (isinstance(symbol, NonTerminal) and self.nullable(symbol.name)): break

	def __closure(self, roots) -> frozenset:
		def successors(symbol):
			if isinstance(symbol, NonTerminal):
				return [s for p in self.lookup(symbol.name).patterns for s in self.__leading(p.symbols)]
		return frozenset(s for s in foundation.transitive_closure(roots, successors) if not isinstance(s, NonTerminal))

	def first(self, rule:RuleRef) -> frozenset:
		""" The Keywords and Terminals that can start a match of the rule. """
		name = self.__resolve(rule).name
		if name not in self.__first:
			self.__first[name] = self.__closure([NonTerminal(name)])
		return self.__first[name]

	def pattern_first(self, pattern:Pattern) -> frozenset:
		key = id(pattern)
		if key not in self.__pattern_first:
			self.__pattern_first[key] = self.__closure(self.__leading(pattern.symbols))
		return self.__pattern_first[key]

	def __build_dispatch(self, rule:Rule, fault_handler:FaultHandler) -> _Dispatch:
		by_keyword, by_kind = {}, {}
		for pattern in rule.patterns:
			for symbol in self.pattern_first(pattern):
				table, key = (by_keyword, symbol.text) if isinstance(symbol, Keyword) else (by_kind, symbol.kind)
				if key in table and table[key] is not pattern:
					fault_handler.ambiguous_alternatives(rule, symbol, [table[key], pattern])
				else:
					table.setdefault(key, pattern)
		return _Dispatch(by_keyword, by_kind)

	def __check_dispatch(self, rule:Rule, fault_handler:FaultHandler):
		self.__dispatch[rule.name] = self.__build_dispatch(rule, fault_handler)

	def select(self, rule:RuleRef, token:Token) -> Optional[Pattern]:
		""" Which pattern of the rule does this lookahead token begin, if any? """
		rule = self.__resolve(rule)
		if rule.name not in self.__dispatch:
			self.__dispatch[rule.name] = self.__build_dispatch(rule, _LenientFaultHandler())
		dispatch = self.__dispatch[rule.name]
		if token.kind in KEYWORD_KINDS and token.text in dispatch.by_keyword:
			return dispatch.by_keyword[token.text]
		return dispatch.by_kind.get(token.kind)

	def expected(self, rule:RuleRef) -> list[str]:
		""" Human-readable list of what could start the rule. Good for error messages. """
		words = set()
		for symbol in self.first(rule):
			words.add(repr(symbol.text) if isinstance(symbol, Keyword) else symbol.kind.description)
		return sorted(words)

	def validate(self, fault_handler:FaultHandler=SimpleFaultHandler()):
		"""
		Calls the fault handler with every identified fault. The default fault handler
		raises an exception for the first error noticed.
		"""
		for rule in self.__rules.values():
			if not rule.patterns: fault_handler.rule_without_patterns(rule)
			for pattern in rule.patterns:
				for symbol in pattern.symbols:
					if isinstance(symbol, NonTerminal) and symbol.name not in self.__rules:
						fault_handler.undeclared_rule(symbol.name, rule)
		for rule in self.__rules.values():
			self.__build_dispatch(rule, fault_handler)

	def keyword_docs(self) -> list[tuple[str, PatternDoc]]:
		""" Every documented pattern, sorted by keyword. """
		found = []
		for rule in self.__rules.values():
			for pattern in rule.patterns:
				if pattern.doc is not None:
					found.append((pattern.doc.keyword or rule.name, pattern.doc))
		return sorted(found, key=lambda pair:pair[0])


class _LenientFaultHandler(FaultHandler):
	""" During a parse, the earliest-declared alternative wins an overlap. ``validate`` is where overlaps get reported. """
	def ambiguous_alternatives(self, rule, symbol, patterns): pass
