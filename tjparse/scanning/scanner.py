"""
A reference scanner for project files.

The grammar engine does not care where its tokens come from, but a parser that cannot
read a file is not much use. This scanner reads one master file (or a string), and
handles the three things the language needs from its lexical layer:

* ``include "other.tji"`` pushes another file onto a stack. Its tokens come next; when
  it runs dry, scanning resumes in the including file right after the directive.
* ``macro name [ body ]`` stores a macro, and ``${name}`` anywhere later splices the
  body in place, again by pushing a frame onto the same stack.
* One token of push-back, or several, for patterns that peek before committing.

Lexical rules are tried in the order given by ``TOKEN_RULES``: the first alternative
that matches at the current position wins, so dates must come before integers and
dotted identifiers before plain ones.
"""

import datetime, logging, os, re
from typing import Optional

from .tokens import Token, TokenKind, Macro
from ..grammar.interface import ScanError
from ..support.failureprone import SourceText, Location, Diagnostic, Severity, ErrorKind

logger = logging.getLogger(__name__)

IGNORE = 'IGNORE'
MACRO_CALL = 'MACRO_CALL'

TOKEN_RULES = [
	(IGNORE, r'\s+|\#[^\n]*|//[^\n]*|/\*.*?\*/'),
	(MACRO_CALL, r'\$\{\s*[A-Za-z_]\w*\s*\}'),
	(TokenKind.MACRO, r'\[[^\]]*\]'),
	(TokenKind.STRING, r'"(?:[^"\\]|\\.)*"|\'(?:[^\'\\]|\\.)*\''),
	(TokenKind.DATE, r'\d{4}-\d{1,2}-\d{1,2}(?:-\d{1,2}:\d{2}(?::\d{2})?)?'),
	(TokenKind.TIME, r'\d{1,2}:\d{2}'),
	(TokenKind.FLOAT, r'\d+\.\d+'),
	(TokenKind.INTEGER, r'\d+'),
	(TokenKind.RELATIVE_ID, r'!+[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*'),
	(TokenKind.ABSOLUTE_ID, r'[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)+'),
	(TokenKind.ID_WITH_COLON, r'[A-Za-z_]\w*:'),
	(TokenKind.ID, r'[A-Za-z_]\w*'),
	(TokenKind.LITERAL, r'>=|<=|[{}(),\-+~&|<>=]'),
]

def _group_name(kind): return kind if isinstance(kind, str) else kind.name

MASTER_PATTERN = re.compile('|'.join('(?P<%s>%s)'%(_group_name(kind), rx) for kind, rx in TOKEN_RULES), re.DOTALL)
KIND_BY_GROUP = {_group_name(kind):kind for kind, rx in TOKEN_RULES}
ESCAPE = re.compile(r'\\(.)', re.DOTALL)

MAX_INCLUDE_DEPTH = 32

class _Frame:
	""" One level of the inclusion stack: a file, or the body of a macro being expanded. """
	def __init__(self, source:SourceText, directory:str, *, path=None):
		self.source = source
		self.directory = directory
		self.path = path
		self.position = 0
		self.resume = []  # Push-back owed to this frame once the frame above it runs dry.


class TextScanner:
	"""
	Scanner over a master file, or over a string given as ``text``.
	Call ``open()`` before the first ``next_token()``.
	"""
	def __init__(self, master_file:str=None, *, text:str=None, filename:str=None):
		assert (master_file is None) != (text is None), "Give either a master file or some text."
		self.master_file = master_file
		self.text = text
		self.filename = filename if text is not None else master_file
		self.macros = {}
		self.__frames:list[_Frame] = []
		self.__pushback:list[Token] = []
		self.__last:Optional[Token] = None
		self.__eof_location = Location(self.filename, 1, 1)

	def open(self):
		if self.text is not None:
			self.__push(SourceText(self.text, filename=self.filename), os.getcwd())
		else:
			self.__push_file(self.master_file, os.getcwd())

	def close(self):
		self.__frames.clear()
		self.__pushback.clear()

	def __fail(self, code, message, kind=ErrorKind.SYNTAX, location=None):
		raise ScanError(Diagnostic(Severity.ERROR, code, message, location or self.__here(), None, kind))

	def __here(self) -> Location:
		if self.__frames:
			frame = self.__frames[-1]
			return frame.source.location(frame.position)
		return self.__eof_location

	def __push(self, source:SourceText, directory:str, path=None):
		if len(self.__frames) >= MAX_INCLUDE_DEPTH:
			self.__fail('include_depth', 'Include or macro nesting is too deep (%d levels).'%MAX_INCLUDE_DEPTH, ErrorKind.STRUCTURAL)
		self.__frames.append(_Frame(source, directory, path=path))

	def __push_file(self, path:str, directory:str):
		full_path = os.path.normpath(os.path.join(directory, path))
		if any(frame.path == full_path for frame in self.__frames):
			self.__fail('include_recursion', 'File %s includes itself.'%path, ErrorKind.STRUCTURAL)
		try:
			with open(full_path, encoding='utf-8') as fh: content = fh.read()
		except OSError as ex:
			self.__fail('file_open', 'Cannot open file %s: %s'%(path, ex.strerror or ex), ErrorKind.STRUCTURAL)
		except UnicodeDecodeError as ex:
			self.__fail('file_encoding', 'File %s is not UTF-8 text: byte %d cannot be decoded.'%(path, ex.start), ErrorKind.STRUCTURAL)
		logger.debug("entering %s", full_path)
		self.__push(SourceText(content, filename=path), os.path.dirname(full_path), path=full_path)

	def include(self, path:str):
		"""
		Tokens already pushed back belong after the include directive, so they wait
		in the including frame until the included file is exhausted.
		"""
		directory = self.__frames[-1].directory if self.__frames else os.getcwd()
		owed, self.__pushback = self.__pushback, []
		if self.__frames: self.__frames[-1].resume = owed + self.__frames[-1].resume
		self.__push_file(path, directory)

	def add_macro(self, macro:Macro):
		logger.debug("macro %s defined", macro.name)
		self.macros[macro.name] = macro

	@property
	def location(self) -> Location:
		return self.__eof_location if self.__last is None else self.__last.location

	def return_token(self, token:Token):
		self.__pushback.append(token)

	def next_token(self) -> Token:
		if self.__pushback: token = self.__pushback.pop()
		else: token = self.__scan()
		self.__last = token
		return token

	def __scan(self) -> Token:
		while self.__frames:
			frame = self.__frames[-1]
			content = frame.source.content
			if frame.position >= len(content):
				self.__eof_location = frame.source.location(len(content))
				self.__frames.pop()
				if frame.path: logger.debug("leaving %s", frame.path)
				if self.__frames and self.__frames[-1].resume:
					owed, self.__frames[-1].resume = self.__frames[-1].resume, []
					self.__pushback.extend(owed)
					return self.__pushback.pop()
				continue
			match = MASTER_PATTERN.match(content, frame.position)
			if match is None:
				if content[frame.position] in '"\'':
					self.__fail('unterminated_string', 'String is not terminated.')
				self.__fail('bad_char', 'Unexpected character %r.'%content[frame.position])
			location = frame.source.location(frame.position)
			frame.position = match.end()
			kind = KIND_BY_GROUP[match.lastgroup]
			text = match.group()
			if kind == IGNORE: continue
			if kind == MACRO_CALL:
				self.__expand(text[2:-1].strip(), location)
				continue
			return self.__make_token(kind, text, location)
		return Token(TokenKind.EOF, None, '', self.__eof_location)

	def __expand(self, name, location):
		try: macro = self.macros[name]
		except KeyError:
			self.__fail('undefined_macro', 'Macro %s is not defined.'%name, location=location)
		frame = self.__frames[-1]
		self.__push(SourceText(macro.value, filename=location.filename, first_line=location.line), frame.directory)

	def __make_token(self, kind:TokenKind, text:str, location:Location) -> Token:
		if kind is TokenKind.STRING: value = ESCAPE.sub(r'\1', text[1:-1])
		elif kind is TokenKind.MACRO: value = text[1:-1]
		elif kind is TokenKind.INTEGER: value = int(text)
		elif kind is TokenKind.FLOAT: value = float(text)
		elif kind is TokenKind.DATE: value = self.__date(text, location)
		elif kind is TokenKind.TIME: value = self.__time(text, location)
		elif kind is TokenKind.ID_WITH_COLON: value = text[:-1]
		else: value = text
		return Token(kind, value, text, location)

	def __date(self, text, location) -> datetime.datetime:
		fields = [int(x) for x in re.split(r'[-:]', text)]
		try: return datetime.datetime(*fields)
		except ValueError as ex:
			self.__fail('bad_date', 'Invalid date %s: %s'%(text, ex), location=location)

	def __time(self, text, location) -> int:
		hours, minutes = map(int, text.split(':'))
		if minutes > 59 or hours > 24 or (hours == 24 and minutes):
			self.__fail('bad_time', 'Invalid time of day %s.'%text, location=location)
		return hours * 3600 + minutes * 60
