"""
This module is all about easing over the process to display where things go wrong.

A project file either parses completely or not at all. The first fatal problem aborts
the parse, but before that happens somebody has to tell the user what went wrong and
where. Warnings, on the other hand, accumulate and never stop anything.

Every problem is captured as a ``Diagnostic``: a stable code (so tests and tools can
match on it without parsing English), a human message, a source location, and, where
one applies, the full ID of the property the problem is about. Diagnostics go to a
``MessageHandler`` which collects them and, unless told to keep quiet, prints them to
standard error.

If you can localize where an error came from, you'd generally like to include some
context in the report. The usual strategy is to show the offending line, ideally
with a specific portion highlighted somehow. If you're dealing with a text console
(as many tools do) then the `illustration` function helps: Given a single line of
text and a few parameters, it makes a suitable picture.

The scanner deals in character offsets. The SourceText converts those into line and
column numbers, and slices out the line of text for the illustration.
"""

import bisect, logging, re, sys
from typing import NamedTuple, Optional
from enum import Enum

logger = logging.getLogger(__name__)

LINEBREAK = re.compile(r'\r\n?|\n')

class Severity(Enum):
	NOTICE = "Notice"
	WARNING = "Warning"
	ERROR = "Error"

class ErrorKind(Enum):
	""" Where in the taxonomy a fatal problem sits. All kinds abort the parse the same way. """
	SYNTAX = "syntax"
	SEMANTIC = "semantic"
	STRUCTURAL = "structural"

class Location(NamedTuple):
	filename: Optional[str]
	line: int
	column: int
	excerpt: str = ''

	def __str__(self):
		prefix = "<input>" if self.filename is None else str(self.filename)
		return "%s:%d:%d"%(prefix, self.line, self.column)

class Diagnostic(NamedTuple):
	"""
	Contain all the information necessary to present an error, warning, or notice.

	code: a stable identifier such as 'task_complete'.
	message: explains the issue in plain language.
	location: where in the source the parser was when the issue came up.
	subject: the full ID of the property the issue concerns, if any.
	"""
	severity: Severity
	code: str
	message: str
	location: Optional[Location] = None
	subject: Optional[str] = None
	kind: ErrorKind = ErrorKind.SEMANTIC

	def as_text(self) -> str:
		"""
		This will generate a not-completely-terrible report in text-only format.
		The precise format is subject to change, but basically you should be able to
		print this on stderr and not cry yourself to sleep.
		"""
		head = "%s %s: %s"%(self.severity.value, self.code, self.message)
		if self.subject: head += " (in %s)"%self.subject
		if self.location is None: return head
		lines = ["%s: %s"%(self.location, head)]
		if self.location.excerpt:
			lines.append(illustration(self.location.excerpt, max(0, self.location.column-1), prefix='% 6d :'%self.location.line))
		return "\n".join(lines)

	def __str__(self): return self.as_text()

def illustration(single_line:str, start:int, width:int=0, *, prefix='', caption="near here") -> str:
	""" Builds up a picture of where something appears in a line of text. Useful for polite error messages. """
	blanks = ''.join(c if c == '\t' else ' ' for c in prefix + single_line[:start])
	underline_width = max(1, min(width, len(single_line)-start))
	underline = '^'*underline_width
	return prefix + single_line.rstrip() + '\n' + blanks + underline +" "+caption

class SourceText:
	""" Wrapper for (a section of) source text: participates in half-respectable error-display with context. """
	def __init__(self, content:str, filename:str=None, first_line=1):
		self.content = content
		self.filename = filename
		self.first_line = first_line
		self.__bounds = None

	def __make_bounds(self):
		""" Lazily only find line breaks if it turns out to be necessary for a particular text. """
		if self.__bounds is None:
			inside = [m.end() for m in LINEBREAK.finditer(self.content)]
			self.__bounds = [0] + inside + [len(self.content)]

	def find_row_col(self, index:int):
		""" Based on a character index offset from the start of text. Respects self.first_line. """
		self.__make_bounds()
		row = bisect.bisect_right(self.__bounds, index, hi=len(self.__bounds) - 1) - 1
		col = index - self.__bounds[row]
		return row+self.first_line, col

	def line_of_text(self, row):
		""" Argument respects self.first_line. """
		self.__make_bounds()
		r = max(0, row - self.first_line)
		return self.content[self.__bounds[r]:self.__bounds[r + 1]]

	def location(self, index:int) -> Location:
		""" Columns in a Location count from one, like every editor on the planet. """
		row, col = self.find_row_col(index)
		return Location(self.filename, row, col+1, self.line_of_text(row).rstrip('\r\n'))


class MessageHandler:
	"""
	The sink for diagnostics. Errors and warnings are kept in arrival order.
	Set ``quiet`` to stop the handler from printing as things arrive.
	"""
	def __init__(self, *, quiet=False, stream=None):
		self.quiet = quiet
		self.stream = stream
		self.diagnostics:list[Diagnostic] = []

	@property
	def errors(self) -> list[Diagnostic]:
		return [d for d in self.diagnostics if d.severity is Severity.ERROR]

	@property
	def warnings(self) -> list[Diagnostic]:
		return [d for d in self.diagnostics if d.severity is Severity.WARNING]

	def report(self, diagnostic:Diagnostic):
		self.diagnostics.append(diagnostic)
		if diagnostic.severity is Severity.ERROR: logger.debug("error %s at %s", diagnostic.code, diagnostic.location)
		if not self.quiet: print(diagnostic.as_text(), file=self.stream or sys.stderr)

	def error(self, code, message, *, location=None, subject=None, kind=ErrorKind.SEMANTIC) -> Diagnostic:
		diagnostic = Diagnostic(Severity.ERROR, code, message, location, subject, kind)
		self.report(diagnostic)
		return diagnostic

	def warning(self, code, message, *, location=None, subject=None) -> Diagnostic:
		diagnostic = Diagnostic(Severity.WARNING, code, message, location, subject)
		self.report(diagnostic)
		return diagnostic

	def clear(self): self.diagnostics.clear()
