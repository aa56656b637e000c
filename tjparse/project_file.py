"""
The driver: read a project file, get a Project.

	parser = ProjectFileParser(MessageHandler())
	project = parser.parse('plan.tjp')    # None if it failed; the handler has the details.

or, for code that prefers exceptions,

	project = tjparse.load('plan.tjp')    # raises ParseAborted

Each parse builds its grammar afresh. A project file can extend the grammar, and one
file's extensions have no business in the next file.
"""

import logging
from typing import Optional

from .context import ParseContext
from .grammar.engine import Engine, Failure
from .grammar.interface import ScanError, ParseAborted, TokenSource
from .model.project import Project
from .scanning.scanner import TextScanner
from .support.failureprone import MessageHandler
from .syntax.catalog import build_grammar, ROOT

logger = logging.getLogger(__name__)

class ProjectFileParser:
	def __init__(self, message_handler:MessageHandler=None):
		self.messages = message_handler or MessageHandler()
		self.grammar = None
		self.context = None

	def parse(self, master_file:str) -> Optional[Project]:
		return self.__parse_scanner(TextScanner(master_file))

	def parse_text(self, text:str, filename:str=None) -> Optional[Project]:
		return self.__parse_scanner(TextScanner(text=text, filename=filename))

	def __parse_scanner(self, scanner:TextScanner) -> Optional[Project]:
		logger.info("parsing %s", scanner.filename or '<text>')
		try:
			scanner.open()
			return self.parse_tokens(scanner)
		except ScanError as ex:
			self.messages.report(ex.diagnostic)
			return None
		finally:
			scanner.close()

	def parse_tokens(self, source:TokenSource) -> Optional[Project]:
		""" Parse whatever the token source delivers. Any token source will do. """
		self.grammar = build_grammar()
		self.context = ParseContext(self.grammar, source, self.messages)
		outcome = Engine(self.grammar, source).parse(ROOT, self.context)
		if isinstance(outcome, Failure):
			self.messages.report(outcome.diagnostic)
			logger.info("parse failed: %s", outcome.code)
			return None
		logger.info("parsed %s", outcome.value.summary())
		return outcome.value


def _load(parse, messages) -> Project:
	project = parse(ProjectFileParser(messages))
	if project is None: raise ParseAborted(messages.errors[-1])
	return project

def load(master_file:str, messages:MessageHandler=None) -> Project:
	""" Parse a file, raising ParseAborted if that does not work out. """
	messages = messages or MessageHandler(quiet=True)
	return _load(lambda parser: parser.parse(master_file), messages)

def loads(text:str, filename:str=None, messages:MessageHandler=None) -> Project:
	""" Parse a string, raising ParseAborted if that does not work out. """
	messages = messages or MessageHandler(quiet=True)
	return _load(lambda parser: parser.parse_text(text, filename), messages)
