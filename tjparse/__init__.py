"""
tjparse: a parser for project files in the TaskJuggler style.

The grammar is a table of rules that a project file can add to while it is being
parsed. See ``tjparse.grammar`` for the machinery and ``tjparse.syntax`` for the
language itself.
"""

from .grammar.interface import LanguageError, GrammarFault, SemanticError, ScanError, ParseAborted
from .project_file import ProjectFileParser, load, loads
from .support.failureprone import MessageHandler, Diagnostic
