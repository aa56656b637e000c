"""
Assembles the complete project file grammar.

Each module in this package declares the rules for one part of the language. Rules
may refer to rules declared in other modules, so nothing is checked until all of
them are in; then ``validate`` makes sure every reference resolves and every rule
can choose among its alternatives by one token of lookahead.

Every parser needs a registry of its own, because ``extend`` declarations add to it.
"""

import logging

from ..grammar.registry import Registry, FaultHandler, SimpleFaultHandler
from . import common, logical, project, extend, scenarios, tasks, resources, reports

logger = logging.getLogger(__name__)

ROOT = project.ROOT

MODULES = (common, logical, project, extend, scenarios, tasks, resources, reports)

def build_grammar(fault_handler:FaultHandler=SimpleFaultHandler()) -> Registry:
	grammar = Registry()
	for module in MODULES: module.declare(grammar)
	grammar.validate(fault_handler)
	logger.debug("grammar built with %d rules", len(grammar))
	return grammar
