"""
Check a project file from the command line:

	python -m tjparse plan.tjp
	python -m tjparse --keywords
"""

import argparse, logging, sys

from .project_file import ProjectFileParser
from .support.failureprone import MessageHandler
from .syntax.catalog import build_grammar

def list_keywords(stream):
	for keyword, doc in build_grammar().keyword_docs():
		first_line = doc.text.splitlines()[0] if doc.text else ''
		print("%-24s %s"%(keyword, first_line), file=stream)

def main(argv=None):
	parser = argparse.ArgumentParser(prog='tjparse', description='Parse a project file and report what it contains.')
	parser.add_argument('file', nargs='?', metavar='FILE', help='the master project file')
	parser.add_argument('--keywords', action='store_true', help='list the documented keywords and exit')
	parser.add_argument('-v', '--verbose', action='count', default=0, help='log progress (twice for debug detail)')
	args = parser.parse_args(argv)

	logging.basicConfig(level=[logging.WARNING, logging.INFO, logging.DEBUG][min(args.verbose, 2)], format='%(levelname)s %(name)s: %(message)s')
	if args.keywords:
		list_keywords(sys.stdout)
		return 0
	if args.file is None: parser.error('a FILE is required unless --keywords is given')

	messages = MessageHandler()
	project = ProjectFileParser(messages).parse(args.file)
	if project is None: return 1
	print(project.summary())
	if messages.warnings: print("%d warning(s)"%len(messages.warnings))
	return 0

if __name__ == '__main__': sys.exit(main())
