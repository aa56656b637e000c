""" The command line entry point. """
import contextlib, io, os, tempfile, unittest
from tjparse.__main__ import main


class TestCommandLine(unittest.TestCase):
	def run_main(self, *argv):
		out, err = io.StringIO(), io.StringIO()
		with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
			status = main(list(argv))
		return status, out.getvalue(), err.getvalue()

	def test_00_keywords(self):
		status, out, err = self.run_main('--keywords')
		self.assertEqual(0, status)
		self.assertIn('allocate', out)
		self.assertIn('timingresolution', out)

	def test_01_parse_a_file(self):
		with tempfile.TemporaryDirectory() as directory:
			good = os.path.join(directory, 'good.tjp')
			with open(good, 'w') as fh: fh.write('project "p" "Demo" "1.0" 2024-01-01 - 2024-02-01 { task t "T" }')
			bad = os.path.join(directory, 'bad.tjp')
			with open(bad, 'w') as fh: fh.write('project "p" "Demo" "1.0" 2024-01-01 - 2024-02-01 { task t "T" { complete 150 } }')
			status, out, err = self.run_main(good)
			self.assertEqual(0, status)
			self.assertIn('1 task(s)', out)
			status, out, err = self.run_main(bad)
			self.assertEqual(1, status)
			self.assertIn('task_complete', err)


if __name__ == '__main__':
	unittest.main()
