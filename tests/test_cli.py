"""Command-line parsing, validation and output."""
import io
import os
import sys
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import mock

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from subword_minmax import cli, solvers


def run_cli(argv):
    out = io.StringIO()
    with redirect_stdout(out):
        code = cli.main(argv)
    return code, out.getvalue()


class TestCli(unittest.TestCase):
    def test_count(self):
        code, out = run_cli(["count", "0101", "01"])
        self.assertEqual(code, 0)
        self.assertIn("01 occurs 3 times in 0101", out)

    def test_word(self):
        code, out = run_cli(["word", "0011"])
        self.assertIn("Maxocc of 0011: 4", out)
        self.assertIn("  01", out)

    def test_search_reports_words(self):
        code, out = run_cli(["search", "2"])
        self.assertEqual(code, 0)
        self.assertIn("Minimal maxocc: 1 (2 words)", out)
        self.assertIn("  00  occ=1", out)
        self.assertIn("  01  occ=1", out)

    def test_search_mode_dispatch(self):
        best = solvers.evaluate_mode("hinted", 6)
        with mock.patch.object(cli.solvers, "evaluate_mode", return_value=best) as ev:
            run_cli(["search", "6", "--mode", "parallel-pruned", "--threads", "2",
                     "--hint", "9"])
        ev.assert_called_once_with("parallel-pruned", 6, hint=9, threads=2, verbose=False)

    def test_meta_dispatch(self):
        best = solvers.evaluate_mode("descent", 8, radius=1, max_iter=1, seed=0)
        with mock.patch.object(cli.solvers, "evaluate_mode", return_value=best) as ev:
            run_cli(["meta", "8", "--radius", "1", "--max-iter", "1", "--seed", "0"])
        ev.assert_called_once_with("descent", 8, radius=1, max_iter=1, seed=0,
                                   verbose=False)

    def test_histo(self):
        code, out = run_cli(["histo", "2"])
        self.assertIn("       1: 2", out)

    def test_insert(self):
        code, out = run_cli(["insert", "0010110111"])
        self.assertIn("Best insertion:", out)

    def test_invalid_values_exit_2(self):
        for argv in (["search", "0"], ["search", "70"], ["word", "0102"],
                     ["search", "8", "--hint", "0"],
                     ["search", "8", "--mode", "parallel", "--threads", "3"],
                     ["search", "8", "--mode", "bogus"], []):
            with redirect_stderr(io.StringIO()), redirect_stdout(io.StringIO()):
                with self.assertRaises(SystemExit) as ctx:
                    cli.main(argv)
            self.assertEqual(ctx.exception.code, 2, argv)


if __name__ == "__main__":
    unittest.main()
