"""Tests for the thread-partitioned search and the solver entry points."""
import sys, os
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, os.path.dirname(__file__))

from subword_minmax.counting import SubwordCounter
from subword_minmax.parallel import partitioned_search
from subword_minmax.search import exhaustive_search
from subword_minmax import solvers
from brute import brute_minimum


class TestPartitioned(unittest.TestCase):
    def test_matches_exhaustive(self):
        for n in (6, 8, 9):
            low, words = brute_minimum(n)
            ex = exhaustive_search(n, hint=low)
            for threads in (1, 2, 4):
                for mode in ("exhaustive", "pruned"):
                    par = partitioned_search(n, hint=low, threads=threads, mode=mode,
                                             counter=SubwordCounter())
                    self.assertEqual(par.occ, ex.occ)
                    self.assertEqual(sorted(par.words()), sorted(ex.words()))
                    self.assertEqual(sorted(par.words()), words)

    def test_cache_becomes_read_only(self):
        counter = SubwordCounter()
        exhaustive_search(7, counter=counter)
        size = len(counter.cache)
        self.assertGreater(size, 0)
        partitioned_search(8, threads=2, counter=counter)
        self.assertFalse(counter.cache.insertion_enabled)
        self.assertEqual(len(counter.cache), size)
        counter.cache.check()

    def test_more_threads_than_prefixes(self):
        low, words = brute_minimum(4)
        par = partitioned_search(4, hint=low, threads=8, counter=SubwordCounter())
        self.assertEqual(sorted(par.words()), words)

    def test_invalid(self):
        with self.assertRaises(ValueError):
            partitioned_search(8, threads=3)
        with self.assertRaises(ValueError):
            partitioned_search(8, threads=2, mode="descent")


class TestSolvers(unittest.TestCase):
    def test_modes_agree(self):
        n = 8
        low, words = brute_minimum(n)
        for mode in ("hinted", "pruned", "parallel", "parallel-pruned"):
            best = solvers.evaluate_mode(mode, n, hint=low, threads=2)
            self.assertEqual(best.occ, low)
            self.assertEqual(sorted(best.words()), words)

    def test_descent_mode(self):
        best = solvers.evaluate_mode("descent", 10, radius=1, max_iter=2, seed=3)
        self.assertEqual(len(best.records), 1)

    def test_count(self):
        self.assertEqual(solvers.count(0b0101, 4, 0b01, 2), 3)
        self.assertEqual(solvers.count_strings("000111", "01"), 9)

    def test_histogram(self):
        self.assertEqual(sum(solvers.histogram(7).values()), 64)

    def test_analyze_word(self):
        rec = solvers.analyze_word("0011")
        self.assertEqual(rec.occ, 4)
        self.assertEqual([str(s) for s in rec.subwords], ["01"])

    def test_invalid(self):
        with self.assertRaises(ValueError):
            solvers.evaluate_mode("fastest", 8)
        with self.assertRaises(ValueError):
            solvers.evaluate_mode("hinted", 0)
        with self.assertRaises(ValueError):
            solvers.evaluate_mode("hinted", 8, hint=-1)
        with self.assertRaises(ValueError):
            solvers.evaluate_mode("parallel", 8, threads=6)
        with self.assertRaises(ValueError):
            solvers.count(0b10000, 4, 1, 1)
        with self.assertRaises(ValueError):
            solvers.analyze_word("01x1")


if __name__ == '__main__':
    unittest.main()
