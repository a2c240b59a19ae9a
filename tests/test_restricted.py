"""Tests for the generator of words with runs of length 1 or 2."""
import sys, os
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from subword_minmax.restricted import restricted_words, count_restricted
from subword_minmax.words import Word


def fib(n):
    a, b = 1, 1
    for _ in range(n - 1):
        a, b = b, a + b
    return a


class TestRestrictedWords(unittest.TestCase):
    def test_small_lists(self):
        self.assertEqual([format(b, "02b") for b in restricted_words(2)], ["00", "01"])
        self.assertEqual([format(b, "03b") for b in restricted_words(3)],
                         ["001", "011", "010"])
        self.assertEqual([format(b, "04b") for b in restricted_words(4)],
                         ["0011", "0010", "0110", "0100", "0101"])

    def test_fibonacci_counts(self):
        for n in range(2, 25):
            self.assertEqual(count_restricted(n), fib(n + 1))

    def test_matches_brute_force(self):
        for n in range(2, 13):
            expected = set()
            for bits in range(1 << (n - 1)):
                if max(Word(bits, n).run_list()) <= 2:
                    expected.add(bits)
            got = list(restricted_words(n))
            self.assertEqual(len(got), len(set(got)))
            self.assertEqual(set(got), expected)

    def test_first_and_last(self):
        got = list(restricted_words(8))
        self.assertEqual(format(got[0], "08b"), "00110011")
        self.assertEqual(format(got[-1], "08b"), "01010101")

    def test_long_words(self):
        first = next(iter(restricted_words(64)))
        self.assertEqual(Word(first, 64).run_list(), [2] * 32)

    def test_invalid_length(self):
        for n in (0, 1, 65):
            with self.assertRaises(ValueError):
                list(restricted_words(n))


if __name__ == '__main__':
    unittest.main()
