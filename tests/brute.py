"""Brute-force references shared by the search tests."""
import sys, os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from subword_minmax.counting import count_naive
from subword_minmax.symmetry import is_primitive


def brute_max(bits, n):
    """Max DP count over subwords of length 2..n-2 with the word's end letters."""
    first = (bits >> (n - 1)) & 1
    last = bits & 1
    best = 1
    for k in range(2, n - 1):
        for sub in range(1 << k):
            if (sub >> (k - 1)) & 1 != first or sub & 1 != last:
                continue
            best = max(best, count_naive((bits, n), (sub, k)))
    return best


def brute_minimum(n):
    """(minimal maximum, sorted primitive minimizers as strings)."""
    values = {bits: brute_max(bits, n) for bits in range(1 << (n - 1))}
    low = min(values.values())
    words = sorted(format(b, f"0{n}b") for b, v in values.items()
                   if v == low and is_primitive(b, n))
    return low, words
