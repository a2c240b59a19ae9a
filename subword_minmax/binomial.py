"""Precomputed binomial coefficients C(i, j) for 0 <= j <= i <= 64.

The table is built once at import with Pascal's recurrence. Entries are
exposed as plain Python ints so products in the counter never wrap.
"""
import numpy as np
import numba

from .config import MAX_LEN


@numba.njit(cache=True)
def _pascal_table(size):
    """Pascal's triangle in int64 (C(64, 32) ~ 1.8e18 still fits)."""
    table = np.zeros((size, size), dtype=np.int64)
    table[0, 0] = 1
    for i in range(1, size):
        table[i, 0] = 1
        table[i, i] = 1
        for j in range(1, i):
            table[i, j] = table[i - 1, j - 1] + table[i - 1, j]
    return table


# Row MAX_LEN is needed: a run span can cover a whole 64-letter word.
BINOM = _pascal_table(MAX_LEN + 1).tolist()


def binomial(i, j):
    """C(i, j), or 0 outside the precomputed triangle."""
    if i < 0 or j < 0 or i > MAX_LEN or j > i:
        return 0
    return BINOM[i][j]
