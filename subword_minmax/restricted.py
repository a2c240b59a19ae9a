"""Words whose runs all have length 1 or 2.

There are Fibonacci-many such words of a given length, far fewer than
2**n, and they are frequent maximizers of subword counts, which makes them
a cheap set of probes before a full enumeration.

Order: start from 0011 0011 ... (all runs of length 2), split the last
length-2 run into two unit runs, and when the tail is all unit runs,
shorten the last length-2 run before it and refill with length-2 runs.
Every word starts with 0; the last word is 0101...
"""
from .config import MAX_LEN


def _fill_pairs(bits, remaining):
    """Append `remaining` letters as runs of length 2 (last one may be 1)."""
    last = bits & 1
    last |= last << 1
    while remaining >= 2:
        last = 3 - last
        bits = (bits << 2) | last
        remaining -= 2
    if remaining == 1:
        last = 3 - last
        bits = (bits << 1) | (last & 1)
    return bits


def restricted_words(n):
    """Yield the bits of every length-n word with runs of length 1 or 2."""
    if n < 2 or n > MAX_LEN:
        raise ValueError(f"restricted words need 2 <= n <= {MAX_LEN}, got {n}")
    # the first two letters are the implicit leading 00
    cur = _fill_pairs(0, n - 2)
    while True:
        yield cur
        if not (cur ^ (cur >> 1)) & 1:
            # last run has length 2: split it
            cur ^= 1
            continue
        # strip the unit runs at the end
        remaining = 0
        while (cur ^ (cur >> 1)) & 1:
            cur >>= 1
            remaining += 1
        if remaining == n - 1:
            return
        # shorten the length-2 run in front of them and refill
        cur >>= 1
        remaining += 1
        cur = _fill_pairs(cur, remaining)


def count_restricted(n):
    return sum(1 for _ in restricted_words(n))
