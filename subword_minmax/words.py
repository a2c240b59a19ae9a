"""Run-length representation of binary words.

A word of length n is packed into an int with the leftmost letter as the
most significant of the n used bits. Alongside the bits we keep the run
lengths from left to right. The first run is always labeled "0": for a
word starting with 1 the same run array is read with the letters swapped,
so callers must know which letter the first run holds.

Words are mutated in place by the successor and append/remove operators
for the duration of one search pass. Records keep immutable BitString
snapshots instead.
"""
from collections import namedtuple

from .config import MAX_LEN, RUN_CAPACITY


class BitString(namedtuple("BitString", ["bits", "length"])):
    """Immutable (bits, length) snapshot of a word."""
    __slots__ = ()

    def __str__(self):
        return bits_to_string(self.bits, self.length)


# Index range [start, start + count) into a shared run list.
RunView = namedtuple("RunView", ["bits", "length", "runs", "start", "count"])


def bits_to_string(bits, length):
    """'0'/'1' string, leftmost character = most significant used bit."""
    if length == 0:
        return ""
    return format(bits & ((1 << length) - 1), f"0{length}b")


def parse_word(text, length=None):
    """Validate a 0/1 string and return its (bits, length)."""
    if not isinstance(text, str) or not text:
        raise ValueError(f"word must be a non-empty 0/1 string, got {text!r}")
    if len(text) > MAX_LEN:
        raise ValueError(f"word longer than {MAX_LEN} letters: {len(text)}")
    if any(c not in "01" for c in text):
        raise ValueError(f"word must contain only '0' and '1': {text!r}")
    if length is not None and len(text) != length:
        raise ValueError(f"word {text!r} has length {len(text)}, expected {length}")
    return int(text, 2), len(text)


def trailing_zeros(x):
    """Number of trailing zero bits of a positive int."""
    return (x & -x).bit_length() - 1


def reverse_bits(bits, length):
    rev = 0
    for _ in range(length):
        rev = (rev << 1) | (bits & 1)
        bits >>= 1
    return rev


class Word:
    """Binary word with an incrementally maintained run-length encoding."""

    __slots__ = ("bits", "length", "runs", "run_count")

    def __init__(self, bits, length, runs=None):
        if length < 0 or length > MAX_LEN:
            raise ValueError(f"word length must be between 0 and {MAX_LEN}, got {length}")
        self.runs = runs if runs is not None else [0] * RUN_CAPACITY
        self.bits = bits & ((1 << length) - 1)
        self.length = length
        self.run_count = 0
        self._compute_runs()

    @classmethod
    def build(cls, bits, length):
        return cls(bits, length)

    @classmethod
    def from_string(cls, text):
        bits, length = parse_word(text)
        return cls(bits, length)

    def _compute_runs(self):
        """Fill runs from the bits.

        Reverse the bits so that the leftmost letter is bit 0, complement
        when it is a 1 (first run reads as zeros), then strip blocks of
        trailing zeros, complementing after each block.
        """
        unread = self.length
        if unread == 0:
            self.run_count = 0
            return
        mask = (1 << unread) - 1
        rev = reverse_bits(self.bits, unread)
        if rev & 1:
            rev = ~rev & mask
        count = 0
        while True:
            if rev == 0:
                self.runs[count] = unread
                count += 1
                break
            zcnt = trailing_zeros(rev)
            if zcnt >= unread:
                self.runs[count] = unread
                count += 1
                break
            self.runs[count] = zcnt
            count += 1
            unread -= zcnt
            rev >>= zcnt
            rev = ~rev & ((1 << unread) - 1)
        self.run_count = count

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def first_letter(self):
        return (self.bits >> (self.length - 1)) & 1 if self.length else 0

    @property
    def last_letter(self):
        return self.bits & 1

    def run_list(self):
        return self.runs[:self.run_count]

    def snapshot(self):
        return BitString(self.bits, self.length)

    def copy(self):
        other = Word.__new__(Word)
        other.bits = self.bits
        other.length = self.length
        other.runs = list(self.runs)
        other.run_count = self.run_count
        return other

    def complement(self):
        """New word with 0 and 1 exchanged (same runs)."""
        other = self.copy()
        other.bits = ~self.bits & ((1 << self.length) - 1)
        return other

    def to_string(self):
        return bits_to_string(self.bits, self.length)

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"Word({self.to_string()!r}, runs={self.run_list()})"

    def __eq__(self, other):
        if not isinstance(other, Word):
            return NotImplemented
        return (self.bits == other.bits and self.length == other.length
                and self.run_count == other.run_count
                and self.run_list() == other.run_list())

    def __hash__(self):
        return hash((self.bits, self.length))

    def check(self):
        """Raise RuntimeError if the run array disagrees with the bits."""
        live = self.runs[:self.run_count]
        if any(r <= 0 for r in live) or sum(live) != self.length:
            raise RuntimeError(
                f"run array out of sync: bits={self.to_string()!r}, runs={live}")
        if self.bits >> self.length:
            raise RuntimeError(f"bits exceed word length {self.length}: {self.bits:b}")
        fresh = Word(self.bits, self.length)
        if fresh.run_list() != live:
            raise RuntimeError(
                f"run array {live} does not encode {self.to_string()!r}")

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def successor_by_1(self):
        """Add 1 to the bits, keeping the runs in sync.

        The word must start with 0. Returns False without touching the
        word at the last pattern 01...1 (or the single letter 0).
        """
        runs = self.runs
        rc = self.run_count
        if rc & 1:
            # ends with 0
            if runs[rc - 1] > 1:
                runs[rc - 1] -= 1
                runs[rc] = 1
                rc += 1
            else:
                if rc == 1:
                    return False
                rc -= 1
                runs[rc - 1] += 1
        else:
            # ends with 1
            if runs[rc - 2] > 1:
                runs[rc] = runs[rc - 1]
                runs[rc - 1] = 1
                runs[rc - 2] -= 1
                rc += 1
            else:
                if rc == 2:
                    return False
                runs[rc - 3] += 1
                runs[rc - 2] = runs[rc - 1]
                rc -= 1
        self.run_count = rc
        self.bits += 1
        return True

    def successor_by_2(self):
        """Add 2, which keeps both the first and the last letter."""
        if not self.successor_by_1():
            return False
        return self.successor_by_1()

    def append_bit(self, bit):
        bit &= 1
        if self.length >= MAX_LEN:
            raise ValueError(f"cannot extend a word beyond {MAX_LEN} letters")
        rc = self.run_count
        if rc == 0 or (self.bits & 1) != bit:
            # opens a new run
            self.runs[rc] = 1
            self.run_count = rc + 1
        else:
            self.runs[rc - 1] += 1
        self.bits = (self.bits << 1) | bit
        self.length += 1

    def remove_last_bit(self):
        if self.length == 0:
            raise ValueError("cannot remove a letter from the empty word")
        self.bits >>= 1
        self.length -= 1
        self.runs[self.run_count - 1] -= 1
        if self.runs[self.run_count - 1] == 0:
            self.run_count -= 1

    # ------------------------------------------------------------------
    # Views for divide and conquer
    # ------------------------------------------------------------------

    def view(self):
        return RunView(self.bits, self.length, self.runs, 0, self.run_count)

    def cut_front(self, k):
        return cut_front(self.view(), k)

    def cut_back(self, k):
        return cut_back(self.view(), k)


def cut_front(view, k):
    """View of runs [0, k) of a view."""
    bits, length, runs, start, _ = view
    acc = sum(runs[start:start + k])
    return RunView(bits >> (length - acc), acc, runs, start, k)


def cut_back(view, k):
    """View of runs [k, count) of a view."""
    bits, _, runs, start, count = view
    acc = sum(runs[start + k:start + count])
    return RunView(bits & ((1 << acc) - 1), acc, runs, start + k, count - k)
