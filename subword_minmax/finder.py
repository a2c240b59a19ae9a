"""Most frequent subwords of a single word.

For a word w of length n the candidates are the subwords of length
2..n-2 that start with w's first letter and end with w's last letter
(any other subword is dominated by one of those with an extra letter).

find(w, bound) is exact whenever the value it returns is <= bound. As
soon as some subword occurs more than `bound` times the word cannot beat
the current record, and find returns early with that subword alone; the
caller then only learns that w is disqualified.

Order of attack, each step returning early on a count > bound:
  1. probes built from the hint (the last disqualifying subword):
     last letter replaced, one letter appended, unchanged;
  2. the hint with one or two interior letters flipped;
  3. words with runs of length 1 or 2 at the hint length
     (probes in steps 1-3 that are not candidates of w are skipped)
  4. every length, closest to the hint length first, enumerating all
     subwords with the right end letters. A length k is skipped when
     C(n, k) < bound (no subword of that length can reach the bound),
     unless bound is the trivial 2**n.
"""
from dataclasses import dataclass, field

from .binomial import BINOM
from .config import RUN_CAPACITY
from .restricted import restricted_words
from .words import BitString, Word


@dataclass
class SubwordRecord:
    """Best known occurrence count of a word and the subwords reaching it."""
    word: BitString
    occ: int = 1
    subwords: list = field(default_factory=list)

    def offer(self, occ, subwords):
        """Merge candidates: better replaces, ties accumulate, worse is ignored."""
        if occ < self.occ:
            return False
        if occ > self.occ:
            self.subwords = []
            self.occ = occ
        self.subwords.extend(subwords)
        return True

    def complemented(self):
        return SubwordRecord(_complement(self.word), self.occ,
                             [_complement(sw) for sw in self.subwords])


class HintState:
    """Last subword that disqualified a word, used to seed the next probes.

    Each search pass (and each worker thread) owns one.
    """
    __slots__ = ("bits", "length")

    def __init__(self, bits=0, length=2):
        self.bits = bits
        self.length = length

    def update(self, subword):
        self.bits = subword.bits
        self.length = subword.length

    def snapshot(self):
        return BitString(self.bits, self.length)

    def __repr__(self):
        return f"HintState({str(self.snapshot())!r})"


def _complement(bs):
    return BitString(~bs.bits & ((1 << bs.length) - 1), bs.length)


def length_order(center, lo, hi):
    """Lengths in [lo, hi], closest to center first: c, c+1, c-1, c+2, ..."""
    if hi < lo:
        return
    center = min(max(center, lo), hi)
    yield center
    d = 1
    while center - d >= lo or center + d <= hi:
        if center + d <= hi:
            yield center + d
        if center - d >= lo:
            yield center - d
        d += 1


class MaxSubwordFinder:
    """Finds the most frequent subwords of words, with early exits.

    Holds a scratch run buffer, so one instance must not be shared by
    concurrent threads (the counter and its cache can be).
    """

    def __init__(self, counter):
        self.counter = counter
        self._scratch = [0] * RUN_CAPACITY

    def _subword(self, bits, length):
        return Word(bits, length, runs=self._scratch)

    # ------------------------------------------------------------------
    # Per-length scans
    # ------------------------------------------------------------------

    def best_of_length(self, word, k, bound=None):
        """(max count, maximizers) over length-k subwords of a 0-led word.

        With a bound: returns None when the length is skipped by the
        binomial rule, and stops at the first count above the bound.
        """
        n = word.length
        if bound is not None and bound != (1 << n) and BINOM[n][k] < bound:
            return None
        count = self.counter.count
        best = 0
        subwords = []
        sw = self._subword(word.bits & 1, k)
        while True:
            occ = count(word, sw)
            if occ >= best:
                if occ > best:
                    subwords = []
                    best = occ
                subwords.append(sw.snapshot())
                if bound is not None and occ > bound:
                    break
            if not sw.successor_by_2():
                break
        return best, subwords

    # ------------------------------------------------------------------
    # Hinted search
    # ------------------------------------------------------------------

    def find(self, word, bound, hint=None):
        """SubwordRecord for word; exact when its occ <= bound."""
        if hint is None:
            hint = HintState()
        if word.length and word.first_letter:
            return self._find(word.complement(), bound, hint).complemented()
        return self._find(word, bound, hint)

    def _probe(self, word, record, bits, length, bound):
        # only candidates of this word: length 2..n-2, same end letters
        if length < 2 or length > word.length - 2:
            return False
        if (bits & 1) != (word.bits & 1) or bits >> (length - 1):
            return False
        sw = self._subword(bits, length)
        occ = self.counter.count(word, sw)
        if occ > bound:
            record.occ = occ
            record.subwords = [sw.snapshot()]
            return True
        return False

    def _find(self, word, bound, hint):
        record = SubwordRecord(word.snapshot())
        last = word.bits & 1
        hbits = hint.bits
        hlen = hint.length

        # 1. hint with the last letter replaced, extended, unchanged
        probes = (((hbits & ~1) | last, hlen),
                  ((hbits << 1) | last, hlen + 1),
                  (hbits, hlen))
        for bits, length in probes:
            if self._probe(word, record, bits, length, bound):
                return record

        # 2. one or two interior letters flipped
        for i in range(1, hlen - 1):
            if self._probe(word, record, hbits ^ (1 << i), hlen, bound):
                return record
        for i in range(1, hlen - 2):
            for j in range(i + 1, hlen - 1):
                bits = hbits ^ (1 << i) ^ (1 << j)
                if self._probe(word, record, bits, hlen, bound):
                    return record

        # 3. runs of length 1 or 2 only
        if 3 <= hlen <= word.length - 2:
            for bits in restricted_words(hlen):
                if self._probe(word, record, bits, hlen, bound):
                    hint.update(record.subwords[0])
                    return record

        # 4. all lengths, nearest to the hint first
        for k in length_order(hlen, 2, word.length - 2):
            scan = self.best_of_length(word, k, bound)
            if scan is None:
                continue
            record.offer(*scan)
            if record.occ > bound:
                hint.update(record.subwords[0])
                break
        return record

    def find_fast(self, word, bound):
        """Hinted scan limited to lengths n//4 .. n//2 - 1 (local search)."""
        if word.length and word.first_letter:
            return self._find_fast(word.complement(), bound).complemented()
        return self._find_fast(word, bound)

    def _find_fast(self, word, bound):
        record = SubwordRecord(word.snapshot())
        n = word.length
        for k in range(max(2, n // 4), n // 2):
            scan = self.best_of_length(word, k, bound)
            if scan is None:
                continue
            record.offer(*scan)
            if record.occ > bound:
                break
        return record

    # ------------------------------------------------------------------
    # Complete scans (no bound)
    # ------------------------------------------------------------------

    def max_record(self, word):
        """Exact SubwordRecord over all lengths 2..n-2, no early exit."""
        if word.length and word.first_letter:
            return self._max_record(word.complement(), 2, word.length - 2).complemented()
        return self._max_record(word, 2, word.length - 2)

    def _max_record(self, word, lo, hi):
        record = SubwordRecord(word.snapshot())
        for k in range(lo, hi + 1):
            record.offer(*self.best_of_length(word, k))
        return record

    def fast_record(self, word):
        """Exact SubwordRecord over lengths n//4 .. n//2 - 1 only."""
        n = word.length
        lo = max(2, n // 4)
        if word.length and word.first_letter:
            return self._max_record(word.complement(), lo, n // 2 - 1).complemented()
        return self._max_record(word, lo, n // 2 - 1)

    def max_occurrences(self, word):
        """Maximum subword count over lengths 2..n-2 (1 for n < 4)."""
        return self.max_record(word).occ

    def max_occurrences_fast(self, word):
        """Maximum over lengths n//4 .. n//2 - 1 only, a quick estimate."""
        return self.fast_record(word).occ
