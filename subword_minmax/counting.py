"""Exact subword (scattered subsequence) occurrence counting.

count(w, sw) is the number of strictly increasing index maps embedding sw
into w. The counter works on run-length encodings:

  1. Align: if w and sw start (end) with different letters, the first
     (last) run of w cannot take part in any embedding and is dropped.
  2. Split sw at its middle run (length m). Greedy scans from both ends
     of w give the first run lo where the middle run can start and the
     last run hi where it can end.
  3. lo == hi: the middle run sits inside one run of length L, so
        count = C(L, m) * count(left parts) * count(right parts).
     Otherwise sum over every span [k, l] of same-letter runs of w in
     [lo, hi] the number of ways the middle run uses runs k and l (and
     any of the runs in between) by inclusion-exclusion over binomials
     of the span lengths, times the counts of the two sides.

Intermediate results for small word views are memoized in a shared cache
keyed by (word bits, subword bits) within tables indexed by the pair of
lengths.
"""
import numpy as np
import numba

from .binomial import BINOM
from .config import MAX_LEN, MAX_CACHE_RUN
from .words import Word, parse_word


# =====================================================================
# Memoization table
# =====================================================================

class SubwordCache:
    """Append-only memo for subword counts, partitioned by length pair.

    Once insertion is disabled (parallel mode) the cache is only read, so
    it can be shared by several threads.
    """

    def __init__(self, max_len=MAX_LEN):
        self.max_len = max_len
        self._tables = [[{} for _ in range(max_len + 1)]
                        for _ in range(max_len + 1)]
        self.insertion_enabled = True

    def lookup(self, word_len, sub_len, word_bits, sub_bits):
        return self._tables[word_len][sub_len].get((word_bits, sub_bits))

    def insert(self, word_len, sub_len, word_bits, sub_bits, value):
        if self.insertion_enabled:
            self._tables[word_len][sub_len][(word_bits, sub_bits)] = value

    def disable_insertion(self):
        """Switch to read-only mode for the rest of the process."""
        self.insertion_enabled = False

    def __len__(self):
        return sum(len(t) for row in self._tables for t in row)

    def check(self):
        """Raise RuntimeError if an entry is filed under the wrong lengths."""
        for word_len, row in enumerate(self._tables):
            for sub_len, table in enumerate(row):
                for (word_bits, sub_bits), value in table.items():
                    if word_bits >> word_len or sub_bits >> sub_len or value < 0:
                        raise RuntimeError(
                            f"cache entry ({word_bits:b}, {sub_bits:b}) -> {value} "
                            f"inconsistent with lengths ({word_len}, {sub_len})")


# =====================================================================
# Run scans
# =====================================================================

def _left_index(wruns, ws, wc, sruns, ss, sc):
    """First run of w after the leftmost embedding of sw's runs, or -1.

    Runs of w shorter than the current run of sw are consumed entirely
    (skipping the other letter in between).
    """
    if sc == 0:
        return 0
    idx = 0
    sidx = 0
    cur = sruns[ss]
    while sidx < sc:
        if idx >= wc:
            return -1
        r = wruns[ws + idx]
        if r < cur:
            cur -= r
            idx += 2
        else:
            sidx += 1
            idx += 1
            if sidx < sc:
                cur = sruns[ss + sidx]
    return idx


def _right_index(wruns, ws, wc, sruns, ss, sc):
    """Last run of w before the rightmost embedding of sw's runs, or -1."""
    idx = wc - 1
    if sc == 0:
        return idx
    sidx = sc - 1
    cur = sruns[ss + sidx]
    while sidx >= 0:
        if idx < 0:
            return -1
        r = wruns[ws + idx]
        if r < cur:
            cur -= r
            idx -= 2
        else:
            sidx -= 1
            idx -= 1
            if sidx >= 0:
                cur = sruns[ss + sidx]
    return idx


# =====================================================================
# Counter
# =====================================================================

class SubwordCounter:
    """Divide-and-conquer counter over run-length encodings."""

    def __init__(self, cache=None):
        self.cache = cache if cache is not None else SubwordCache()

    def count(self, word, subword):
        """Occurrences of subword in word (both Word instances)."""
        return self.count_views(word.view(), subword.view())

    def count_bits(self, word_bits, word_len, sub_bits, sub_len):
        return self.count(Word(word_bits, word_len), Word(sub_bits, sub_len))

    def count_views(self, wview, sview):
        wbits, wlen, wruns, ws, wc = wview
        sbits, slen, sruns, ss, sc = sview
        if slen == 0:
            return 1
        if wlen < slen:
            return 0
        # same first letter
        if ((wbits >> (wlen - 1)) & 1) != ((sbits >> (slen - 1)) & 1):
            wlen -= wruns[ws]
            ws += 1
            wc -= 1
            if wc == 0:
                return 0
            wbits &= (1 << wlen) - 1
        # same last letter
        if (wbits & 1) != (sbits & 1):
            last = wruns[ws + wc - 1]
            wlen -= last
            wbits >>= last
            wc -= 1
            if wc == 0:
                return 0
        return self._count_raw(wbits, wlen, wruns, ws, wc,
                               sbits, slen, sruns, ss, sc, wlen)

    def _count_raw(self, wbits, wlen, wruns, ws, wc,
                   sbits, slen, sruns, ss, sc, outer_len):
        """Count for aligned views (same first and same last letter)."""
        if sc == 0:
            return 1
        if wc < sc:
            return 0
        mid = sc // 2
        m = sruns[ss + mid]
        lo = _left_index(wruns, ws, wc, sruns, ss, mid)
        hi = _right_index(wruns, ws, wc, sruns, ss + mid + 1, sc - mid - 1)
        if lo < 0 or lo > hi or hi >= wc:
            return 0

        cacheable = wc < MAX_CACHE_RUN
        if cacheable:
            hit = self.cache.lookup(wlen, slen, wbits, sbits)
            if hit is not None:
                return hit

        # subword halves around the middle run
        front_len = 0
        for i in range(ss, ss + mid):
            front_len += sruns[i]
        back_len = slen - front_len - m
        sf_bits = sbits >> (slen - front_len)
        sb_bits = sbits & ((1 << back_len) - 1)
        sb_start = ss + mid + 1
        sb_count = sc - mid - 1

        # prefix lengths of w's runs, relative to the view
        prefix = [0] * (wc + 1)
        for i in range(wc):
            prefix[i + 1] = prefix[i] + wruns[ws + i]

        total_count = 0
        if lo == hi:
            ways = BINOM[wruns[ws + lo]][m]
            if ways:
                left_len = prefix[lo]
                right_len = wlen - prefix[lo + 1]
                ways *= self._count_raw(
                    wbits >> (wlen - left_len), left_len, wruns, ws, lo,
                    sf_bits, front_len, sruns, ss, mid, outer_len)
                if ways:
                    ways *= self._count_raw(
                        wbits & ((1 << right_len) - 1), right_len, wruns,
                        ws + lo + 1, wc - lo - 1,
                        sb_bits, back_len, sruns, sb_start, sb_count,
                        outer_len)
            total_count = ways
        else:
            for k in range(lo, hi + 1, 2):
                rk = wruns[ws + k]
                left_len = prefix[k]
                left = None
                span = 0
                for l in range(k, hi + 1, 2):
                    rl = wruns[ws + l]
                    # letters available to the middle run: runs k, k+2, ..., l
                    span += rl
                    inner = span - rk - rl
                    # inclusion-exclusion: use at least one letter of run k
                    # and of run l; when k == l only the first term survives
                    mult = (BINOM[span][m]
                            - BINOM[inner + rk][m]
                            - BINOM[inner + rl][m])
                    if inner >= 0:
                        mult += BINOM[inner][m]
                    if mult <= 0:
                        continue
                    if left is None:
                        left = self._count_raw(
                            wbits >> (wlen - left_len), left_len, wruns, ws, k,
                            sf_bits, front_len, sruns, ss, mid, outer_len)
                    if not left:
                        break
                    right_len = wlen - prefix[l + 1]
                    right = self._count_raw(
                        wbits & ((1 << right_len) - 1), right_len, wruns,
                        ws + l + 1, wc - l - 1,
                        sb_bits, back_len, sruns, sb_start, sb_count,
                        outer_len)
                    total_count += mult * left * right
        if total_count < 0:
            raise RuntimeError(
                f"negative subword count {total_count} for word bits "
                f"{wbits:b} (len {wlen}), subword bits {sbits:b} (len {slen})")

        if cacheable and wlen <= outer_len:
            self.cache.insert(wlen, slen, wbits, sbits, total_count)
        return total_count


# =====================================================================
# Reference counter (quadratic DP), used for cross-checks
# =====================================================================

@numba.njit(cache=True)
def _count_embeddings(word, sub):
    """Number of embeddings of sub in word, both uint8 letter arrays."""
    k = sub.shape[0]
    ways = np.zeros(k + 1, dtype=np.int64)
    ways[0] = 1
    for i in range(word.shape[0]):
        for j in range(k, 0, -1):
            if word[i] == sub[j - 1]:
                ways[j] += ways[j - 1]
    return ways[k]


def letters(bits, length):
    """uint8 array of the letters, leftmost first."""
    return np.array([(bits >> (length - 1 - i)) & 1 for i in range(length)],
                    dtype=np.uint8)


def count_naive(word, subword):
    """DP count for two 0/1 strings (or (bits, length) pairs)."""
    if isinstance(word, str):
        word = parse_word(word)
    if isinstance(subword, str):
        subword = parse_word(subword)
    return int(_count_embeddings(letters(*word), letters(*subword)))


def warmup():
    """Trigger Numba compilation before timing-sensitive work."""
    _count_embeddings(letters(0b0101, 4), letters(0b01, 2))
