"""Minimization drivers over all binary words of a given length.

  exhaustive_search     every primitive word, in numeric order
  pruned_search         branch and bound on partial words
  local_search_descent  randomized first-improvement descent
  histogram             distribution of the per-word maximum
  insert_heuristic      best single-letter insertion into a word

Only words starting with 0 are enumerated; complement, reversal and
their composition preserve subword counts, so each symmetry class is
represented by its numerically smallest member.
"""
import time

import numpy as np

from .config import DEFAULT_MAX_ITER, DEFAULT_RADIUS, MAX_LEN, check_hint, check_length
from .counting import SubwordCounter
from .finder import HintState, MaxSubwordFinder
from .symmetry import is_primitive, symmetry_multiplicity
from .words import BitString, Word, parse_word, trailing_zeros


# =====================================================================
# Global record
# =====================================================================

class GlobalRecord:
    """Smallest maximum occurrence count seen so far and its words."""

    def __init__(self, occ):
        self.occ = occ
        self.records = []

    def offer(self, record):
        """Keep record if it ties or beats the current minimum."""
        if record.occ > self.occ:
            return False
        if record.occ < self.occ:
            self.records = []
            self.occ = record.occ
        self.records.append(record)
        return True

    def merge(self, other):
        for record in other.records:
            self.offer(record)

    def words(self):
        return [str(r.word) for r in self.records]

    def __repr__(self):
        return f"GlobalRecord(occ={self.occ}, words={self.words()})"


def partition_index(bits, length, n, threads):
    """Block of bits just above the middle of the full-length word."""
    return ((bits << (n - length)) >> (n >> 1)) & (threads - 1)


def _in_partition(bits, length, n, selector):
    if selector is None:
        return True
    index, threads = selector
    return partition_index(bits, length, n, threads) == index


def _make_finder(counter):
    return MaxSubwordFinder(counter if counter is not None else SubwordCounter())


# =====================================================================
# Exhaustive and pruned search
# =====================================================================

def exhaustive_search(n, hint=None, counter=None, selector=None, verbose=False):
    """Minimum over all primitive words of length n.

    hint is an over-estimate of the minimum (default 2**n); words whose
    maximum exceeds the running minimum are discarded early. selector is
    an optional (index, threads) pair restricting the words visited.
    """
    check_length(n)
    best = GlobalRecord(check_hint(hint, n))
    finder = _make_finder(counter)
    state = HintState()
    t0 = time.time()

    word = Word(0, n)
    visited = 0
    while True:
        if _in_partition(word.bits, n, n, selector) and is_primitive(word.bits, n):
            visited += 1
            best.offer(finder.find(word, best.occ, state))
        if not word.successor_by_1():
            break

    if verbose:
        print(f"Exhaustive n={n}: {visited:,} primitive words in "
              f"{time.time() - t0:.2f}s, min occ {best.occ} "
              f"({len(best.records)} words)", flush=True)
    return best


def pruned_search(n, hint=None, counter=None, selector=None, verbose=False):
    """Same result as exhaustive_search, skipping hopeless branches.

    Prefixes of length n//2 + 1 are enumerated in numeric order and
    extended letter by letter. A partial word whose most frequent subword
    already occurs more often than the running minimum cannot be completed
    into a better word, since counts only grow under extension.
    """
    check_length(n)
    best = GlobalRecord(check_hint(hint, n))
    finder = _make_finder(counter)
    state = HintState()
    stats = {"partial": 0, "pruned": 0, "full": 0}
    t0 = time.time()

    def grow(word):
        if word.length == n:
            if is_primitive(word.bits, n):
                stats["full"] += 1
                best.offer(finder.find(word, best.occ, state))
            return
        for bit in (0, 1):
            word.append_bit(bit)
            if word.length == n:
                grow(word)
            else:
                stats["partial"] += 1
                if finder.find(word, best.occ, state).occ <= best.occ:
                    grow(word)
                else:
                    stats["pruned"] += 1
            word.remove_last_bit()

    prefix_len = min(n // 2 + 1, n)
    prefix = Word(0, prefix_len)
    while True:
        if _in_partition(prefix.bits, prefix_len, n, selector):
            grow(prefix)
        if not prefix.successor_by_1():
            break

    if verbose:
        print(f"Pruned n={n}: {stats['partial']:,} partial words "
              f"({stats['pruned']:,} pruned), {stats['full']:,} full words in "
              f"{time.time() - t0:.2f}s, min occ {best.occ} "
              f"({len(best.records)} words)", flush=True)
    return best


# =====================================================================
# Local search
# =====================================================================

def next_combination(cur, k):
    """Next k-subset bit mask in decreasing numeric order, or None.

    Starting from the k highest positions, the lowest set bit moves down
    while it can; otherwise the trailing block of ones is folded back
    under the next set bit.
    """
    rpos = trailing_zeros(cur)
    if rpos > 0:
        return cur - (1 << (rpos - 1))
    ones = trailing_zeros(~cur)
    if ones == k:
        return None
    cur -= (1 << ones) - 1
    return cur - (1 << (trailing_zeros(cur) - 1 - ones))


def local_search(finder, word, record, k):
    """First word at Hamming distance k (leading letter kept) that improves.

    Returns (word, record) for the improvement, or None.
    """
    n = word.length
    if k < 1 or k > n - 1:
        return None
    mask = ((1 << k) - 1) << (n - 1 - k)
    while mask is not None:
        cand = Word(word.bits ^ mask, n)
        if finder.find_fast(cand, record.occ - 1).occ < record.occ:
            return cand, finder.fast_record(cand)
        mask = next_combination(mask, k)
    return None


def local_search_full(finder, word, record, radius):
    """Try distances 1..radius in turn; stop at the first improvement."""
    for k in range(1, min(radius, word.length - 1) + 1):
        found = local_search(finder, word, record, k)
        if found is not None:
            return found
    return None


def _random_mask(rng, count, p):
    flags = rng.random(count) < p
    mask = 0
    for i in np.flatnonzero(flags):
        mask |= 1 << int(i)
    return mask


def local_search_descent(n, radius=DEFAULT_RADIUS, max_iter=DEFAULT_MAX_ITER,
                         seed=None, counter=None, verbose=False):
    """Randomized descent on the fast (middle-length) subword maximum.

    Descends from a random word to a local minimum, then restarts from
    the best word with about flip_count random flips. flip_count grows
    after max_iter restarts without improvement, and the search stops
    once 3 * flip_count exceeds n. Returns a GlobalRecord holding the
    best word with its exact maximum.
    """
    check_length(n)
    if radius < 1:
        raise ValueError(f"radius must be at least 1, got {radius}")
    if max_iter < 1:
        raise ValueError(f"max_iter must be at least 1, got {max_iter}")
    finder = _make_finder(counter)
    rng = np.random.default_rng(seed)
    t0 = time.time()

    word = Word(_random_mask(rng, n - 1, 0.5), n)
    record = finder.fast_record(word)
    best_word = None
    best = None
    flip_count = radius + 2
    stagnant = 0
    rounds = 0
    while True:
        rounds += 1
        while True:
            step = local_search_full(finder, word, record, radius)
            if step is None:
                break
            word, record = step

        if best is None or record.occ < best.occ:
            best_word, best = word.copy(), record
            flip_count = radius + 2
            stagnant = 0
            if verbose:
                print(f"  round {rounds}: fast max {best.occ} at {best_word}", flush=True)
        else:
            stagnant += 1
            if stagnant >= max_iter:
                flip_count += 1
                stagnant = 0
        if 3 * flip_count > n:
            break

        mask = _random_mask(rng, n - 1, flip_count / (n - 1))
        word = Word(best_word.bits ^ mask, n)
        record = finder.fast_record(word)

    exact = finder.max_record(best_word)
    result = GlobalRecord(exact.occ)
    result.records.append(exact)
    if verbose:
        print(f"Descent n={n}: {rounds} rounds in {time.time() - t0:.2f}s, "
              f"best {best_word} with max occ {exact.occ}", flush=True)
    return result


# =====================================================================
# Histogram and insertion heuristic
# =====================================================================

def histogram(n, counter=None):
    """{maximum occurrence count: number of words starting with 0}.

    Each primitive word is weighted by its symmetry multiplicity, so the
    values sum to 2**(n-1).
    """
    check_length(n)
    finder = _make_finder(counter)
    hist = {}
    word = Word(0, n)
    while True:
        mult = symmetry_multiplicity(word.bits, n)
        if mult:
            value = finder.max_occurrences(word)
            hist[value] = hist.get(value, 0) + mult
        if not word.successor_by_1():
            break
    return dict(sorted(hist.items()))


def insert_heuristic(word, counter=None):
    """Best word obtained by inserting one letter anywhere into word.

    Candidates are scored by max_occurrences_fast. Returns
    (BitString, value); the BitString is None if no insertion scores
    below twice the value of the original word.
    """
    if isinstance(word, str):
        word = Word(*parse_word(word))
    n = word.length
    if n + 1 > MAX_LEN:
        raise ValueError(f"cannot insert into a word of {n} letters (max {MAX_LEN})")
    finder = _make_finder(counter)
    best_value = finder.max_occurrences_fast(word) << 1
    best = None
    for pos in range(n + 1):
        tail = n - pos
        head = word.bits >> tail
        low = word.bits & ((1 << tail) - 1)
        for bit in (0, 1):
            bits = (head << (tail + 1)) | (bit << tail) | low
            value = finder.max_occurrences_fast(Word(bits, n + 1))
            if value < best_value:
                best_value = value
                best = BitString(bits, n + 1)
    return best, best_value
