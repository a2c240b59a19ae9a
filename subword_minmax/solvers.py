"""Entry points: evaluate_mode, count, histogram, analyze_word.

All entry points share one process-wide SubwordCounter, so memoized
counts carry over between calls. A parallel run switches the shared memo
to read-only for the rest of the process.
"""
from .config import (DEFAULT_MAX_ITER, DEFAULT_RADIUS, THREAD_COUNT,
                     check_hint, check_length)
from .counting import SubwordCounter
from .finder import MaxSubwordFinder
from . import search
from .parallel import partitioned_search
from .words import Word, parse_word

MODES = ("hinted", "pruned", "descent", "parallel", "parallel-pruned")

_counter = SubwordCounter()


def evaluate_mode(mode, n, hint=None, radius=DEFAULT_RADIUS,
                  max_iter=DEFAULT_MAX_ITER, threads=THREAD_COUNT, seed=None,
                  verbose=False):
    """Run one minimization mode for words of length n.

    Returns a GlobalRecord. Arguments are validated before any search
    starts; invalid ones raise ValueError.
    """
    if mode not in MODES:
        raise ValueError(f"unknown mode {mode!r}, expected one of {', '.join(MODES)}")
    check_length(n)
    hint = check_hint(hint, n)

    if mode == "hinted":
        return search.exhaustive_search(n, hint, counter=_counter, verbose=verbose)
    if mode == "pruned":
        return search.pruned_search(n, hint, counter=_counter, verbose=verbose)
    if mode == "descent":
        return search.local_search_descent(n, radius, max_iter, seed=seed,
                                           counter=_counter, verbose=verbose)
    inner = "pruned" if mode == "parallel-pruned" else "exhaustive"
    return partitioned_search(n, hint, threads=threads, mode=inner,
                              counter=_counter, verbose=verbose)


def count(word_bits, word_len, subword_bits, subword_len):
    """Number of occurrences of a subword in a word, given as bit patterns."""
    check_length(word_len)
    check_length(subword_len)
    for bits, length in ((word_bits, word_len), (subword_bits, subword_len)):
        if bits < 0 or bits >> length:
            raise ValueError(f"bits {bits} do not fit in {length} letters")
    return _counter.count_bits(word_bits, word_len, subword_bits, subword_len)


def count_strings(word, subword):
    return count(*parse_word(word), *parse_word(subword))


def histogram(n):
    """{max occurrence count: number of words of length n starting with 0}."""
    return search.histogram(n, counter=_counter)


def analyze_word(word):
    """Exact SubwordRecord (maximum and all maximizers) of one 0/1 string."""
    return MaxSubwordFinder(_counter).max_record(Word(*parse_word(word)))


def insert_letter(word):
    """(BitString or None, value) of the best single-letter insertion."""
    return search.insert_heuristic(word, counter=_counter)
