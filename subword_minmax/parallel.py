"""Thread-partitioned exhaustive and pruned search.

Words are split by the bits just above the middle of the word:
worker i takes the words with (bits >> (n >> 1)) & (T - 1) == i. Each
worker keeps its own GlobalRecord and HintState, while the counter's
memo table is shared read-only (insertion is switched off for good
before the workers start).
"""
import time

from joblib import Parallel, delayed

from .config import THREAD_COUNT, check_hint, check_length, check_threads
from .counting import SubwordCounter
from .search import GlobalRecord, exhaustive_search, pruned_search

_DRIVERS = {
    "exhaustive": exhaustive_search,
    "pruned": pruned_search,
}


def _worker(driver, n, hint, counter, index, threads, verbose):
    t0 = time.time()
    best = driver(n, hint, counter=counter, selector=(index, threads))
    if verbose:
        print(f"  Worker {index} finished in {time.time() - t0:.2f}s: "
              f"min occ {best.occ} ({len(best.records)} words)", flush=True)
    return best


def partitioned_search(n, hint=None, threads=THREAD_COUNT, mode="exhaustive",
                       counter=None, verbose=False):
    """Run `mode` on `threads` disjoint slices of the words and reduce.

    The result holds the smallest value found by any worker and the
    records of every worker that reached it.
    """
    check_length(n)
    hint = check_hint(hint, n)
    check_threads(threads)
    if mode not in _DRIVERS:
        raise ValueError(f"unknown partitioned mode {mode!r}, "
                         f"expected one of {sorted(_DRIVERS)}")
    if counter is None:
        counter = SubwordCounter()
    counter.cache.disable_insertion()

    if verbose:
        print(f"Partitioned {mode} search n={n}: {threads} workers", flush=True)
    driver = _DRIVERS[mode]
    results = Parallel(n_jobs=threads, prefer="threads", verbose=0)(
        delayed(_worker)(driver, n, hint, counter, i, threads, verbose)
        for i in range(threads)
    )

    best = GlobalRecord(hint)
    for res in results:
        best.merge(res)
    return best
