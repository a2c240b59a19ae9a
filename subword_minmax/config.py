"""Configuration constants for the subword min-max search.

Limits are fixed by the 64-bit word packing. Search defaults can be
overridden through environment variables (or a .env file at the project
root).
"""
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

# Word packing
MAX_LEN = 64            # longest supported word (bits in the packed integer)
RUN_CAPACITY = MAX_LEN + 1

# Memoization: only word views with fewer runs than this are cached
MAX_CACHE_RUN = 8

# Thread-partitioned search, must be a power of two
THREAD_COUNT = int(os.environ.get("SUBWORD_THREADS", "4"))

# Local-search descent
DEFAULT_RADIUS = int(os.environ.get("SUBWORD_RADIUS", "2"))
DEFAULT_MAX_ITER = int(os.environ.get("SUBWORD_MAX_ITER", "50"))


def default_hint(n):
    """Trivial over-estimate of the minimal maximum occurrence count."""
    return 1 << n


def check_length(n):
    """Reject word lengths outside [1, MAX_LEN]."""
    if isinstance(n, bool) or not isinstance(n, int):
        raise ValueError(f"word length must be an integer, got {n!r}")
    if n < 1 or n > MAX_LEN:
        raise ValueError(f"word length must be between 1 and {MAX_LEN}, got {n}")
    return n


def check_hint(hint, n):
    """Return a usable bound: 2**n when unset, otherwise a positive int."""
    if hint is None:
        return default_hint(n)
    if isinstance(hint, bool) or not isinstance(hint, int) or hint <= 0:
        raise ValueError(
            f"hint must be a positive integer over-estimating the minimum, got {hint!r}")
    return hint


def check_threads(threads):
    """Thread counts partition words by a bit block, so only powers of two."""
    if isinstance(threads, bool) or not isinstance(threads, int) or threads < 1:
        raise ValueError(f"thread count must be a positive integer, got {threads!r}")
    if threads & (threads - 1):
        raise ValueError(f"thread count must be a power of two, got {threads}")
    return threads
