"""Binary words minimizing the maximal number of occurrences of a subword."""
from .counting import SubwordCache, SubwordCounter, count_naive
from .finder import HintState, MaxSubwordFinder, SubwordRecord
from .search import (GlobalRecord, exhaustive_search, local_search_descent,
                     pruned_search)
from .parallel import partitioned_search
from .solvers import MODES, analyze_word, count, evaluate_mode, histogram
from .words import BitString, Word

__version__ = "0.1.0"
