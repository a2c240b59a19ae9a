"""Command-line front end.

Usage:
    subword-minmax search 12                      # hinted exhaustive, hint 2**n
    subword-minmax search 20 --hint 40 --mode pruned
    subword-minmax search 24 --mode parallel --threads 8
    subword-minmax meta 30 --radius 2 --max-iter 50 --seed 1
    subword-minmax histo 12
    subword-minmax word 0010110111
    subword-minmax insert 001011011
    subword-minmax count 0101 01
"""
import argparse
import time
from datetime import datetime

from .config import DEFAULT_MAX_ITER, DEFAULT_RADIUS, THREAD_COUNT
from . import solvers


def log(msg):
    """Timestamped, flushed log line."""
    ts = datetime.now().strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", flush=True)


def report(best):
    log(f"Minimal maxocc: {best.occ} ({len(best.records)} words)")
    for rec in best.records:
        subs = ", ".join(str(sw) for sw in rec.subwords)
        print(f"  {rec.word}  occ={rec.occ}  subwords: {subs}", flush=True)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="subword-minmax",
        description="Binary words minimizing the maximal subword occurrence count")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("search", help="exact minimum over all words of length n")
    p.add_argument("n", type=int, help="word length (1..64)")
    p.add_argument("--hint", type=int, default=None,
                   help="over-estimate of the minimum (default: 2**n)")
    p.add_argument("--mode", choices=["hinted", "pruned", "parallel", "parallel-pruned"],
                   default="hinted", help="search driver (default: hinted)")
    p.add_argument("--threads", type=int, default=THREAD_COUNT,
                   help=f"workers for parallel modes, a power of two (default: {THREAD_COUNT})")
    p.add_argument("-v", "--verbose", action="store_true")

    p = sub.add_parser("meta", help="local-search descent for a good hint")
    p.add_argument("n", type=int)
    p.add_argument("--radius", type=int, default=DEFAULT_RADIUS,
                   help=f"local search radius (default: {DEFAULT_RADIUS})")
    p.add_argument("--max-iter", type=int, default=DEFAULT_MAX_ITER,
                   help=f"restarts before escalating (default: {DEFAULT_MAX_ITER})")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("-v", "--verbose", action="store_true")

    p = sub.add_parser("histo", help="histogram of maxocc over all words of length n")
    p.add_argument("n", type=int)

    p = sub.add_parser("word", help="maxocc and maximizing subwords of one word")
    p.add_argument("word")

    p = sub.add_parser("insert", help="best single-letter insertion into a word")
    p.add_argument("word")

    p = sub.add_parser("count", help="occurrences of a subword in a word")
    p.add_argument("word")
    p.add_argument("subword")
    return parser


def run(args):
    if args.command == "search":
        log(f"Search n={args.n}, mode={args.mode}, "
            f"hint={args.hint if args.hint is not None else '2^n'}")
        report(solvers.evaluate_mode(args.mode, args.n, hint=args.hint,
                                     threads=args.threads, verbose=args.verbose))
    elif args.command == "meta":
        log(f"Descent n={args.n}, radius={args.radius}, max_iter={args.max_iter}")
        report(solvers.evaluate_mode("descent", args.n, radius=args.radius,
                                     max_iter=args.max_iter, seed=args.seed,
                                     verbose=args.verbose))
    elif args.command == "histo":
        log(f"Histogram of maxocc for n={args.n}")
        for value, mult in solvers.histogram(args.n).items():
            print(f"  {value:>8}: {mult:,}", flush=True)
    elif args.command == "word":
        rec = solvers.analyze_word(args.word)
        log(f"Maxocc of {rec.word}: {rec.occ}")
        for sw in rec.subwords:
            print(f"  {sw}", flush=True)
    elif args.command == "insert":
        best, value = solvers.insert_letter(args.word)
        if best is None:
            log(f"No insertion into {args.word} scores below {value}")
        else:
            log(f"Best insertion: {best} (fast maxocc {value})")
    elif args.command == "count":
        log(f"{args.subword} occurs {solvers.count_strings(args.word, args.subword)} "
            f"times in {args.word}")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    t0 = time.time()
    try:
        run(args)
    except ValueError as e:
        parser.error(str(e))
    log(f"Done in {time.time() - t0:.2f}s")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
