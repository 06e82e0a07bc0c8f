"""
fixedmap Command-Line Interface (CLI)

Loads key/value pairs from a two-column CSV file into a fixed-capacity
HashMap and inspects it, or benchmarks the map.

Usage examples:
    python -m fixedmap.cli dump pairs.csv --capacity 8
    python -m fixedmap.cli get pairs.csv some-key
    python -m fixedmap.cli bench --output results.csv --base 100 --steps 6
"""

import argparse
import csv
import logging
import sys

from . import config
from .benchmark import run_benchmarks
from .datastructures import HashMap
from .debug import dump, summary

logger = logging.getLogger(__name__)


# -------------------------------------------------------------------
# Utility: build a map from a CSV file
# -------------------------------------------------------------------
def load_csv(path, capacity):
    """Read ``key,value`` rows from *path* into a new HashMap.

    Rows with fewer than two columns are skipped; extra columns are ignored.
    """
    hm = HashMap(capacity)
    with open(path, "r", newline="", encoding="utf-8") as f:
        for lineno, row in enumerate(csv.reader(f), start=1):
            if len(row) < 2:
                logger.warning("%s:%d: skipping row with %d column(s)", path, lineno, len(row))
                continue
            if not hm.put(row[0], row[1]):
                raise MemoryError(f"{path}:{lineno}: could not store {row[0]!r}")
    logger.info("loaded %d entries from %s", hm.size, path)
    return hm


# -------------------------------------------------------------------
# Command handlers
# -------------------------------------------------------------------
def cmd_dump(args):
    """Print every bucket of the loaded map followed by a summary line."""
    hm = load_csv(args.path, args.capacity)
    dump(hm)
    print(summary(hm))
    return 0


def cmd_get(args):
    """Print the value stored for a key; exit status 1 when absent."""
    hm = load_csv(args.path, args.capacity)
    found, value = hm.get(args.key)
    if not found:
        print(f"{args.key}: not found", file=sys.stderr)
        return 1
    print(value)
    return 0


def cmd_bench(args):
    """Benchmark map operations and write the results as CSV."""
    rows = run_benchmarks(args.output, base_input=args.base, steps=args.steps,
                          capacity=args.capacity, iterations=args.iterations)
    print(f"Wrote {rows} rows to {args.output}")
    return 0


# -------------------------------------------------------------------
# CLI parser setup
# -------------------------------------------------------------------
def build_parser():
    """Build the argparse command-line parser with subcommands."""
    p = argparse.ArgumentParser(prog="fixedmap", description="Fixed-capacity hash map tools")
    p.add_argument("--log-level", default=None, type=str.upper, choices=config.LOG_LEVELS,
                   help=f"Logging level (default: {config.LOG_LEVEL})")
    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("dump", help="Load a CSV and print every bucket")
    s.add_argument("path")
    s.add_argument("--capacity", type=int, default=config.DEFAULT_CAPACITY)
    s.set_defaults(func=cmd_dump)

    s = sub.add_parser("get", help="Load a CSV and look up one key")
    s.add_argument("path")
    s.add_argument("key")
    s.add_argument("--capacity", type=int, default=config.DEFAULT_CAPACITY)
    s.set_defaults(func=cmd_get)

    s = sub.add_parser("bench", help="Benchmark map operations to CSV")
    s.add_argument("--output", required=True)
    s.add_argument("--base", type=int, default=100)
    s.add_argument("--steps", type=int, default=8)
    s.add_argument("--iterations", type=int, default=5)
    s.add_argument("--capacity", type=int, default=1024)
    s.set_defaults(func=cmd_bench)

    return p


# -------------------------------------------------------------------
# Entry point
# -------------------------------------------------------------------
def main(argv=None):
    """CLI entry point when invoked via `python -m fixedmap.cli`."""
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    config.configure_logging(args.log_level)
    if getattr(args, "capacity", 1) < 1:
        parser.error("--capacity must be >= 1")
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
