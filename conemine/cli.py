"""Command-line entry point: read a data file, mine it, write the results."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Sequence

from .index import build_index
from .io import read_transactions, write_results
from .ranking import rank_items
from .traversal import ConeTraversal

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="conemine",
        description="Mine frequent itemsets from a transaction file with the simplicial cone traversal.",
    )
    parser.add_argument("--input", "-i", default="Data.txt", help="data file, one 'n i1 ... in' row per line")
    parser.add_argument("--output", "-o", default="Results.txt", help="file to write '[i1 ... ik] support' lines to")
    parser.add_argument("--min-support", "-s", type=int, default=1, help="absolute support threshold (default: 1)")
    parser.add_argument("--verbose", "-v", action="count", default=0, help="print progress details")
    return parser


def run(input_path: str, output_path: str, min_support: int = 1, verbose: int = 0) -> dict[str, float]:
    """Read, mine and write, returning the time spent in each phase (seconds)."""
    t0 = time.perf_counter()
    rows = read_transactions(input_path)
    reading = time.perf_counter() - t0

    t0 = time.perf_counter()
    index = build_index(rows)
    rank_order = rank_items(index, min_support)
    if len(rank_order) == 0:
        logger.warning("No item occurs in more than %d transactions; nothing to mine.", min_support)
    traversal = ConeTraversal(rank_order, index, min_support)
    results = traversal.run()
    algorithm = time.perf_counter() - t0
    if verbose:
        print(
            f"[{time.strftime('%X')}] {len(rows):,} transactions, {len(rank_order):,} ranked items, "
            f"{traversal.steps:,} cones counted, {len(results):,} accepted."
        )

    t0 = time.perf_counter()
    write_results(output_path, results)
    writing = time.perf_counter() - t0

    return {"reading": reading, "algorithm": algorithm, "writing": writing}


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING, format="%(levelname)s: %(message)s")

    try:
        timings = run(args.input, args.output, args.min_support, args.verbose)
    except (OSError, ValueError) as e:
        print(f"conemine: error: {e}", file=sys.stderr)
        return 1

    print(f"Time to read file: {timings['reading']:.3f} seconds")
    print(f"Time to run algorithm: {timings['algorithm']:.3f} seconds")
    print(f"Time to write to file: {timings['writing']:.3f} seconds")
    print("Simplicial Complex has successfully run.")
    return 0
