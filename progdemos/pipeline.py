"""A three-stage pipeline: count, square, print."""

from __future__ import annotations

import argparse
import itertools
from collections.abc import Iterable, Iterator


def counter(limit: int | None = None) -> Iterator[int]:
    """Yield 0, 1, 2, ... up to ``limit`` (exclusive), or forever if None."""
    yield from itertools.count() if limit is None else range(limit)


def squarer(values: Iterable[int]) -> Iterator[int]:
    """Yield the square of each value."""
    for value in values:
        yield value * value


def run_pipeline(limit: int | None = 100) -> Iterator[int]:
    """Yield the squares of the first ``limit`` natural numbers (all if None)."""
    return squarer(counter(limit))


def main(argv: list[str] | None = None) -> int:
    """Print squares of natural numbers."""
    parser = argparse.ArgumentParser(prog="pipeline", description="Print squares.")
    parser.add_argument("--limit", type=int, default=100, help="how many squares")
    parser.add_argument("--forever", action="store_true", help="never stop")
    args = parser.parse_args(argv)
    for square in run_pipeline(None if args.forever else args.limit):
        print(square)
    return 0