"""Show a spinner while computing a Fibonacci number the slow way."""

from __future__ import annotations

import argparse
import sys
import threading
from typing import TextIO

_FRAMES = r"-\|/"


def fib(x: int) -> int:
    """Return the x-th Fibonacci number, computed by naive recursion."""
    if x < 2:
        return x
    return fib(x - 1) + fib(x - 2)


def spin(delay: float, stop: threading.Event, out: TextIO | None = None) -> int:
    """Draw spinner frames every ``delay`` seconds until ``stop`` is set.

    Returns the number of frames drawn.
    """
    out = sys.stdout if out is None else out
    frames = 0
    while True:
        for frame in _FRAMES:
            out.write("\r" + frame)
            out.flush()
            frames += 1
            if stop.wait(delay):
                return frames


def main(argv: list[str] | None = None) -> int:
    """Print Fibonacci(n), spinning while it is computed."""
    parser = argparse.ArgumentParser(prog="spinner", description="Compute slowly.")
    parser.add_argument("n", nargs="?", type=int, default=45)
    args = parser.parse_args(argv)
    stop = threading.Event()
    spinner = threading.Thread(target=spin, args=(0.1, stop), daemon=True)
    spinner.start()
    result = fib(args.n)
    stop.set()
    spinner.join()
    print(f"\rFibonacci({args.n}) = {result}")
    return 0