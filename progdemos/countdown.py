"""The countdown for a rocket launch, which the user may abort."""

from __future__ import annotations

import argparse
import sys
import threading
import time
from typing import TextIO


def countdown(
    start: int = 10,
    interval: float = 1.0,
    abort: threading.Event | None = None,
    out: TextIO | None = None,
) -> bool:
    """Count down from ``start`` and launch; return False if ``abort`` is set first."""
    out = sys.stdout if out is None else out
    if abort is None:
        print("Commencing countdown.", file=out)
    else:
        print("Commencing countdown.  Press return to abort.", file=out)
    for n in range(start, 0, -1):
        print(n, file=out)
        if abort is None:
            time.sleep(interval)
        elif abort.wait(interval):
            print("Launch aborted!", file=out)
            return False
    print("Lift off!", file=out)
    return True


def _abort_on_input(abort: threading.Event) -> None:
    try:
        sys.stdin.read(1)
    except (OSError, ValueError):
        return
    abort.set()


def main(argv: list[str] | None = None) -> int:
    """Count down to a launch; pressing return aborts it."""
    parser = argparse.ArgumentParser(prog="countdown", description="Launch a rocket.")
    parser.add_argument("--from", dest="start", type=int, default=10)
    parser.add_argument("--no-abort", action="store_true", help="ignore standard input")
    args = parser.parse_args(argv)
    abort = None
    if not args.no_abort:
        abort = threading.Event()
        threading.Thread(target=_abort_on_input, args=(abort,), daemon=True).start()
    countdown(args.start, 1.0, abort)
    return 0