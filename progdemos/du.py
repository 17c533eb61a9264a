"""Compute the disk usage of the files under some directories."""

from __future__ import annotations

import argparse
import os
import sys
import threading
import time
from collections.abc import Iterable, Iterator
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait

_PROGRESS_INTERVAL = 0.5


def _report(err: OSError) -> None:
    print(f"du: {err}", file=sys.stderr)


def _scan(
    directory: str, cancel: threading.Event | None = None
) -> tuple[list[int], list[str]]:
    """Return the sizes of the files in ``directory`` and its subdirectories."""
    if cancel is not None and cancel.is_set():
        return [], []
    sizes: list[int] = []
    subdirs: list[str] = []
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                try:
                    if entry.is_dir(follow_symlinks=False):
                        subdirs.append(entry.path)
                    else:
                        sizes.append(entry.stat(follow_symlinks=False).st_size)
                except OSError as err:
                    _report(err)
    except OSError as err:
        _report(err)
    return sizes, subdirs


def walk_dir(root: str | os.PathLike) -> Iterator[int]:
    """Yield the size of every file in the tree rooted at ``root``."""
    pending = [os.fspath(root)]
    while pending:
        sizes, subdirs = _scan(pending.pop())
        yield from sizes
        pending.extend(reversed(subdirs))


def walk_parallel(
    roots: Iterable[str | os.PathLike],
    cancel: threading.Event | None = None,
    workers: int = 20,
) -> Iterator[int]:
    """Yield file sizes, reading up to ``workers`` directories at once.

    Stops early once ``cancel`` is set.
    """
    if cancel is None:
        cancel = threading.Event()
    with ThreadPoolExecutor(max_workers=workers) as pool:
        pending = {pool.submit(_scan, os.fspath(root), cancel) for root in roots}
        try:
            while pending:
                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    if cancel.is_set():
                        return
                    sizes, subdirs = future.result()
                    yield from sizes
                    pending |= {pool.submit(_scan, d, cancel) for d in subdirs}
        finally:
            for future in pending:
                future.cancel()


def disk_usage(
    roots: Iterable[str | os.PathLike], cancel: threading.Event | None = None
) -> tuple[int, int]:
    """Return the number of files and their total size; no roots means ".". """
    roots = list(roots) or ["."]
    nfiles = nbytes = 0
    for size in walk_parallel(roots, cancel):
        nfiles += 1
        nbytes += size
    return nfiles, nbytes


def format_usage(nfiles: int, nbytes: int) -> str:
    """Format totals as ``N files  X.Y GB``."""
    return f"{nfiles} files  {nbytes / 1e9:.1f} GB"


def _cancel_on_input(cancel: threading.Event) -> None:
    try:
        sys.stdin.read(1)
    except (OSError, ValueError):
        pass
    cancel.set()


def main(argv: list[str] | None = None) -> int:
    """Print the disk usage of the directories given, or of the current one."""
    parser = argparse.ArgumentParser(prog="du", description="Report disk usage.")
    parser.add_argument("roots", nargs="*", help="directories to measure")
    parser.add_argument(
        "-v", action="store_true", dest="verbose", help="show verbose progress messages"
    )
    parser.add_argument(
        "-c",
        "--cancel-on-input",
        action="store_true",
        help="stop as soon as input arrives on standard input",
    )
    args = parser.parse_args(argv)
    roots = args.roots or ["."]

    cancel = threading.Event()
    if args.cancel_on_input:
        threading.Thread(target=_cancel_on_input, args=(cancel,), daemon=True).start()

    nfiles = nbytes = 0
    last = time.monotonic()
    for size in walk_parallel(roots, cancel):
        nfiles += 1
        nbytes += size
        if args.verbose and time.monotonic() - last >= _PROGRESS_INTERVAL:
            print(format_usage(nfiles, nbytes))
            last = time.monotonic()
    if cancel.is_set():
        return 0
    print(format_usage(nfiles, nbytes))
    return 0