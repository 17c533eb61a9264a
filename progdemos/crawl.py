"""Crawl web links concurrently, with bounded parallelism."""

from __future__ import annotations

import argparse
from collections.abc import Callable, Iterable
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait

from .links import crawl

Fetch = Callable[[str], Iterable[str] | None]


def crawl_concurrent(
    start: Iterable[str], fetch: Fetch = crawl, limit: int = 20
) -> list[str]:
    """Call ``fetch`` once for every link reachable from ``start``.

    At most ``limit`` calls run at once. Returns the links in the order
    they were first found. An exception raised by ``fetch`` propagates.
    """
    if limit < 1:
        raise ValueError(f"limit must be at least 1, got {limit}")
    found: list[str] = []
    seen: set[str] = set()

    with ThreadPoolExecutor(max_workers=limit) as pool:

        def schedule(links: Iterable[str] | None) -> set[Future]:
            futures = set()
            for link in links or ():
                if link not in seen:
                    seen.add(link)
                    found.append(link)
                    futures.add(pool.submit(fetch, link))
            return futures

        pending = schedule(start)
        while pending:
            done, pending = wait(pending, return_when=FIRST_COMPLETED)
            for future in done:
                pending |= schedule(future.result())
    return found


def main(argv: list[str] | None = None) -> int:
    """Crawl the web concurrently from the URLs given."""
    parser = argparse.ArgumentParser(prog="crawl", description="Crawl web links.")
    parser.add_argument("urls", nargs="*", help="where to start")
    parser.add_argument("--limit", type=int, default=20, help="concurrent requests")
    args = parser.parse_args(argv)
    crawl_concurrent(args.urls, crawl, args.limit)
    return 0