"""Save the contents of URLs to local files, or wait for a server to respond."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from datetime import timedelta
from http.client import HTTPException
from pathlib import Path
from urllib.parse import unquote, urlsplit

from .links import _http_get
from .sorting import format_duration

_log = logging.getLogger(__name__)
_CHUNK = 64 * 1024


def _base(path: str) -> str:
    if path == "":
        return "."
    stripped = path.rstrip("/")
    if stripped == "":
        return "/"
    return stripped.rsplit("/", 1)[-1]


def fetch(url: str, directory: str | Path | None = None) -> tuple[str, int]:
    """Download ``url`` into ``directory`` (default: the current one).

    Returns the local file name and the number of bytes written.
    """
    with _http_get(url) as response:
        local = _base(unquote(urlsplit(response.geturl()).path))
        if local == "/":
            local = "index.html"
        target = Path(directory if directory is not None else ".") / local
        size = 0
        with open(target, "wb") as out:
            while chunk := response.read(_CHUNK):
                out.write(chunk)
                size += len(chunk)
    return local, size


def wait_for_server(url: str, timeout: float = 60.0) -> None:
    """Retry a HEAD request to ``url`` with exponential back-off.

    Raises TimeoutError if the server has not responded within ``timeout`` seconds.
    """
    deadline = time.monotonic() + timeout
    tries = 0
    while time.monotonic() < deadline:
        try:
            with _http_get(url, method="HEAD"):
                return
        except (OSError, ValueError, HTTPException) as err:
            _log.warning("server not responding (%s); retrying...", err)
        time.sleep(2**tries)
        tries += 1
    limit = format_duration(timedelta(seconds=timeout))
    raise TimeoutError(f"server {url} failed to respond after {limit}")


def main(argv: list[str] | None = None) -> int:
    """Fetch each URL to a local file, or with --wait wait for one server."""
    parser = argparse.ArgumentParser(prog="fetch", description="Save URLs to local files.")
    parser.add_argument("urls", nargs="*", help="URLs to fetch")
    parser.add_argument("--wait", action="store_true", help="wait for the server of one URL")
    args = parser.parse_args(argv)

    if args.wait:
        if len(args.urls) != 1:
            print("usage: wait url", file=sys.stderr)
            return 1
        try:
            wait_for_server(args.urls[0])
        except TimeoutError as err:
            print(f"Site is down: {err}", file=sys.stderr)
            return 1
        return 0

    for url in args.urls:
        try:
            local, size = fetch(url)
        except (OSError, ValueError, HTTPException) as err:
            print(f"fetch {url}: {err}", file=sys.stderr)
            continue
        print(f"{url} => {local} ({size} bytes).", file=sys.stderr)
    return 0