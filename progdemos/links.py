"""Extract links from HTML documents and crawl the web breadth-first."""

from __future__ import annotations

import argparse
import logging
import sys
import urllib.request
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from http import HTTPStatus
from urllib.error import HTTPError
from urllib.parse import urljoin

from .htmldoc import Node, NodeType, parse_html

_log = logging.getLogger(__name__)


@contextmanager
def _http_get(url: str, method: str = "GET") -> Iterator:
    """Open ``url``; an HTTP error status still yields the response."""
    request = urllib.request.Request(url, method=method)
    try:
        response = urllib.request.urlopen(request)
    except HTTPError as err:
        response = err
    with response:
        yield response


def _status_line(response) -> str:
    return f"{response.getcode()} {response.reason}"


def _parse_body(url: str, response) -> Node:
    try:
        return parse_html(response.read())
    except (OSError, ValueError) as err:
        raise OSError(f"parsing {url} as HTML: {err}") from err


def _get_document(url: str) -> tuple[Node, str]:
    with _http_get(url) as response:
        if response.getcode() != HTTPStatus.OK:
            raise OSError(f"getting {url}: {_status_line(response)}")
        return _parse_body(url, response), response.geturl()


def visit(node: Node) -> list[str]:
    """Return the href of every anchor element under ``node``, in order."""
    return [
        value
        for n in node.iter()
        if n.type is NodeType.ELEMENT and n.data == "a"
        for key, value in n.attrs
        if key == "href"
    ]


def extract(url: str) -> list[str]:
    """Fetch ``url`` as HTML and return its links resolved to absolute URLs."""
    doc, base = _get_document(url)
    links = []
    for href in visit(doc):
        try:
            links.append(urljoin(base, href))
        except ValueError:
            continue  # ignore bad URLs
    return links


def find_links(url: str) -> list[str]:
    """Fetch ``url`` as HTML and return its links as written."""
    doc, _ = _get_document(url)
    return visit(doc)


def breadth_first(f: Callable[[str], Iterable[str] | None], worklist: Iterable[str]) -> None:
    """Call ``f`` at most once for each item, adding what it returns to the worklist."""
    seen: set[str] = set()
    items = list(worklist)
    while items:
        batch, items = items, []
        for item in batch:
            if item not in seen:
                seen.add(item)
                items.extend(f(item) or ())


def crawl(url: str) -> list[str]:
    """Print ``url`` and return its links; failures are logged and give none."""
    print(url)
    try:
        return extract(url)
    except (OSError, ValueError) as err:
        _log.error("%s", err)
        return []


def main(argv: list[str] | None = None) -> int:
    """Print the links of the documents at the URLs, or of standard input."""
    parser = argparse.ArgumentParser(prog="findlinks", description="Print links in HTML documents.")
    parser.add_argument("urls", nargs="*", help="documents to fetch")
    parser.add_argument("--crawl", action="store_true", help="crawl breadth-first from the URLs")
    args = parser.parse_args(argv)

    if not args.urls:
        try:
            doc = parse_html(sys.stdin.buffer)
        except (OSError, ValueError) as err:
            print(f"findlinks: {err}", file=sys.stderr)
            return 1
        for link in visit(doc):
            print(link)
        return 0

    if args.crawl:
        breadth_first(crawl, args.urls)
        return 0

    for url in args.urls:
        try:
            links = find_links(url)
        except (OSError, ValueError) as err:
            print(f"findlinks: {err}", file=sys.stderr)
            continue
        for link in links:
            print(link)
    return 0