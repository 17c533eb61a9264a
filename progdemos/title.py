"""Print the title of HTML documents fetched from URLs."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterator
from http.client import HTTPException

from .htmldoc import Node, NodeType
from .links import _http_get, _parse_body


def titles(node: Node) -> Iterator[str]:
    """Yield the text of every title element that has content."""
    for n in node.iter():
        if n.type is NodeType.ELEMENT and n.data == "title" and n.children:
            yield n.children[0].data


def sole_title(node: Node) -> str:
    """Return the text of the only non-empty title element.

    Raises ValueError if there is none or more than one.
    """
    title = ""
    for text in titles(node):
        if title:
            raise ValueError("multiple title elements")
        title = text
    if not title:
        raise ValueError("no title element")
    return title


def fetch_title(url: str) -> str:
    """Fetch ``url`` and return the title of the HTML document there.

    Raises ValueError if the content is not HTML or has no single title.
    """
    with _http_get(url) as response:
        ctype = response.headers.get("Content-Type", "")
        if ctype != "text/html" and not ctype.startswith("text/html;"):
            raise ValueError(f"{url} has type {ctype}, not text/html")
        doc = _parse_body(url, response)
    return sole_title(doc)


def main(argv: list[str] | None = None) -> int:
    """Print the title of each URL given."""
    parser = argparse.ArgumentParser(prog="title", description="Print HTML document titles.")
    parser.add_argument("urls", nargs="*", help="documents to fetch")
    args = parser.parse_args(argv)
    for url in args.urls:
        try:
            print(fetch_title(url))
        except (OSError, ValueError, HTTPException) as err:
            print(f"title: {err}", file=sys.stderr)
    return 0