"""Print the outline of an HTML document tree."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterator

from .htmldoc import Node, NodeType, parse_html
from .links import _http_get, _parse_body


def outline_paths(node: Node) -> Iterator[list[str]]:
    """Yield, for each element, the tag names from the root down to it."""

    def visit(n: Node, stack: tuple[str, ...]) -> Iterator[list[str]]:
        if n.type is NodeType.ELEMENT:
            stack = (*stack, n.data)
            yield list(stack)
        for child in n.children:
            yield from visit(child, stack)

    return visit(node, ())


def outline_tags(node: Node) -> list[str]:
    """Return indented start and end tag lines for every element."""
    lines: list[str] = []
    depth = 0

    def start(n: Node) -> None:
        nonlocal depth
        if n.type is NodeType.ELEMENT:
            lines.append(f"{'  ' * depth}<{n.data}>")
            depth += 1

    def end(n: Node) -> None:
        nonlocal depth
        if n.type is NodeType.ELEMENT:
            depth -= 1
            lines.append(f"{'  ' * depth}</{n.data}>")

    node.walk(start, end)
    return lines


def _outline_url(url: str) -> list[str]:
    with _http_get(url) as response:
        doc = _parse_body(url, response)
    return outline_tags(doc)


def main(argv: list[str] | None = None) -> int:
    """Outline the documents at the URLs, or the one on standard input."""
    parser = argparse.ArgumentParser(prog="outline", description="Print an HTML outline.")
    parser.add_argument("urls", nargs="*", help="documents to fetch")
    args = parser.parse_args(argv)

    if not args.urls:
        try:
            doc = parse_html(sys.stdin.buffer)
        except (OSError, ValueError) as err:
            print(f"outline: {err}", file=sys.stderr)
            return 1
        for path in outline_paths(doc):
            print("[" + " ".join(path) + "]")
        return 0

    for url in args.urls:
        try:
            lines = _outline_url(url)
        except (OSError, ValueError) as err:
            print(f"outline: {err}", file=sys.stderr)
            continue
        for line in lines:
            print(line)
    return 0