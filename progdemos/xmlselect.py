"""Print the text of selected elements of an XML document."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable, Iterator, Sequence
from typing import IO
from xml.parsers import expat

_CHUNK = 64 * 1024


def contains_all(x: Sequence[str], y: Sequence[str]) -> bool:
    """Report whether ``x`` contains the elements of ``y``, in order."""
    remaining = iter(x)
    return all(any(a == b for a in remaining) for b in y)


def _local(name: str) -> str:
    return name.rsplit(":", 1)[-1]


def select(
    stream: IO[bytes] | IO[str], names: Iterable[str]
) -> Iterator[tuple[tuple[str, ...], str]]:
    """Yield (element path, text) for character data under the named elements.

    Raises ValueError if the document is malformed.
    """
    wanted = list(names)
    parser = expat.ParserCreate()
    parser.buffer_text = True
    stack: list[str] = []
    found: list[tuple[tuple[str, ...], str]] = []

    def start(name: str, attrs) -> None:
        stack.append(_local(name))

    def end(name: str) -> None:
        stack.pop()

    def chars(data: str) -> None:
        if contains_all(stack, wanted):
            found.append((tuple(stack), data))

    parser.StartElementHandler = start
    parser.EndElementHandler = end
    parser.CharacterDataHandler = chars

    seen_content = False
    try:
        while chunk := stream.read(_CHUNK):
            if chunk.strip():
                seen_content = True
            parser.Parse(chunk, False)
            yield from found
            found.clear()
        if seen_content:
            parser.Parse(b"", True)
    except expat.ExpatError as err:
        raise ValueError(str(err)) from err
    yield from found


def main(argv: list[str] | None = None) -> int:
    """Print text under the named elements of the XML on standard input."""
    parser = argparse.ArgumentParser(
        prog="xmlselect", description="Print the text of selected XML elements."
    )
    parser.add_argument("names", nargs="*", help="element names, outermost first")
    args = parser.parse_args(argv)
    try:
        for path, text in select(sys.stdin.buffer, args.names):
            print(f"{' '.join(path)}: {text}")
    except ValueError as err:
        print(f"xmlselect: {err}", file=sys.stderr)
        return 1
    return 0