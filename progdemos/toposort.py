"""Print the nodes of a dependency graph in topological order."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

PREREQS: dict[str, list[str]] = {
    "algorithms": ["data structures"],
    "calculus": ["linear algebra"],
    "compilers": [
        "data structures",
        "formal languages",
        "computer organization",
    ],
    "data structures": ["discrete math"],
    "databases": ["data structures"],
    "discrete math": ["intro to programming"],
    "formal languages": ["discrete math"],
    "networks": ["operating systems"],
    "operating systems": ["data structures", "computer organization"],
    "programming languages": ["data structures", "computer organization"],
}


def topo_sort(graph: Mapping[str, Iterable[str]]) -> list[str]:
    """Return every node so that each comes after its prerequisites.

    Nodes are visited from the sorted keys of ``graph``; cycles are not reported.
    """
    order: list[str] = []
    seen: set[str] = set()

    def visit_all(items: Iterable[str]) -> None:
        for item in items:
            if item not in seen:
                seen.add(item)
                visit_all(graph.get(item, ()))
                order.append(item)

    visit_all(sorted(graph))
    return order


def main(argv: list[str] | None = None) -> int:
    """Print the course prerequisites in a valid order."""
    for number, course in enumerate(topo_sort(PREREQS), start=1):
        print(f"{number}:\t{course}")
    return 0