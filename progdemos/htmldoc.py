"""A simple HTML document tree built with a standards-compliant parser."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import IO, Union
from xml.dom import Node as _DomNode

import html5lib

Source = Union[str, bytes, IO[bytes], IO[str]]


class NodeType(Enum):
    """The kind of a node in an HTML document tree."""

    ERROR = 0
    TEXT = 1
    DOCUMENT = 2
    ELEMENT = 3
    COMMENT = 4
    DOCTYPE = 5


@dataclass(eq=False)
class Node:
    """A node of an HTML document tree.

    ``data`` holds the tag name of an element, the text of a text or
    comment node and the name of a doctype. ``attrs`` holds the
    attributes of an element as (key, value) pairs in document order.
    """

    type: NodeType
    data: str = ""
    attrs: list[tuple[str, str]] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)

    def walk(
        self,
        pre: Callable[[Node], object] | None = None,
        post: Callable[[Node], object] | None = None,
    ) -> None:
        """Call ``pre`` before and ``post`` after the children of every node.

        Both functions are optional.
        """
        stack: list[tuple[Node, bool]] = [(self, False)]
        while stack:
            node, finished = stack.pop()
            if finished:
                post(node)
                continue
            if pre is not None:
                pre(node)
            if post is not None:
                stack.append((node, True))
            stack.extend((child, False) for child in reversed(node.children))

    def iter(self) -> Iterator[Node]:
        """Yield this node and all its descendants in document order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def __iter__(self) -> Iterator[Node]:
        return self.iter()


def _convert(dom_node) -> Node:
    kind = dom_node.nodeType
    if kind == _DomNode.DOCUMENT_NODE:
        node = Node(NodeType.DOCUMENT)
    elif kind == _DomNode.ELEMENT_NODE:
        node = Node(
            NodeType.ELEMENT,
            dom_node.localName or dom_node.tagName,
            [(key, value) for key, value in dom_node.attributes.items()],
        )
    elif kind in (_DomNode.TEXT_NODE, _DomNode.CDATA_SECTION_NODE):
        node = Node(NodeType.TEXT, dom_node.data)
    elif kind == _DomNode.COMMENT_NODE:
        node = Node(NodeType.COMMENT, dom_node.data)
    elif kind == _DomNode.DOCUMENT_TYPE_NODE:
        node = Node(NodeType.DOCTYPE, dom_node.name or "")
    else:
        node = Node(NodeType.ERROR, dom_node.nodeValue or "")
    for dom_child in dom_node.childNodes:
        child = _convert(dom_child)
        previous = node.children[-1] if node.children else None
        if (
            child.type is NodeType.TEXT
            and previous is not None
            and previous.type is NodeType.TEXT
        ):
            previous.data += child.data
        else:
            node.children.append(child)
    return node


def parse_html(source: Source) -> Node:
    """Parse an HTML document from text, bytes or a file object."""
    return _convert(html5lib.parse(source, treebuilder="dom"))