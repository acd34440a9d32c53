"""
DOM - Document tree model for Unravel

A parsed MDX document is a tree of Nodes in mdast shape: markdown kinds
(paragraph, text, heading, list, ...) interleaved with component elements.
Only the kinds named below are ever inspected by the rewrite passes; every
other kind is carried through untouched.

Key invariant: a paragraph's children are never paragraphs themselves.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

ROOT = "root"
PARAGRAPH = "paragraph"
TEXT = "text"
INLINE_COMPONENT = "mdxJsxTextElement"
BLOCK_COMPONENT = "mdxJsxFlowElement"

COMPONENT_TYPES = frozenset({INLINE_COMPONENT, BLOCK_COMPONENT})

ATTRIBUTE = "mdxJsxAttribute"
EXPRESSION_ATTRIBUTE = "mdxJsxExpressionAttribute"


@dataclass
class Attribute:
    """A component attribute: `name="value"`, a bare flag, or `{...spread}`."""
    name: str | None
    value: Any = None  # str, None for boolean flags, or an expression mapping
    type: str = ATTRIBUTE


@dataclass
class Node:
    """A node in the document tree."""
    type: str
    children: list[Node] = field(default_factory=list)
    value: str | None = None  # literal kinds only (text, code, html, ...)
    name: str | None = None  # component name; None for fragments
    attributes: list[Attribute] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)  # position, depth, ordered, ...

    @property
    def is_parent(self) -> bool:
        """Literal nodes carry a value, everything else carries children."""
        return self.value is None

    @property
    def is_component(self) -> bool:
        return self.type in COMPONENT_TYPES

    def depth_first(self) -> Iterator[Node]:
        """Traverse tree depth-first, yielding self then children."""
        yield self
        for child in self.children:
            yield from child.depth_first()

    def add_child(self, child: Node) -> Node:
        """Add a child node and return it for chaining."""
        self.children.append(child)
        return child


def root(*children: Node) -> Node:
    return Node(type=ROOT, children=list(children))


def paragraph(*children: Node) -> Node:
    return Node(type=PARAGRAPH, children=list(children))


def text(value: str) -> Node:
    return Node(type=TEXT, value=value)


def inline_component(
    name: str | None,
    *children: Node,
    attributes: list[Attribute] | tuple[Attribute, ...] = (),
) -> Node:
    """Component referenced inside phrasing content, e.g. `Text <Badge /> text`."""
    return Node(
        type=INLINE_COMPONENT,
        name=name,
        attributes=list(attributes),
        children=list(children),
    )


def block_component(
    name: str | None,
    *children: Node,
    attributes: list[Attribute] | tuple[Attribute, ...] = (),
) -> Node:
    """Component standing on its own lines, allowed to hold paragraphs."""
    return Node(
        type=BLOCK_COMPONENT,
        name=name,
        attributes=list(attributes),
        children=list(children),
    )


def element(type: str, *children: Node, **extra: Any) -> Node:
    """Any other kind (heading, list, blockquote, emphasis, ...)."""
    return Node(type=type, children=list(children), extra=dict(extra))


def find_all(tree: Node, *types: str) -> list[Node]:
    """Collect every node of the given kinds, in document order."""
    return [node for node in tree.depth_first() if node.type in types]
