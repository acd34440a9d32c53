"""
Tree visitor with in-place splicing.

Walks the tree depth-first, pre-order, and hands every node of the requested
kinds to a callback. The callback may replace the node it was given with
zero or more nodes; the walk then resumes right after the inserted span, so
replacements are never re-visited and no following sibling is skipped.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from .dom import Node

# (node, index in parent, parent) -> None to keep, or a list of replacements
Visitor = Callable[[Node, int | None, Node | None], list[Node] | None]


def visit(tree: Node, types: str | Iterable[str], visitor: Visitor) -> None:
    """
    Call `visitor` for every node whose type is in `types`.

    Returning a list from the callback splices it into the parent's children
    in place of the visited node. A spliced node is not descended into.
    The root has no parent and cannot be replaced.
    """
    wanted = frozenset([types] if isinstance(types, str) else types)

    if tree.type in wanted and visitor(tree, None, None) is not None:
        raise ValueError(f"Cannot replace the root node ({tree.type!r} has no parent)")

    _visit_children(tree, wanted, visitor)


def _visit_children(parent: Node, wanted: frozenset[str], visitor: Visitor) -> None:
    children = parent.children
    index = 0
    # len() is re-read every step: splices grow and shrink the list
    while index < len(children):
        node = children[index]

        if node.type in wanted:
            replacement = visitor(node, index, parent)
            if replacement is not None:
                children[index:index + 1] = replacement
                index += len(replacement)
                continue

        _visit_children(node, wanted, visitor)
        index += 1
