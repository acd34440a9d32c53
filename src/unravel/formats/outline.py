"""
Outline format: a one-line bracketed view of a tree, for eyeballing diffs.

    Root[Paragraph[T("Here is "), C(Foo), T(" text.")], B(Card)[T("hi")]]

W(...) marks whitespace-only text, T(...) any other text, C(name) an inline
component and B(name) a block component. Other kinds print their type name.
Output only: there is no parser for it.
"""

from __future__ import annotations

import json

from ..core import JS_WHITESPACE
from ..dom import BLOCK_COMPONENT, INLINE_COMPONENT, PARAGRAPH, ROOT, TEXT, Node
from .base import TreeFormat, TreeFormatError, registry

_LABELS = {
    ROOT: "Root",
    PARAGRAPH: "Paragraph",
    INLINE_COMPONENT: "C",
    BLOCK_COMPONENT: "B",
}


class OutlineFormat(TreeFormat):
    """Bracketed outline renderer."""

    @property
    def name(self) -> str:
        return "outline"

    @property
    def extensions(self) -> list[str]:
        return [".outline"]

    def parse(self, content: str) -> Node:
        raise TreeFormatError("The outline format is output-only")

    def render(self, node: Node, indent: int | None = None) -> str:
        if not indent:
            return to_outline(node)
        return "\n".join(_outline_lines(node, indent, 0))


def _label(node: Node) -> str:
    if node.type == TEXT:
        value = node.value or ""
        tag = "W" if value.strip(JS_WHITESPACE) == "" else "T"
        return f"{tag}({json.dumps(value, ensure_ascii=False)})"

    label = _LABELS.get(node.type, node.type)
    if node.type in (INLINE_COMPONENT, BLOCK_COMPONENT):
        label = f"{label}({node.name or ''})"
    elif node.value is not None:
        label = f"{label}({json.dumps(node.value, ensure_ascii=False)})"
    return label


def _has_brackets(node: Node) -> bool:
    # Inline components print bare unless they wrap something
    if node.type == INLINE_COMPONENT:
        return bool(node.children)
    return node.is_parent


def to_outline(node: Node) -> str:
    """Render a tree on a single line."""
    label = _label(node)
    if not _has_brackets(node):
        return label
    inner = ", ".join(to_outline(child) for child in node.children)
    return f"{label}[{inner}]"


def _outline_lines(node: Node, indent: int, depth: int) -> list[str]:
    pad = " " * (indent * depth)
    label = _label(node)
    if not _has_brackets(node):
        return [pad + label]
    if not node.children:
        return [f"{pad}{label}[]"]
    lines = [f"{pad}{label}["]
    for child in node.children:
        lines.extend(_outline_lines(child, indent, depth + 1))
    lines.append(pad + "]")
    return lines


# Register the format
registry.register(OutlineFormat())
