"""
Core rewrite passes for Unravel.

MDX parsers wrap inline content in paragraphs unconditionally, so a lone
`<Widget />` line arrives as paragraph > mdxJsxTextElement, and the body of
`<Card>hi</Card>` arrives as mdxJsxFlowElement > paragraph > text. The passes
here remove those wrappers where nothing depends on them:

- Pass 1 (paragraph unwrap): a paragraph whose children are all transparent
  (inline components or whitespace-only text) is replaced by its children.
- Pass 2 (component single-child unwrap): a component whose only child is a
  paragraph gets that paragraph's children hoisted into its place.

Every other paragraph is left alone, by reference.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from enum import Enum

from .dom import COMPONENT_TYPES, INLINE_COMPONENT, PARAGRAPH, TEXT, Node
from .visitor import visit

logger = logging.getLogger(__name__)

Transformer = Callable[[Node], None]

# What JavaScript's String.prototype.trim() strips: WhiteSpace + LineTerminator.
# str.strip() differs (it strips U+001C..U+001F, keeps U+FEFF).
JS_WHITESPACE = (
    "\t\v\f \u00a0\ufeff"  # TAB VT FF SP NBSP ZWNBSP
    "\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u202f\u205f\u3000"  # rest of Zs
    "\n\r\u2028\u2029"  # LF CR LS PS
)


class UnwrapMode(str, Enum):
    COMPONENT_ONLY = "component-only"
    ALL = "all"


def is_transparent(node: Node) -> bool:
    """Inline components and whitespace-only text don't need a paragraph."""
    if node.type == INLINE_COMPONENT:
        return True
    if node.type == TEXT:
        return (node.value or "").strip(JS_WHITESPACE) == ""
    return False


def is_unwrappable(children: Sequence[Node]) -> bool:
    """True when every child is transparent (vacuously true for no children)."""
    return all(is_transparent(child) for child in children)


def _unwrap_paragraphs(tree: Node) -> int:
    count = 0

    def unwrap(node: Node, index: int | None, parent: Node | None) -> list[Node] | None:
        nonlocal count
        if parent is None or not is_unwrappable(node.children):
            return None
        count += 1
        return list(node.children)

    visit(tree, PARAGRAPH, unwrap)
    return count


def _hoist_single_paragraphs(tree: Node) -> int:
    count = 0

    def hoist(node: Node, index: int | None, parent: Node | None) -> None:
        nonlocal count
        # Two or more children: paragraph breaks are the only separators left
        if len(node.children) != 1 or node.children[0].type != PARAGRAPH:
            return
        node.children[0:1] = node.children[0].children
        count += 1

    visit(tree, COMPONENT_TYPES, hoist)
    return count


def unwrap_component_only_paragraphs(tree: Node) -> None:
    """Replace component-only paragraphs with their children, in place."""
    count = _unwrap_paragraphs(tree)
    logger.debug("Unwrapped %d component-only paragraph(s)", count)


def unwrap_all(tree: Node) -> None:
    """Paragraph unwrap, then hoist lone paragraphs out of components, in place."""
    unwrap_component_only_paragraphs(tree)
    count = _hoist_single_paragraphs(tree)
    logger.debug("Hoisted %d single paragraph(s) out of components", count)


def unravel(mode: UnwrapMode | str = UnwrapMode.ALL) -> Transformer:
    """
    Return the transformer for a mode, for use in parse -> rewrite -> render
    pipelines.

    >>> transform = unravel("component-only")
    >>> transform(tree)
    """
    try:
        mode = UnwrapMode(mode)
    except ValueError:
        known = ", ".join(m.value for m in UnwrapMode)
        raise ValueError(f"Unknown unwrap mode {mode!r} (expected one of: {known})") from None

    if mode is UnwrapMode.COMPONENT_ONLY:
        return unwrap_component_only_paragraphs
    return unwrap_all
