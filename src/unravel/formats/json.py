"""
JSON format: mdast trees as emitted by JavaScript MDX parsers.

`JSON.stringify(tree)` output from remark-mdx maps onto Nodes field by field.
Keys the rewrite passes don't care about (position, depth, ordered, lang,
url, data, ...) are kept in `Node.extra` and written back as they came.
"""

from __future__ import annotations

import json
from typing import Any

from ..dom import Attribute, Node
from .base import TreeFormat, TreeFormatError, registry

_NODE_KEYS = ("type", "name", "attributes", "value", "children")


class JSONFormat(TreeFormat):
    """mdast JSON reader/writer."""

    @property
    def name(self) -> str:
        return "json"

    @property
    def extensions(self) -> list[str]:
        return [".json", ".mdast"]

    def parse(self, content: str) -> Node:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise TreeFormatError(f"Invalid JSON: {e}") from e
        return node_from_dict(data)

    def render(self, node: Node, indent: int | None = None) -> str:
        return json.dumps(node_to_dict(node), indent=indent, ensure_ascii=False)


def node_from_dict(data: Any, path: str = "$") -> Node:
    """Build a Node tree from decoded mdast JSON."""
    if not isinstance(data, dict):
        raise TreeFormatError(f"{path}: expected a node object, got {type(data).__name__}")

    node_type = data.get("type")
    if not isinstance(node_type, str):
        raise TreeFormatError(f"{path}: node has no string 'type'")

    raw_children = data.get("children", [])
    if not isinstance(raw_children, list):
        raise TreeFormatError(f"{path}.children: expected a list")

    raw_attributes = data.get("attributes", [])
    if not isinstance(raw_attributes, list):
        raise TreeFormatError(f"{path}.attributes: expected a list")

    value = data.get("value")
    if value is not None and not isinstance(value, str):
        raise TreeFormatError(f"{path}.value: expected a string")

    return Node(
        type=node_type,
        children=[
            node_from_dict(child, f"{path}.children[{i}]")
            for i, child in enumerate(raw_children)
        ],
        value=value,
        name=data.get("name"),
        attributes=[
            _attribute_from_dict(attr, f"{path}.attributes[{i}]")
            for i, attr in enumerate(raw_attributes)
        ],
        extra={k: v for k, v in data.items() if k not in _NODE_KEYS},
    )


def _attribute_from_dict(data: Any, path: str) -> Attribute:
    if not isinstance(data, dict):
        raise TreeFormatError(f"{path}: expected an attribute object")
    return Attribute(
        name=data.get("name"),
        value=data.get("value"),
        type=data.get("type", "mdxJsxAttribute"),
    )


def node_to_dict(node: Node) -> dict[str, Any]:
    """Inverse of node_from_dict."""
    out: dict[str, Any] = {"type": node.type}

    if node.is_component or node.name is not None:
        out["name"] = node.name
    if node.is_component or node.attributes:
        out["attributes"] = [_attribute_to_dict(attr) for attr in node.attributes]
    if node.value is not None:
        out["value"] = node.value
    if node.is_parent:
        out["children"] = [node_to_dict(child) for child in node.children]

    out.update(node.extra)
    return out


def _attribute_to_dict(attr: Attribute) -> dict[str, Any]:
    out: dict[str, Any] = {"type": attr.type}
    if attr.name is not None:
        out["name"] = attr.name
    out["value"] = attr.value
    return out


# Register the format
registry.register(JSONFormat())
