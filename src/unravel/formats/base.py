"""
Base format interface and registry.

A format reads a serialised document tree into Nodes and writes Nodes back.
The rewrite passes never touch a format; formats only exist so the command
line can sit between an MDX parser and a renderer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..dom import Node


class TreeFormatError(ValueError):
    """Serialised tree is malformed, or the format can't do what was asked."""


class TreeFormat(ABC):
    """Base class for tree serialisation formats."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Format name used on the command line (e.g. 'json')."""
        ...

    @property
    @abstractmethod
    def extensions(self) -> list[str]:
        """File extensions this format handles (e.g., ['.json'])."""
        ...

    @abstractmethod
    def parse(self, content: str) -> Node:
        """
        Parse serialised content into a tree of Nodes.
        Returns the root node of the tree.
        """
        ...

    @abstractmethod
    def render(self, node: Node, indent: int | None = None) -> str:
        """Serialise a tree back to text."""
        ...


class FormatRegistry:
    """Registry of tree formats with lookup by name and extension."""

    def __init__(self):
        self._formats: list[TreeFormat] = []
        self._by_extension: dict[str, TreeFormat] = {}
        self._by_name: dict[str, TreeFormat] = {}

    def register(self, fmt: TreeFormat) -> None:
        """Register a format."""
        self._formats.append(fmt)
        self._by_name[fmt.name] = fmt
        for ext in fmt.extensions:
            # First registered wins for extension conflicts
            if ext not in self._by_extension:
                self._by_extension[ext] = fmt

    def get_by_name(self, name: str) -> TreeFormat:
        """Get format by name, raising with the known names if missing."""
        fmt = self._by_name.get(name)
        if fmt is None:
            known = ", ".join(sorted(self._by_name)) or "none"
            raise TreeFormatError(f"Unknown format {name!r} (known: {known})")
        return fmt

    def get_by_extension(self, ext: str) -> TreeFormat | None:
        """Get format by file extension."""
        if not ext.startswith('.'):
            ext = '.' + ext
        return self._by_extension.get(ext.lower())

    def for_filename(self, filename: str | None, default: str) -> TreeFormat:
        """Pick a format from a filename's extension, else the named default."""
        if filename and '.' in filename:
            fmt = self.get_by_extension(filename.rsplit('.', 1)[-1])
            if fmt is not None:
                return fmt
        return self.get_by_name(default)

    @property
    def formats(self) -> list[TreeFormat]:
        """List all registered formats."""
        return list(self._formats)


# Global registry instance
registry = FormatRegistry()
