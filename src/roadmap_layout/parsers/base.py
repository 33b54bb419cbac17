"""Base parser protocol."""

from __future__ import annotations

from typing import Protocol

from roadmap_layout.layout.types import LayoutEdge, LayoutNode


class Parser(Protocol):
    """Protocol that all content-source parsers must implement."""

    def parse(self, src: str) -> tuple[list[LayoutNode], list[LayoutEdge]]:
        """Parse source text into unpositioned nodes and edges."""
        ...
