"""Base renderer protocol."""

from __future__ import annotations

from typing import Protocol

from roadmap_layout.layout.types import LayoutResult


class Renderer(Protocol):
    """Protocol that all renderers must implement."""

    def render(self, result: LayoutResult) -> str:
        """Serialize a laid-out roadmap to an output string."""
        ...
