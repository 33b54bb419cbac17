"""Layout types shared across the pipeline stages and renderers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from roadmap_layout.errors import LayoutWarning
from roadmap_layout.types import Handle, LineStyle


@dataclass
class Point:
    """A 2D point in canvas coordinates."""

    x: float
    y: float


@dataclass
class LayoutNode:
    """A roadmap node; ``x``/``y`` is the top-left corner of its box.

    ``width``/``height`` are filled in from the config by the engine. Every box
    has the same size, so a preset size must match the config.
    """

    id: str
    is_branch: bool = False
    x: float = 0.0
    y: float = 0.0
    width: float | None = None
    height: float | None = None
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    def move_to(self, x: float, y: float) -> None:
        self.x = x
        self.y = y


@dataclass
class LayoutEdge:
    """A directed parent -> child relation annotated by the edge router."""

    id: str
    source: str
    target: str
    source_handle: Handle | None = None
    target_handle: Handle | None = None
    line_style: LineStyle = LineStyle.DASHED
    has_arrow: bool = True
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class ParentExtent:
    """Vertical span, relative to a spine node's y, reserved for its ribs."""

    min_y: float
    max_y: float
    child_count: int

    @classmethod
    def empty(cls) -> ParentExtent:
        return cls(min_y=0.0, max_y=0.0, child_count=0)


@dataclass
class LayoutResult:
    """Self-contained layout output, everything renderers need."""

    nodes: list[LayoutNode]
    edges: list[LayoutEdge]
    diagnostics: list[LayoutWarning] = field(default_factory=list)


# Prefix for virtual nodes inserted into long spine edges
DUMMY_PREFIX = "__dummy_"
