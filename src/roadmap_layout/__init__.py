"""roadmap-layout: spine/rib auto-layout for generated roadmaps."""

from roadmap_layout.config import LayoutConfig
from roadmap_layout.errors import (
    ConfigurationError,
    CyclicSpineError,
    DanglingEdgeWarning,
    DuplicateNodeError,
    EmptyInputError,
    LayoutError,
    LayoutWarning,
    OrphanRibWarning,
    ParseError,
    ResidualCollisionWarning,
)
from roadmap_layout.layout.engine import RoadmapLayout, layout, layout_with_diagnostics
from roadmap_layout.layout.types import LayoutEdge, LayoutNode, LayoutResult, ParentExtent, Point
from roadmap_layout.parsers import parse
from roadmap_layout.renderers import ReactFlowRenderer
from roadmap_layout.types import Handle, LineStyle, NodeKind

__all__ = [
    "ConfigurationError",
    "CyclicSpineError",
    "DanglingEdgeWarning",
    "DuplicateNodeError",
    "EmptyInputError",
    "Handle",
    "LayoutConfig",
    "LayoutEdge",
    "LayoutError",
    "LayoutNode",
    "LayoutResult",
    "LayoutWarning",
    "LineStyle",
    "NodeKind",
    "OrphanRibWarning",
    "ParentExtent",
    "ParseError",
    "Point",
    "ReactFlowRenderer",
    "ResidualCollisionWarning",
    "RoadmapLayout",
    "layout",
    "layout_json",
    "layout_with_diagnostics",
    "parse",
]


def layout_json(src: str, config: LayoutConfig | None = None, indent: int | None = 2) -> str:
    """Parse a generated roadmap payload, lay it out and serialize it.

    Args:
        src: JSON payload with ``nodes`` and ``edges``, optionally code-fenced.
        config: Layout constants; defaults to ``LayoutConfig()``.
        indent: JSON indentation, or None for compact output.

    Returns:
        The laid-out roadmap as React Flow style JSON, diagnostics included.

    Raises:
        ParseError: If the payload cannot be decoded.
        LayoutError: If the roadmap cannot be laid out (empty, cyclic spine, ...).
    """
    nodes, edges = parse(src)
    result = RoadmapLayout(config).run(nodes, edges)
    return ReactFlowRenderer(indent=indent).render(result)
