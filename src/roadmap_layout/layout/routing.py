"""Edge routing: attachment handles, line style and arrow flag per edge.

Routing reads final positions and frozen node kinds only, never edge ids or
order, so running it again on the same positions changes nothing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from roadmap_layout.layout.types import LayoutEdge, LayoutNode
from roadmap_layout.types import Handle, LineStyle, NodeKind

if TYPE_CHECKING:
    from roadmap_layout.ir.graph import RoadmapGraph


def relative_handles(source: LayoutNode, target: LayoutNode) -> tuple[Handle, Handle]:
    """Pick handles facing each other along the dominant axis."""
    dx = target.x - source.x
    dy = target.y - source.y
    if abs(dx) > abs(dy):
        return (Handle.RIGHT, Handle.LEFT) if dx > 0 else (Handle.LEFT, Handle.RIGHT)
    return (Handle.BOTTOM, Handle.TOP) if dy > 0 else (Handle.TOP, Handle.BOTTOM)


def route_edge(
    edge: LayoutEdge,
    source: LayoutNode,
    target: LayoutNode,
    source_kind: NodeKind,
    target_kind: NodeKind,
) -> None:
    if source_kind is NodeKind.SPINE and target_kind is NodeKind.SPINE:
        edge.source_handle, edge.target_handle = Handle.BOTTOM, Handle.TOP
        edge.line_style = LineStyle.DASHED
        edge.has_arrow = True
    elif source_kind is NodeKind.SPINE:
        if target.x - source.x > 0:
            edge.source_handle, edge.target_handle = Handle.RIGHT, Handle.LEFT
        else:
            edge.source_handle, edge.target_handle = Handle.LEFT, Handle.RIGHT
        edge.line_style = LineStyle.DOTTED
        edge.has_arrow = True
    else:
        # Style and arrow stay as supplied.
        edge.source_handle, edge.target_handle = relative_handles(source, target)


def route_edges(graph: RoadmapGraph) -> list[LayoutEdge]:
    """Annotate every edge whose endpoints exist; dangling edges pass through."""
    for edge in graph.routable_edges():
        route_edge(
            edge,
            graph.node(edge.source),
            graph.node(edge.target),
            graph.kind(edge.source),
            graph.kind(edge.target),
        )
    return graph.edges
