"""Layout stages and shared layout types.

The pipeline itself lives in ``roadmap_layout.layout.engine``.
"""

from __future__ import annotations

from roadmap_layout.layout.collisions import collides, find_collisions, resolve_collisions, separate
from roadmap_layout.layout.ribs import (
    compact_spine,
    compute_extents,
    place_ribs,
    reserved_span,
    side_counts,
    stack_height,
)
from roadmap_layout.layout.routing import relative_handles, route_edge, route_edges
from roadmap_layout.layout.sugiyama import (
    AugmentedGraph,
    DummyEdge,
    LayerAssignment,
    RankedLayout,
    SpineLayering,
    SugiyamaLayering,
    assign_coordinates,
    centers_to_corners,
    count_crossings,
    find_spine_cycle,
    greedy_fas_ordering,
    insert_dummy_nodes,
    minimise_crossings,
    remove_cycles,
)
from roadmap_layout.layout.types import (
    DUMMY_PREFIX,
    LayoutEdge,
    LayoutNode,
    LayoutResult,
    ParentExtent,
    Point,
)

__all__ = [
    "DUMMY_PREFIX",
    "AugmentedGraph",
    "DummyEdge",
    "LayerAssignment",
    "LayoutEdge",
    "LayoutNode",
    "LayoutResult",
    "ParentExtent",
    "Point",
    "RankedLayout",
    "SpineLayering",
    "SugiyamaLayering",
    "assign_coordinates",
    "centers_to_corners",
    "collides",
    "compact_spine",
    "compute_extents",
    "count_crossings",
    "find_collisions",
    "find_spine_cycle",
    "greedy_fas_ordering",
    "insert_dummy_nodes",
    "minimise_crossings",
    "place_ribs",
    "relative_handles",
    "remove_cycles",
    "reserved_span",
    "resolve_collisions",
    "route_edge",
    "route_edges",
    "separate",
    "side_counts",
    "stack_height",
]
