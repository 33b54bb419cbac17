"""Branch (rib) placement around the spine.

Three stages run in order:

* ``compute_extents`` reserves, for each spine node, the vertical span its
  ribs will need once they are stacked alternately right and left.
* ``compact_spine`` pushes spine nodes down so consecutive reserved spans
  never come closer than ``min_gap``.
* ``place_ribs`` puts every rib beside its parent, centred on the parent's y.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from roadmap_layout.config import LayoutConfig
from roadmap_layout.errors import OrphanRibWarning
from roadmap_layout.layout.types import LayoutNode, ParentExtent

if TYPE_CHECKING:
    from roadmap_layout.ir.graph import RoadmapGraph

logger = logging.getLogger(__name__)


def side_counts(child_count: int) -> tuple[int, int]:
    """Return (right, left) sibling counts; even indices go right."""
    return math.ceil(child_count / 2), child_count // 2


def stack_height(child_count: int, config: LayoutConfig) -> float:
    """Distance between the first and last row of the taller side."""
    if child_count == 0:
        return 0.0
    max_side = max(side_counts(child_count))
    return (max_side - 1) * config.row_pitch


def compute_extents(graph: RoadmapGraph, config: LayoutConfig) -> dict[str, ParentExtent]:
    """Reserved span per spine node, relative to the node's own y."""
    extents: dict[str, ParentExtent] = {}
    for parent in graph.spine_nodes():
        count = len(graph.children_of.get(parent.id, []))
        if count == 0:
            extents[parent.id] = ParentExtent.empty()
            continue
        half = stack_height(count, config) / 2
        extents[parent.id] = ParentExtent(
            min_y=-half - config.node_height / 2,
            max_y=half + config.node_height / 2,
            child_count=count,
        )
    return extents


def reserved_span(extent: ParentExtent, neighbour: ParentExtent, config: LayoutConfig) -> tuple[float, float]:
    """Span a spine node blocks next to ``neighbour``.

    A childless node reserves nothing beside another childless node, but next
    to a node with ribs it still blocks its own box.
    """
    if extent.child_count == 0 and neighbour.child_count > 0:
        return -config.node_height / 2, config.node_height / 2
    return extent.min_y, extent.max_y


def compact_spine(
    spine_nodes: list[LayoutNode],
    extents: dict[str, ParentExtent],
    config: LayoutConfig,
) -> float:
    """Single top-to-bottom sweep separating reserved spans.

    When a node has to move, every node below it moves by the same amount, so
    extents computed up front stay valid. Ties in y keep input order. Returns
    the total distance pushed.
    """
    ordered = sorted(spine_nodes, key=lambda n: n.y)
    carried = 0.0
    for i, cur in enumerate(ordered):
        cur.y += carried
        if i == 0:
            continue
        prev = ordered[i - 1]
        prev_extent, cur_extent = extents[prev.id], extents[cur.id]
        prev_bottom = prev.y + reserved_span(prev_extent, cur_extent, config)[1]
        cur_top = cur.y + reserved_span(cur_extent, prev_extent, config)[0]
        if cur_top < prev_bottom + config.min_gap:
            push = (prev_bottom + config.min_gap) - cur_top
            cur.y += push
            carried += push
    if carried:
        logger.debug("spine compacted: pushed %.1f in total", carried)
    return carried


def place_ribs(graph: RoadmapGraph, config: LayoutConfig) -> list[OrphanRibWarning]:
    """Position ribs beside their parents; orphans go to the origin."""
    offset_x = config.node_width + config.h_spacing
    for parent_id, children in graph.children_of.items():
        parent = graph.node(parent_id)
        start_y = parent.y - stack_height(len(children), config) / 2
        for i, child_id in enumerate(children):
            right = i % 2 == 0
            side_index = i // 2
            graph.node(child_id).move_to(
                parent.x + (offset_x if right else -offset_x),
                start_y + side_index * config.row_pitch,
            )

    warnings: list[OrphanRibWarning] = []
    for orphan in graph.orphans():
        orphan.move_to(0.0, 0.0)
        warning = OrphanRibWarning(orphan.id)
        logger.warning("%s", warning)
        warnings.append(warning)
    return warnings
