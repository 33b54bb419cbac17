"""Pairwise collision repair over every node, spine and rib alike.

A local heuristic: each colliding pair is pushed apart along the axis with
the smaller overlap, moving only the later node of the pair. Passes stop as
soon as one finds no collision, or after ``max_passes``. Pinned nodes never
move; when the later node is pinned the earlier one moves instead.
"""

from __future__ import annotations

import logging
from collections.abc import Collection

from roadmap_layout.config import LayoutConfig
from roadmap_layout.errors import ResidualCollisionWarning
from roadmap_layout.layout.types import LayoutNode

logger = logging.getLogger(__name__)


def collides(a: LayoutNode, b: LayoutNode, config: LayoutConfig) -> bool:
    """True when the padded boxes of ``a`` and ``b`` overlap."""
    return (
        abs(a.x - b.x) < config.node_width + config.padding
        and abs(a.y - b.y) < config.node_height + config.padding
    )


def separate(a: LayoutNode, b: LayoutNode, config: LayoutConfig) -> None:
    """Move ``b`` away from ``a`` along the cheaper axis."""
    min_dx = config.node_width + config.padding
    min_dy = config.node_height + config.padding
    overlap_x = min_dx - abs(a.x - b.x)
    overlap_y = min_dy - abs(a.y - b.y)

    if overlap_x < overlap_y:
        shift = overlap_x / 2 + config.padding
        b.x += shift if b.x - a.x > 0 else -shift
    else:
        shift = overlap_y / 2 + config.padding
        b.y += shift if b.y - a.y > 0 else -shift


def find_collisions(nodes: list[LayoutNode], config: LayoutConfig) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for i in range(len(nodes)):
        for j in range(i + 1, len(nodes)):
            if collides(nodes[i], nodes[j], config):
                pairs.append((nodes[i].id, nodes[j].id))
    return pairs


def resolve_collisions(
    nodes: list[LayoutNode],
    config: LayoutConfig,
    pinned: Collection[str] = (),
) -> list[ResidualCollisionWarning]:
    """Run bounded repair passes; report what is still overlapping."""
    passes = 0
    for _pass in range(config.max_passes):
        passes += 1
        moved = 0
        for i in range(len(nodes)):
            for j in range(i + 1, len(nodes)):
                a, b = nodes[i], nodes[j]
                if not collides(a, b, config):
                    continue
                if b.id not in pinned:
                    separate(a, b, config)
                elif a.id not in pinned:
                    separate(b, a, config)
                else:
                    continue
                moved += 1
        logger.debug("collision pass %d: %d pair(s) moved", passes, moved)
        if moved == 0:
            break

    residual = find_collisions(nodes, config)
    if not residual:
        return []
    warning = ResidualCollisionWarning(residual, passes)
    logger.warning("%s", warning)
    return [warning]
