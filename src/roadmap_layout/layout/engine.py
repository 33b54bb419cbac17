"""Roadmap layout pipeline and its convenience entry point."""

from __future__ import annotations

import copy
import logging

from roadmap_layout.config import LayoutConfig
from roadmap_layout.errors import ConfigurationError, LayoutWarning
from roadmap_layout.ir.graph import RoadmapGraph
from roadmap_layout.layout.collisions import resolve_collisions
from roadmap_layout.layout.ribs import compact_spine, compute_extents, place_ribs
from roadmap_layout.layout.routing import route_edges
from roadmap_layout.layout.sugiyama import SpineLayering, SugiyamaLayering
from roadmap_layout.layout.types import LayoutEdge, LayoutNode, LayoutResult

logger = logging.getLogger(__name__)


def apply_node_size(nodes: list[LayoutNode], config: LayoutConfig) -> None:
    """Give every node the configured box size.

    Raises:
        ConfigurationError: If a node already carries a different size.
    """
    for node in nodes:
        if node.width not in (None, config.node_width) or node.height not in (None, config.node_height):
            raise ConfigurationError(
                f"node {node.id!r} is {node.width}x{node.height}; "
                f"every node must be {config.node_width}x{config.node_height}"
            )
        node.width = config.node_width
        node.height = config.node_height


class RoadmapLayout:
    """Spine/rib layout engine.

    Stages run strictly in order: classify, rank the spine, reserve rib
    extents, compact the spine, place ribs, repair collisions, route edges.
    The engine works on copies; the caller's nodes and edges are untouched.
    """

    def __init__(self, config: LayoutConfig | None = None, layering: SpineLayering | None = None) -> None:
        self.config = (config or LayoutConfig()).validate()
        self.layering = layering or SugiyamaLayering()

    def run(self, nodes: list[LayoutNode], edges: list[LayoutEdge]) -> LayoutResult:
        """Lay out a roadmap and return positions, annotated edges and diagnostics.

        Raises:
            EmptyInputError: If ``nodes`` is empty.
            DuplicateNodeError: If two nodes share an id.
            ConfigurationError: If a node's preset size differs from the config.
            CyclicSpineError: If spine edges form a cycle and the policy is "raise".
        """
        working = copy.deepcopy(nodes)
        apply_node_size(working, self.config)
        graph = RoadmapGraph.classify(working, copy.deepcopy(edges))
        diagnostics: list[LayoutWarning] = list(graph.dangling)

        ranked = self.layering.layer_dag(graph.spine, self.config)
        spine = graph.spine_nodes()
        for node in spine:
            corner = ranked.positions[node.id]
            node.move_to(corner.x, corner.y)

        extents = compute_extents(graph, self.config)
        compact_spine(spine, extents, self.config)
        diagnostics.extend(place_ribs(graph, self.config))
        # Orphans stay at the origin; whatever overlaps them moves instead.
        orphans = {node.id for node in graph.orphans()}
        diagnostics.extend(resolve_collisions(spine + graph.rib_nodes(), self.config, pinned=orphans))
        route_edges(graph)

        logger.debug(
            "laid out %d node(s), %d edge(s) over %d spine rank(s); %d diagnostic(s)",
            graph.node_count(),
            graph.edge_count(),
            len(set(ranked.ranks.values())),
            len(diagnostics),
        )
        return LayoutResult(nodes=graph.nodes, edges=graph.edges, diagnostics=diagnostics)


def layout(
    nodes: list[LayoutNode],
    edges: list[LayoutEdge],
    config: LayoutConfig | None = None,
) -> tuple[list[LayoutNode], list[LayoutEdge]]:
    """Run the default pipeline and return the laid-out nodes and edges."""
    result = RoadmapLayout(config).run(nodes, edges)
    return result.nodes, result.edges


def layout_with_diagnostics(
    nodes: list[LayoutNode],
    edges: list[LayoutEdge],
    config: LayoutConfig | None = None,
) -> LayoutResult:
    """Run the default pipeline and keep the diagnostics."""
    return RoadmapLayout(config).run(nodes, edges)
