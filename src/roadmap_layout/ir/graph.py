"""Graph IR: classifies roadmap nodes and indexes them for the layout stages.

Classification is computed once, when the graph is built, and frozen: every
later stage asks ``RoadmapGraph.kind()`` instead of re-reading node flags.
Nodes live in a flat list addressed through an id -> index map; the spine
subgraph is exposed as a networkx DiGraph for ranking.
"""

from __future__ import annotations

import logging

import networkx as nx

from roadmap_layout.errors import DanglingEdgeWarning, DuplicateNodeError, EmptyInputError
from roadmap_layout.layout.types import LayoutEdge, LayoutNode
from roadmap_layout.types import NodeKind

logger = logging.getLogger(__name__)


class RoadmapGraph:
    """The classified graph built from input nodes and edges.

    Attributes:
        nodes: Input nodes, in input order. Positions are mutated by later stages.
        edges: Input edges, in input order, including dangling ones.
        index: Node id -> position in ``nodes``.
        kinds: Frozen classification, parallel to ``nodes``.
        parent_of: Rib id -> spine parent id.
        children_of: Spine id -> rib children, in order of encounter.
        spine: DiGraph of spine nodes and spine -> spine edges only.
        dangling: One warning per edge referencing a missing node.
    """

    def __init__(
        self,
        nodes: list[LayoutNode],
        edges: list[LayoutEdge],
        index: dict[str, int],
        kinds: tuple[NodeKind, ...],
        parent_of: dict[str, str],
        children_of: dict[str, list[str]],
        spine: nx.DiGraph,
        dangling: list[DanglingEdgeWarning],
    ) -> None:
        self.nodes = nodes
        self.edges = edges
        self.index = index
        self.kinds = kinds
        self.parent_of = parent_of
        self.children_of = children_of
        self.spine = spine
        self.dangling = dangling

    @classmethod
    def classify(cls, nodes: list[LayoutNode], edges: list[LayoutEdge]) -> RoadmapGraph:
        """Partition nodes into spine and ribs, and edges by endpoint kind."""
        if not nodes:
            raise EmptyInputError()

        index: dict[str, int] = {}
        for i, node in enumerate(nodes):
            if node.id in index:
                raise DuplicateNodeError(node.id)
            index[node.id] = i
        kinds = tuple(NodeKind.from_flag(node.is_branch) for node in nodes)

        dangling: list[DanglingEdgeWarning] = []
        valid: list[LayoutEdge] = []
        for edge in edges:
            missing = next((end for end in (edge.source, edge.target) if end not in index), None)
            if missing is not None:
                warning = DanglingEdgeWarning(edge.id, missing)
                logger.warning("%s", warning)
                dangling.append(warning)
                continue
            valid.append(edge)

        def kind_of(node_id: str) -> NodeKind:
            return kinds[index[node_id]]

        spine: nx.DiGraph = nx.DiGraph()
        for node, kind in zip(nodes, kinds):
            if kind is NodeKind.SPINE:
                spine.add_node(node.id)
        for edge in valid:
            if kind_of(edge.source) is NodeKind.SPINE and kind_of(edge.target) is NodeKind.SPINE:
                spine.add_edge(edge.source, edge.target)

        # First spine -> rib edge wins; rib order follows input node order.
        inbound: dict[str, str] = {}
        for edge in valid:
            if kind_of(edge.source) is NodeKind.SPINE and kind_of(edge.target) is NodeKind.RIB:
                inbound.setdefault(edge.target, edge.source)

        parent_of: dict[str, str] = {}
        children_of: dict[str, list[str]] = {}
        for node, kind in zip(nodes, kinds):
            if kind is NodeKind.RIB and node.id in inbound:
                parent = inbound[node.id]
                parent_of[node.id] = parent
                children_of.setdefault(parent, []).append(node.id)

        logger.debug(
            "classified %d spine, %d rib node(s); %d spine edge(s), %d dangling",
            spine.number_of_nodes(),
            len(nodes) - spine.number_of_nodes(),
            spine.number_of_edges(),
            len(dangling),
        )
        return cls(
            nodes=nodes,
            edges=edges,
            index=index,
            kinds=kinds,
            parent_of=parent_of,
            children_of=children_of,
            spine=spine,
            dangling=dangling,
        )

    def node(self, node_id: str) -> LayoutNode:
        return self.nodes[self.index[node_id]]

    def get(self, node_id: str) -> LayoutNode | None:
        i = self.index.get(node_id)
        return None if i is None else self.nodes[i]

    def kind(self, node_id: str) -> NodeKind:
        return self.kinds[self.index[node_id]]

    def is_spine(self, node_id: str) -> bool:
        return self.kind(node_id) is NodeKind.SPINE

    def spine_nodes(self) -> list[LayoutNode]:
        return [n for n, k in zip(self.nodes, self.kinds) if k is NodeKind.SPINE]

    def rib_nodes(self) -> list[LayoutNode]:
        return [n for n, k in zip(self.nodes, self.kinds) if k is NodeKind.RIB]

    def orphans(self) -> list[LayoutNode]:
        return [n for n in self.rib_nodes() if n.id not in self.parent_of]

    def routable_edges(self) -> list[LayoutEdge]:
        """Edges whose endpoints both exist."""
        return [e for e in self.edges if e.source in self.index and e.target in self.index]

    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)
