"""Sugiyama-style layered layout for the roadmap spine.

Phases:
  1. Cycle detection / removal (greedy-FAS)
  2. Layer assignment (longest path, tight sources)
  3. Dummy node insertion
  4. Crossing minimization (barycenter)
  5. Coordinate assignment (box centers, then top-left corners)

Only spine nodes and spine -> spine edges take part. Every ordering decision
falls back to input order so the same graph always yields the same layout.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Protocol

import networkx as nx

from roadmap_layout.config import LayoutConfig
from roadmap_layout.errors import CyclicSpineError
from roadmap_layout.layout.types import DUMMY_PREFIX, Point

logger = logging.getLogger(__name__)

MAX_CROSSING_PASSES: int = 24


# ─── Strategy interface ──────────────────────────────────────────────────────


@dataclass
class RankedLayout:
    """Top-left positions and ranks for every spine node."""

    positions: dict[str, Point] = field(default_factory=dict)
    ranks: dict[str, int] = field(default_factory=dict)


class SpineLayering(Protocol):
    """Protocol for spine ranking strategies."""

    def layer_dag(self, spine: nx.DiGraph, config: LayoutConfig) -> RankedLayout:
        """Place spine nodes top-to-bottom; positions are top-left corners."""
        ...


# ─── Cycle Removal (Greedy-FAS) ─────────────────────────────────────────────


def find_spine_cycle(graph: nx.DiGraph) -> list[str] | None:
    """Return the node ids of one cycle, or None if the graph is a DAG."""
    try:
        cycle_edges = nx.find_cycle(graph)
    except nx.NetworkXNoCycle:
        return None
    return [src for src, _tgt in cycle_edges]


def greedy_fas_ordering(graph: nx.DiGraph) -> list[str]:
    """Compute a node ordering using the greedy-FAS heuristic.

    Nodes earlier in the ordering should have outgoing edges going forward.
    Active nodes are kept in insertion order so ties break the same way on
    every run.
    """
    active: dict[str, None] = dict.fromkeys(graph.nodes)
    out_deg: dict[str, int] = {}
    in_deg: dict[str, int] = {}
    for node in graph.nodes:
        out_deg[node] = graph.out_degree(node)
        in_deg[node] = graph.in_degree(node)

    s1: list[str] = []
    s2: list[str] = []

    while active:
        changed = True
        while changed:
            changed = False
            sinks = [n for n in active if out_deg[n] == 0]
            if sinks:
                changed = True
                for sink in sinks:
                    del active[sink]
                    s2.append(sink)
                    for pred in graph.predecessors(sink):
                        if pred in active:
                            out_deg[pred] -= 1

        changed = True
        while changed:
            changed = False
            sources = [n for n in active if in_deg[n] == 0]
            if sources:
                changed = True
                for source in sources:
                    del active[source]
                    s1.append(source)
                    for succ in graph.successors(source):
                        if succ in active:
                            in_deg[succ] -= 1

        if active:
            best = max(active, key=lambda n: out_deg[n] - in_deg[n])
            del active[best]
            s1.append(best)
            for succ in graph.successors(best):
                if succ in active:
                    in_deg[succ] -= 1
            for pred in graph.predecessors(best):
                if pred in active:
                    out_deg[pred] -= 1

    s2.reverse()
    s1.extend(s2)
    return s1


def remove_cycles(graph: nx.DiGraph) -> tuple[nx.DiGraph, set[tuple[str, str]]]:
    """Remove cycles using greedy-FAS. Returns (dag, reversed_edges).

    Self-loops are counted as reversed and dropped from the result.
    """
    if graph.number_of_nodes() == 0:
        return graph.copy(), set()

    ordering = greedy_fas_ordering(graph)
    position: dict[str, int] = {node: pos for pos, node in enumerate(ordering)}

    reversed_edges: set[tuple[str, str]] = set()
    for src, tgt in graph.edges():
        if src == tgt or position[src] > position[tgt]:
            reversed_edges.add((src, tgt))

    new_graph: nx.DiGraph = nx.DiGraph()
    for node_id in graph.nodes:
        new_graph.add_node(node_id, **graph.nodes[node_id])

    for src, tgt, edge_attrs in graph.edges(data=True):
        if src == tgt:
            continue
        if (src, tgt) in reversed_edges:
            new_graph.add_edge(tgt, src, **edge_attrs)
        else:
            new_graph.add_edge(src, tgt, **edge_attrs)

    return new_graph, reversed_edges


# ─── Layer Assignment ────────────────────────────────────────────────────────


class LayerAssignment:
    def __init__(self, layers: dict[str, int], layer_count: int) -> None:
        self.layers = layers
        self.layer_count = layer_count

    @classmethod
    def assign(cls, dag: nx.DiGraph) -> LayerAssignment:
        """Rank a DAG: longest path from the sources, then pull sources down.

        A graph without edges gets one rank per node, in input order.
        """
        if dag.number_of_edges() == 0:
            layers = {node_id: i for i, node_id in enumerate(dag.nodes)}
            return cls(layers=layers, layer_count=max(len(layers), 1))

        layers = {node_id: 0 for node_id in dag.nodes}
        changed = True
        while changed:
            changed = False
            for src, tgt in dag.edges():
                if layers[tgt] < layers[src] + 1:
                    layers[tgt] = layers[src] + 1
                    changed = True

        # A source feeding a deep node sits directly above its nearest successor.
        for node_id in dag.nodes:
            if dag.in_degree(node_id) == 0 and dag.out_degree(node_id) > 0:
                layers[node_id] = min(layers[s] for s in dag.successors(node_id)) - 1

        low = min(layers.values())
        if low:
            layers = {node_id: rank - low for node_id, rank in layers.items()}

        layer_count = max(layers.values()) + 1
        return cls(layers=layers, layer_count=layer_count)


# ─── Dummy Node Insertion ────────────────────────────────────────────────────


@dataclass
class DummyEdge:
    original_src: str
    original_tgt: str
    dummy_ids: list[str]


@dataclass
class AugmentedGraph:
    graph: nx.DiGraph
    layers: dict[str, int]
    layer_count: int
    dummy_edges: list[DummyEdge]


def insert_dummy_nodes(dag: nx.DiGraph, la: LayerAssignment) -> AugmentedGraph:
    """Insert dummy nodes for edges spanning multiple layers."""
    g: nx.DiGraph = nx.DiGraph()
    for node_id in dag.nodes:
        g.add_node(node_id, dummy=False)

    layers: dict[str, int] = copy.copy(la.layers)
    dummy_edges: list[DummyEdge] = []
    edge_counter = 0

    for src_id, tgt_id in list(dag.edges()):
        layer_diff = layers[tgt_id] - layers[src_id]
        if layer_diff <= 1:
            g.add_edge(src_id, tgt_id)
            continue

        this_edge = edge_counter
        edge_counter += 1

        dummy_ids: list[str] = []
        chain_prev = src_id
        for i in range(layer_diff - 1):
            dummy_id = f"{DUMMY_PREFIX}{this_edge}_{i}"
            g.add_node(dummy_id, dummy=True)
            layers[dummy_id] = layers[src_id] + i + 1
            dummy_ids.append(dummy_id)
            g.add_edge(chain_prev, dummy_id)
            chain_prev = dummy_id
        g.add_edge(chain_prev, tgt_id)

        dummy_edges.append(DummyEdge(original_src=src_id, original_tgt=tgt_id, dummy_ids=dummy_ids))

    layer_count = (max(layers.values()) + 1) if layers else 1
    return AugmentedGraph(graph=g, layers=layers, layer_count=layer_count, dummy_edges=dummy_edges)


# ─── Crossing Minimization ───────────────────────────────────────────────────


def minimise_crossings(aug: AugmentedGraph) -> list[list[str]]:
    """Minimise edge crossings using barycenter heuristic.

    Each layer starts in graph insertion order: input order for real nodes,
    creation order for dummies.
    """
    layer_count = aug.layer_count
    ordering: list[list[str]] = [[] for _ in range(layer_count)]
    for node_id in aug.graph.nodes:
        ordering[aug.layers[node_id]].append(node_id)

    best = count_crossings(ordering, aug.graph)
    if best == 0:
        return ordering

    for _pass in range(MAX_CROSSING_PASSES):
        candidate = [list(layer) for layer in ordering]
        for layer_idx in range(1, layer_count):
            prev: dict[str, float] = {nid: float(i) for i, nid in enumerate(candidate[layer_idx - 1])}
            candidate[layer_idx].sort(key=lambda a, p=prev: _barycenter(a, aug.graph, p, "incoming"))

        for layer_idx in range(layer_count - 2, -1, -1):
            nxt: dict[str, float] = {nid: float(i) for i, nid in enumerate(candidate[layer_idx + 1])}
            candidate[layer_idx].sort(key=lambda a, n=nxt: _barycenter(a, aug.graph, n, "outgoing"))

        new = count_crossings(candidate, aug.graph)
        if new >= best:
            break
        ordering, best = candidate, new

    return ordering


def _barycenter(node_id: str, graph: nx.DiGraph, neighbor_pos: dict[str, float], direction: str) -> float:
    if node_id not in graph:
        return float("inf")
    neighbors = list(graph.predecessors(node_id)) if direction == "incoming" else list(graph.successors(node_id))
    positions = [neighbor_pos[nb] for nb in neighbors if nb in neighbor_pos]
    if not positions:
        return float("inf")
    return sum(positions) / len(positions)


def count_crossings(ordering: list[list[str]], graph: nx.DiGraph) -> int:
    total = 0
    for l_idx in range(len(ordering) - 1):
        tgt_pos: dict[str, int] = {nid: i for i, nid in enumerate(ordering[l_idx + 1])}
        edges: list[tuple[int, int]] = []
        for sp, src_id in enumerate(ordering[l_idx]):
            if src_id in graph:
                for nb in graph.successors(src_id):
                    if nb in tgt_pos:
                        edges.append((sp, tgt_pos[nb]))
        for i in range(len(edges)):
            for j in range(i + 1, len(edges)):
                ei, ej = edges[i], edges[j]
                if (ei[0] < ej[0] and ei[1] > ej[1]) or (ei[0] > ej[0] and ei[1] < ej[1]):
                    total += 1
    return total


# ─── Coordinate Assignment ───────────────────────────────────────────────────


def assign_coordinates(
    ordering: list[list[str]],
    aug: AugmentedGraph,
    config: LayoutConfig,
) -> dict[str, Point]:
    """Assign box centers to every node, dummies included.

    Rank ``r`` is centered at ``r * (height + ranksep) + height / 2``. Inside a
    rank, boxes sit ``nodesep`` apart and the rank is centered on the widest one.
    """

    def node_width(node_id: str) -> float:
        return 0.0 if aug.graph.nodes[node_id].get("dummy") else config.node_width

    layer_widths: list[float] = []
    for layer_nodes in ordering:
        w_sum = sum(node_width(nid) for nid in layer_nodes)
        gaps = (len(layer_nodes) - 1) * config.nodesep if len(layer_nodes) > 1 else 0
        layer_widths.append(w_sum + gaps)

    center_col = max(layer_widths, default=0.0) / 2

    centers: dict[str, Point] = {}
    layer_of: dict[str, int] = {}
    for layer_idx, layer_nodes in enumerate(ordering):
        cy = layer_idx * (config.node_height + config.ranksep) + config.node_height / 2
        x = center_col - layer_widths[layer_idx] / 2
        for node_id in layer_nodes:
            w = node_width(node_id)
            centers[node_id] = Point(x + w / 2, cy)
            layer_of[node_id] = layer_idx
            x += w + config.nodesep

    # Barycenter refinement: nudge whole layers toward their neighbours.
    def align(layer_idx: int, neighbor_layer: int, incoming: bool) -> None:
        sum_own = 0.0
        sum_other = 0.0
        count = 0
        for node_id in ordering[layer_idx]:
            neighbors = aug.graph.predecessors(node_id) if incoming else aug.graph.successors(node_id)
            for nb in neighbors:
                if nb.startswith(DUMMY_PREFIX) or layer_of.get(nb) != neighbor_layer:
                    continue
                sum_own += centers[node_id].x
                sum_other += centers[nb].x
                count += 1
        if count == 0:
            return
        shift = (sum_other - sum_own) / count
        if abs(shift) > config.nodesep:
            return
        for node_id in ordering[layer_idx]:
            centers[node_id].x += shift

    for layer_idx in range(1, len(ordering)):
        align(layer_idx, layer_idx - 1, incoming=True)
    for layer_idx in range(len(ordering) - 2, -1, -1):
        align(layer_idx, layer_idx + 1, incoming=False)

    return centers


def centers_to_corners(centers: dict[str, Point], aug: AugmentedGraph, config: LayoutConfig) -> dict[str, Point]:
    """Convert real-node centers to top-left corners, leftmost box at x = 0."""
    corners: dict[str, Point] = {
        node_id: Point(c.x - config.node_width / 2, c.y - config.node_height / 2)
        for node_id, c in centers.items()
        if not aug.graph.nodes[node_id].get("dummy")
    }
    if corners:
        min_x = min(p.x for p in corners.values())
        if min_x:
            for p in corners.values():
                p.x -= min_x
    return corners


# ─── SugiyamaLayering Engine ─────────────────────────────────────────────────


class SugiyamaLayering:
    """Sugiyama layered layout for spine nodes."""

    def layer_dag(self, spine: nx.DiGraph, config: LayoutConfig) -> RankedLayout:
        if spine.number_of_nodes() == 0:
            return RankedLayout()

        dag = spine
        cycle = find_spine_cycle(spine)
        if cycle is not None:
            if config.on_cycle == "raise":
                raise CyclicSpineError(cycle)
            dag, reversed_edges = remove_cycles(spine)
            logger.warning(
                "spine cycle %s broken by reversing %d edge(s)", " -> ".join(cycle), len(reversed_edges)
            )

        la = LayerAssignment.assign(dag)
        aug = insert_dummy_nodes(dag, la)
        ordering = minimise_crossings(aug)
        centers = assign_coordinates(ordering, aug, config)
        positions = centers_to_corners(centers, aug, config)

        logger.debug(
            "ranked %d spine node(s) into %d layer(s) with %d dummy chain(s)",
            len(positions),
            la.layer_count,
            len(aug.dummy_edges),
        )
        return RankedLayout(positions=positions, ranks={n: la.layers[n] for n in dag.nodes})
