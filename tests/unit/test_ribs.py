"""Tests for layout/ribs.py - extents, spine compaction and rib placement."""

from __future__ import annotations

from roadmap_layout.config import LayoutConfig
from roadmap_layout.errors import OrphanRibWarning
from roadmap_layout.ir.graph import RoadmapGraph
from roadmap_layout.layout.ribs import (
    compact_spine,
    compute_extents,
    place_ribs,
    reserved_span,
    side_counts,
    stack_height,
)
from roadmap_layout.layout.types import LayoutEdge, LayoutNode, ParentExtent

CONFIG = LayoutConfig()

# ─── Helpers ──────────────────────────────────────────────────────────────────


def make_star(parent: str, child_count: int, at: tuple[float, float] = (0.0, 0.0)) -> RoadmapGraph:
    """One spine node with ``child_count`` ribs named c0, c1, ..."""
    nodes = [LayoutNode(parent, x=at[0], y=at[1])]
    nodes += [LayoutNode(f"c{i}", is_branch=True) for i in range(child_count)]
    edges = [LayoutEdge(f"e{i}", parent, f"c{i}") for i in range(child_count)]
    return RoadmapGraph.classify(nodes, edges)


def positions(graph: RoadmapGraph) -> dict[str, tuple[float, float]]:
    return {n.id: (n.x, n.y) for n in graph.nodes}


# ─── Extents ──────────────────────────────────────────────────────────────────


class TestExtents:
    def test_side_counts(self):
        assert side_counts(0) == (0, 0)
        assert side_counts(3) == (2, 1)
        assert side_counts(4) == (2, 2)

    def test_stack_height(self):
        assert stack_height(0, CONFIG) == 0
        assert stack_height(1, CONFIG) == 0
        assert stack_height(2, CONFIG) == 0
        assert stack_height(3, CONFIG) == 230
        assert stack_height(5, CONFIG) == 460

    def test_childless_extent_is_empty(self):
        assert compute_extents(make_star("P", 0), CONFIG) == {"P": ParentExtent(0.0, 0.0, 0)}

    def test_single_row_extent(self):
        assert compute_extents(make_star("P", 2), CONFIG)["P"] == ParentExtent(-75.0, 75.0, 2)

    def test_two_row_extent(self):
        assert compute_extents(make_star("P", 4), CONFIG)["P"] == ParentExtent(-190.0, 190.0, 4)


# ─── Spine Compaction ─────────────────────────────────────────────────────────


class TestCompactSpine:
    def test_reserved_span(self):
        ribbed, empty = ParentExtent(-190, 190, 4), ParentExtent.empty()
        assert reserved_span(ribbed, empty, CONFIG) == (-190, 190)
        assert reserved_span(empty, ribbed, CONFIG) == (-75, 75)
        assert reserved_span(empty, empty, CONFIG) == (0, 0)

    def test_no_push_when_clear(self):
        a, b = LayoutNode("A", y=0), LayoutNode("B", y=400)
        extents = {"A": ParentExtent(-190, 190, 4), "B": ParentExtent.empty()}
        assert compact_spine([a, b], extents, CONFIG) == 0
        assert b.y == 400

    def test_push_carries_to_later_nodes(self):
        a, b, c = LayoutNode("A", y=0), LayoutNode("B", y=300), LayoutNode("C", y=600)
        extents = {"A": ParentExtent(-190, 190, 4), "B": ParentExtent(-190, 190, 4), "C": ParentExtent.empty()}
        pushed = compact_spine([a, b, c], extents, CONFIG)
        assert pushed == 165
        assert (a.y, b.y, c.y) == (0, 440, 765)

    def test_childless_node_keeps_its_box_below_ribs(self):
        a, b = LayoutNode("A", y=0), LayoutNode("B", y=300)
        extents = {"A": ParentExtent(-190, 190, 4), "B": ParentExtent.empty()}
        assert compact_spine([a, b], extents, CONFIG) == 25
        # lowest rib of A starts at 115; B sits a padded box height below it
        assert b.y - 115 >= CONFIG.node_height + CONFIG.padding

    def test_childless_node_keeps_its_box_above_ribs(self):
        a, b = LayoutNode("A", x=0, y=0), LayoutNode("B", x=380, y=0)
        extents = {"A": ParentExtent.empty(), "B": ParentExtent(-190, 190, 4)}
        compact_spine([a, b], extents, CONFIG)
        assert b.y == 325

    def test_childless_neighbours_only_keep_min_gap(self):
        a, b = LayoutNode("A", x=0, y=0), LayoutNode("B", x=380, y=0)
        extents = {"A": ParentExtent.empty(), "B": ParentExtent.empty()}
        compact_spine([a, b], extents, CONFIG)
        assert b.y == 60

    def test_order_follows_y_not_list(self):
        low, high = LayoutNode("low", y=300), LayoutNode("high", y=0)
        extents = {"low": ParentExtent(-75, 75, 1), "high": ParentExtent(-75, 75, 1)}
        compact_spine([low, high], extents, CONFIG)
        assert high.y == 0
        assert low.y == 300

    def test_same_rank_nodes_separated(self):
        a, b = LayoutNode("A", x=0, y=0), LayoutNode("B", x=380, y=0)
        extents = {"A": ParentExtent(-75, 75, 1), "B": ParentExtent(-75, 75, 1)}
        compact_spine([a, b], extents, CONFIG)
        assert a.y == 0
        assert b.y == 210


# ─── Rib Placement ────────────────────────────────────────────────────────────


class TestPlaceRibs:
    def test_four_children_alternate(self):
        g = make_star("root", 4)
        assert place_ribs(g, CONFIG) == []
        assert positions(g) == {
            "root": (0, 0),
            "c0": (450, -115),
            "c1": (-450, -115),
            "c2": (450, 115),
            "c3": (-450, 115),
        }

    def test_three_children_centred_on_taller_side(self):
        g = make_star("root", 3, at=(100, 500))
        place_ribs(g, CONFIG)
        assert positions(g)["c0"] == (550, 385)
        assert positions(g)["c1"] == (-350, 385)
        assert positions(g)["c2"] == (550, 615)

    def test_single_child_level_with_parent(self):
        g = make_star("root", 1, at=(0, 40))
        place_ribs(g, CONFIG)
        assert positions(g)["c0"] == (450, 40)

    def test_orphan_goes_to_origin(self):
        nodes = [LayoutNode("root", x=0, y=600), LayoutNode("lost", is_branch=True, x=77, y=77)]
        g = RoadmapGraph.classify(nodes, [])
        warnings = place_ribs(g, CONFIG)
        assert positions(g)["lost"] == (0, 0)
        assert len(warnings) == 1
        assert isinstance(warnings[0], OrphanRibWarning)
        assert warnings[0].node_id == "lost"
