"""Tests for layout/collisions.py - pairwise overlap repair."""

from __future__ import annotations

from roadmap_layout.config import LayoutConfig
from roadmap_layout.errors import ResidualCollisionWarning
from roadmap_layout.layout.collisions import collides, find_collisions, resolve_collisions, separate
from roadmap_layout.layout.types import LayoutNode

CONFIG = LayoutConfig()


def make_node(node_id: str, x: float, y: float) -> LayoutNode:
    return LayoutNode(node_id, x=x, y=y)


# ─── Detection ────────────────────────────────────────────────────────────────


class TestCollides:
    def test_overlapping(self):
        assert collides(make_node("a", 0, 0), make_node("b", 100, 0), CONFIG)

    def test_touching_padded_edge_is_clear(self):
        assert not collides(make_node("a", 0, 0), make_node("b", 330, 0), CONFIG)
        assert not collides(make_node("a", 0, 0), make_node("b", 0, 180), CONFIG)

    def test_find_collisions_lists_pairs_in_order(self):
        nodes = [make_node("a", 0, 0), make_node("b", 1000, 0), make_node("c", 10, 10)]
        assert find_collisions(nodes, CONFIG) == [("a", "c")]


# ─── Separation ───────────────────────────────────────────────────────────────


class TestSeparate:
    def test_vertical_when_cheaper(self):
        a, b = make_node("a", 0, 0), make_node("b", 100, 50)
        separate(a, b, CONFIG)
        assert (b.x, b.y) == (100, 145)
        assert (a.x, a.y) == (0, 0)

    def test_horizontal_when_cheaper(self):
        a, b = make_node("a", 0, 0), make_node("b", 300, 0)
        separate(a, b, CONFIG)
        assert b.x == 345

    def test_direction_follows_relative_position(self):
        a, b = make_node("a", 0, 0), make_node("b", -300, 0)
        separate(a, b, CONFIG)
        assert b.x == -345

    def test_coincident_nodes_pushed_up(self):
        a, b = make_node("a", 0, 0), make_node("b", 0, 0)
        separate(a, b, CONFIG)
        assert b.y == -120


# ─── Resolution Passes ────────────────────────────────────────────────────────


class TestResolveCollisions:
    def test_no_collision_is_noop(self):
        nodes = [make_node("a", 0, 0), make_node("b", 500, 0)]
        assert resolve_collisions(nodes, CONFIG) == []
        assert (nodes[1].x, nodes[1].y) == (500, 0)

    def test_coincident_pair_resolved_in_two_passes(self):
        nodes = [make_node("a", 0, 0), make_node("b", 0, 0)]
        assert resolve_collisions(nodes, CONFIG) == []
        assert (nodes[1].x, nodes[1].y) == (0, -180)
        assert (nodes[0].x, nodes[0].y) == (0, 0)

    def test_residual_reported_after_pass_limit(self):
        nodes = [make_node("a", 0, 0), make_node("b", 0, 0)]
        warnings = resolve_collisions(nodes, LayoutConfig(max_passes=1))
        assert len(warnings) == 1
        assert isinstance(warnings[0], ResidualCollisionWarning)
        assert warnings[0].pairs == [("a", "b")]
        assert warnings[0].passes == 1

    def test_zero_passes_only_reports(self):
        nodes = [make_node("a", 0, 0), make_node("b", 0, 0)]
        warnings = resolve_collisions(nodes, LayoutConfig(max_passes=0))
        assert warnings[0].passes == 0
        assert (nodes[1].x, nodes[1].y) == (0, 0)

    def test_pinned_node_never_moves(self):
        nodes = [make_node("spine", 0, 0), make_node("orphan", 0, 0)]
        assert resolve_collisions(nodes, CONFIG, pinned={"orphan"}) == []
        assert (nodes[1].x, nodes[1].y) == (0, 0)
        assert (nodes[0].x, nodes[0].y) == (0, -180)

    def test_two_pinned_nodes_reported(self):
        nodes = [make_node("o1", 0, 0), make_node("o2", 0, 0)]
        warnings = resolve_collisions(nodes, CONFIG, pinned={"o1", "o2"})
        assert warnings[0].pairs == [("o1", "o2")]
        assert warnings[0].passes == 1
