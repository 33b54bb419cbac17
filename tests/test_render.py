"""Tests for renderers/reactflow.py and the layout_json convenience."""

from __future__ import annotations

import json

from roadmap_layout import LayoutEdge, LayoutNode, RoadmapLayout, layout_json
from roadmap_layout.renderers.reactflow import ReactFlowRenderer, edge_to_dict, node_to_dict
from roadmap_layout.types import Handle, LineStyle


class TestReactFlowRenderer:
    def test_node_dict(self):
        node = LayoutNode("a", is_branch=True, x=450.0, y=-115.0, data={"label": "A"})
        assert node_to_dict(node) == {
            "id": "a",
            "type": "custom",
            "position": {"x": 450, "y": -115},
            "data": {"label": "A", "isBranch": True},
        }

    def test_node_size_serialized_when_set(self):
        node = LayoutNode("a", width=300, height=150)
        doc = node_to_dict(node)
        assert (doc["width"], doc["height"]) == (300, 150)
        assert list(doc) == ["id", "type", "position", "width", "height", "data"]

    def test_fractional_positions_rounded(self):
        node = LayoutNode("a", x=1 / 3)
        assert node_to_dict(node)["position"]["x"] == 0.333

    def test_edge_dict(self):
        edge = LayoutEdge(
            "e", "a", "b", source_handle=Handle.RIGHT, target_handle=Handle.LEFT, line_style=LineStyle.DOTTED
        )
        assert edge_to_dict(edge) == {
            "id": "e",
            "source": "a",
            "target": "b",
            "sourceHandle": "right",
            "targetHandle": "left",
            "data": {"lineStyle": "dotted", "hasArrow": True},
        }

    def test_unrouted_edge_has_no_handles(self):
        assert "sourceHandle" not in edge_to_dict(LayoutEdge("e", "a", "b"))

    def test_diagnostics_serialized(self):
        result = RoadmapLayout().run([LayoutNode("a")], [LayoutEdge("e", "a", "ghost")])
        doc = json.loads(ReactFlowRenderer().render(result))
        assert doc["diagnostics"][0]["kind"] == "DanglingEdgeWarning"

    def test_diagnostics_optional(self):
        result = RoadmapLayout().run([LayoutNode("a")], [])
        assert "diagnostics" not in ReactFlowRenderer(include_diagnostics=False).to_dict(result)


class TestLayoutJson:
    def test_end_to_end(self):
        src = """```json
{"nodes": [{"id": "root", "data": {"label": "Start"}},
           {"id": "side", "data": {"label": "Aside", "isSubNode": true}},
           {"id": "next", "data": {"label": "Next"}}],
 "edges": [{"source": "root", "target": "side"}, {"source": "root", "target": "next"}]}
```"""
        doc = json.loads(layout_json(src))
        nodes = {n["id"]: n for n in doc["nodes"]}
        edges = {e["target"]: e for e in doc["edges"]}

        assert nodes["root"]["position"] == {"x": 0, "y": 0}
        assert nodes["side"]["position"] == {"x": 450, "y": 0}
        assert (nodes["side"]["width"], nodes["side"]["height"]) == (300, 150)
        assert nodes["next"]["position"]["y"] > 0
        assert edges["side"]["data"]["lineStyle"] == "dotted"
        assert edges["next"]["sourceHandle"] == "bottom"
        assert doc["diagnostics"] == []

    def test_input_data_passes_through(self):
        src = (
            '{"nodes": [{"id": "a", "data": {"label": "A", "icon": "book"}}, {"id": "b", "data": {"label": "B"}}],'
            ' "edges": [{"source": "a", "target": "b", "data": {"weight": 2}}]}'
        )
        doc = json.loads(layout_json(src))
        assert doc["nodes"][0]["data"] == {"icon": "book", "label": "A", "description": "", "isBranch": False}
        assert doc["edges"][0]["data"] == {"weight": 2, "lineStyle": "dashed", "hasArrow": True}
