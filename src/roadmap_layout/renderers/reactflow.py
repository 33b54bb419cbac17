"""Serialize a layout as React Flow style node/edge JSON.

Key order is fixed, so identical layouts serialize to identical bytes.
"""

from __future__ import annotations

import json
from typing import Any

from roadmap_layout.layout.types import LayoutEdge, LayoutNode, LayoutResult


def _number(value: float) -> float | int:
    return int(value) if float(value).is_integer() else round(value, 3)


def node_to_dict(node: LayoutNode) -> dict[str, Any]:
    out: dict[str, Any] = {
        "id": node.id,
        "type": "custom",
        "position": {"x": _number(node.x), "y": _number(node.y)},
    }
    if node.width is not None and node.height is not None:
        out["width"] = _number(node.width)
        out["height"] = _number(node.height)
    out["data"] = {**node.data, "isBranch": node.is_branch}
    return out


def edge_to_dict(edge: LayoutEdge) -> dict[str, Any]:
    out: dict[str, Any] = {"id": edge.id, "source": edge.source, "target": edge.target}
    if edge.source_handle is not None:
        out["sourceHandle"] = edge.source_handle.value
    if edge.target_handle is not None:
        out["targetHandle"] = edge.target_handle.value
    out["data"] = {**edge.data, "lineStyle": edge.line_style.value, "hasArrow": edge.has_arrow}
    return out


class ReactFlowRenderer:
    """JSON renderer for canvas front-ends."""

    def __init__(self, indent: int | None = 2, include_diagnostics: bool = True) -> None:
        self.indent = indent
        self.include_diagnostics = include_diagnostics

    def to_dict(self, result: LayoutResult) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "nodes": [node_to_dict(n) for n in result.nodes],
            "edges": [edge_to_dict(e) for e in result.edges],
        }
        if self.include_diagnostics:
            doc["diagnostics"] = [d.to_dict() for d in result.diagnostics]
        return doc

    def render(self, result: LayoutResult) -> str:
        return json.dumps(self.to_dict(result), indent=self.indent, ensure_ascii=False) + "\n"
