"""Parser for the JSON roadmap payload produced by the content generator.

The generator answers with ``{"nodes": [...], "edges": [...]}``, sometimes
wrapped in a Markdown code fence. Nodes carry ``data.label``,
``data.description`` and a branch flag; edges carry ``source``, ``target``
and optionally ``data.lineStyle``. Missing ids are filled in by position; any
other ``data`` keys are kept as they are.
"""

from __future__ import annotations

import json
import re
from typing import Any

from roadmap_layout.errors import ParseError
from roadmap_layout.layout.types import LayoutEdge, LayoutNode
from roadmap_layout.types import LineStyle

_FENCE_RE = re.compile(r"```(?:json)?\n?")

# Keys the generator has used for the branch flag, in lookup order.
_BRANCH_KEYS = ("isBranch", "isSubNode")

# Edge keys owned by the router; the renderer writes them back.
_EDGE_STYLE_KEYS = ("lineStyle", "hasArrow")


def strip_code_fences(src: str) -> str:
    return _FENCE_RE.sub("", src).strip()


def _branch_flag(raw: dict[str, Any]) -> bool:
    data = raw.get("data") or {}
    for key in _BRANCH_KEYS:
        if key in raw:
            return bool(raw[key])
        if key in data:
            return bool(data[key])
    return False


def _node_from_json(raw: Any, index: int) -> LayoutNode:
    if not isinstance(raw, dict):
        raise ParseError(f"node #{index} is not an object")
    data = raw.get("data") or {}
    if not isinstance(data, dict):
        raise ParseError(f"node #{index} has a non-object 'data' field")
    extra = {k: v for k, v in data.items() if k not in _BRANCH_KEYS}
    return LayoutNode(
        id=str(raw.get("id") or f"ai-node-{index}"),
        is_branch=_branch_flag(raw),
        data={
            **extra,
            "label": data.get("label") or "Untitled",
            "description": data.get("description") or "",
        },
    )


def _edge_from_json(raw: Any, index: int) -> LayoutEdge:
    if not isinstance(raw, dict):
        raise ParseError(f"edge #{index} is not an object")
    source = raw.get("source")
    target = raw.get("target")
    if not source or not target:
        raise ParseError(f"edge #{index} needs both 'source' and 'target'")
    data = raw.get("data") or {}
    if not isinstance(data, dict):
        raise ParseError(f"edge #{index} has a non-object 'data' field")
    return LayoutEdge(
        id=str(raw.get("id") or f"ai-edge-{index}"),
        source=str(source),
        target=str(target),
        line_style=LineStyle.parse(data.get("lineStyle")),
        has_arrow=True,
        data={k: v for k, v in data.items() if k not in _EDGE_STYLE_KEYS},
    )


class RoadmapJsonParser:
    """Sanitize a generator response into unpositioned nodes and edges."""

    def parse(self, src: str) -> tuple[list[LayoutNode], list[LayoutEdge]]:
        try:
            payload = json.loads(strip_code_fences(src))
        except json.JSONDecodeError as e:
            raise ParseError(f"invalid format: {e}") from e

        if not isinstance(payload, dict) or not isinstance(payload.get("nodes"), list):
            raise ParseError("invalid response structure: expected a 'nodes' list")
        raw_edges = payload.get("edges") or []
        if not isinstance(raw_edges, list):
            raise ParseError("invalid response structure: 'edges' must be a list")

        nodes = [_node_from_json(raw, i) for i, raw in enumerate(payload["nodes"])]
        edges = [_edge_from_json(raw, i) for i, raw in enumerate(raw_edges)]
        return nodes, edges
