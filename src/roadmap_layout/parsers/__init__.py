"""Parser registry: pick the content-source parser for a payload."""

from __future__ import annotations

from roadmap_layout.errors import ParseError
from roadmap_layout.layout.types import LayoutEdge, LayoutNode
from roadmap_layout.parsers.roadmap_json import RoadmapJsonParser, strip_code_fences


def detect_type(src: str) -> str:
    """Detect the payload format from source text. Returns 'json' etc."""
    stripped = strip_code_fences(src)
    if stripped.startswith(("{", "[")):
        return "json"
    # Future: outline / markdown roadmaps.
    return "unknown"


_PARSERS = {
    "json": RoadmapJsonParser,
}


def parse(src: str) -> tuple[list[LayoutNode], list[LayoutEdge]]:
    """Auto-detect payload format and parse to unpositioned nodes and edges."""
    if not src.strip():
        raise ParseError("please provide a roadmap description")
    payload_type = detect_type(src)
    parser_cls = _PARSERS.get(payload_type)
    if parser_cls is None:
        raise ParseError(f"Unsupported payload type: {payload_type}")
    return parser_cls().parse(src)


__all__ = ["RoadmapJsonParser", "detect_type", "parse", "strip_code_fences"]
