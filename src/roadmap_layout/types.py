"""Shared type definitions for roadmap-layout.

Enums used across the classifier, layout stages, parsers and renderers.
"""

from __future__ import annotations

from enum import Enum


class NodeKind(Enum):
    SPINE = "spine"  # main vertical chain
    RIB = "rib"  # branch hanging off a spine node

    @classmethod
    def from_flag(cls, is_branch: bool | None) -> NodeKind:
        return cls.RIB if is_branch else cls.SPINE


class Handle(Enum):
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


class LineStyle(Enum):
    SOLID = "solid"
    DASHED = "dashed"
    DOTTED = "dotted"

    @classmethod
    def default(cls) -> LineStyle:
        return cls.DASHED

    @classmethod
    def parse(cls, value: object) -> LineStyle:
        """Map a loose string ('dotted', 'DOTTED') to a LineStyle, defaulting to DASHED."""
        if isinstance(value, LineStyle):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.default()
