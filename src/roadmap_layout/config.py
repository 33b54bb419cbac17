"""Centralized configuration for roadmap-layout."""

from __future__ import annotations

from dataclasses import dataclass

from roadmap_layout.errors import ConfigurationError

CYCLE_POLICIES = ("raise", "break")


@dataclass
class LayoutConfig:
    """Tunable constants for every layout stage.

    All nodes share one box size; the extent and collision math relies on it.
    """

    node_width: float = 300
    node_height: float = 150
    nodesep: float = 80
    ranksep: float = 150
    h_spacing: float = 150
    v_spacing: float = 80
    min_gap: float = 60
    padding: float = 30
    max_passes: int = 5
    on_cycle: str = "raise"

    def validate(self) -> LayoutConfig:
        if self.node_width <= 0 or self.node_height <= 0:
            raise ConfigurationError(
                f"node size must be positive, got {self.node_width}x{self.node_height}"
            )
        for name in ("nodesep", "ranksep", "h_spacing", "v_spacing", "min_gap", "padding"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must not be negative, got {getattr(self, name)}")
        if self.max_passes < 0:
            raise ConfigurationError(f"max_passes must not be negative, got {self.max_passes}")
        if self.on_cycle not in CYCLE_POLICIES:
            raise ConfigurationError(f"Unknown cycle policy '{self.on_cycle}'; use raise or break")
        return self

    @property
    def row_pitch(self) -> float:
        """Vertical distance between stacked siblings on one side of a parent."""
        return self.node_height + self.v_spacing
