"""Intermediate representation: the classified roadmap graph."""

from roadmap_layout.ir.graph import RoadmapGraph

__all__ = ["RoadmapGraph"]
