"""Output serializers for laid-out roadmaps."""

from roadmap_layout.renderers.reactflow import ReactFlowRenderer

__all__ = ["ReactFlowRenderer"]
