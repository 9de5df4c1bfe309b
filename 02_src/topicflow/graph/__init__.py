"""Graph module."""

from .builder import GraphBuilder, build_from_registry
from .graph import Graph

__all__ = ["Graph", "GraphBuilder", "build_from_registry"]
