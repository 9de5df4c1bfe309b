"""Core data models for topicflow."""

from .graph import Vertex, VertexKind
from .message import Message, parse_value

__all__ = [
    # Messages
    "Message",
    "parse_value",
    # Graph
    "Vertex",
    "VertexKind",
]
