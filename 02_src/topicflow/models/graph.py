"""Graph-related data models."""

from dataclasses import dataclass, field
from enum import Enum

from .message import Message


class VertexKind(str, Enum):
    """The two vertex populations of the topic/agent graph."""

    TOPIC = "topic"
    AGENT = "agent"


@dataclass(eq=False)
class Vertex:
    """A labeled vertex with an ordered list of outgoing edges."""

    kind: VertexKind
    name: str
    edges: list["Vertex"] = field(default_factory=list)
    message: Message | None = None  # topic's last message, for rendering

    @property
    def label(self) -> str:
        """Display label: "T" or "A" followed by the name."""
        prefix = "T" if self.kind is VertexKind.TOPIC else "A"
        return prefix + self.name

    def add_edge(self, target: "Vertex") -> None:
        """Append an outgoing edge."""
        self.edges.append(target)
