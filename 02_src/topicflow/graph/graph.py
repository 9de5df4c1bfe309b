"""Directed topic/agent graph with cycle detection."""

from enum import Enum
from typing import Any, Iterator

from ..models import Vertex, VertexKind


class _Color(Enum):
    WHITE = 0  # unvisited
    GRAY = 1  # on the DFS stack
    BLACK = 2  # done


class Graph:
    """Ordered collection of vertices.

    Built by GraphBuilder from a registry: edges run topic -> subscriber
    and publisher -> topic, so a cycle is a feedback loop in the dataflow.
    """

    def __init__(self):
        self._vertices: list[Vertex] = []

    def add(self, vertex: Vertex) -> Vertex:
        self._vertices.append(vertex)
        return vertex

    def __len__(self) -> int:
        return len(self._vertices)

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self._vertices)

    @property
    def vertices(self) -> list[Vertex]:
        return list(self._vertices)

    @property
    def topics(self) -> list[Vertex]:
        return [v for v in self._vertices if v.kind is VertexKind.TOPIC]

    @property
    def agents(self) -> list[Vertex]:
        return [v for v in self._vertices if v.kind is VertexKind.AGENT]

    @property
    def edge_count(self) -> int:
        return sum(len(v.edges) for v in self._vertices)

    def find_cycle(self) -> list[Vertex] | None:
        """Return the vertices of the first cycle found, or None.

        Iterative three-color DFS started from every unvisited vertex in
        insertion order, O(V + E). The returned path starts and ends with
        the same vertex.
        """
        color = {id(v): _Color.WHITE for v in self._vertices}

        for root in self._vertices:
            if color[id(root)] is not _Color.WHITE:
                continue

            color[id(root)] = _Color.GRAY
            path = [root]
            stack = [iter(root.edges)]
            while stack:
                for neighbor in stack[-1]:
                    state = color.get(id(neighbor), _Color.WHITE)
                    if state is _Color.GRAY:
                        start = next(i for i, v in enumerate(path) if v is neighbor)
                        return path[start:] + [neighbor]
                    if state is _Color.WHITE:
                        color[id(neighbor)] = _Color.GRAY
                        path.append(neighbor)
                        stack.append(iter(neighbor.edges))
                        break
                else:
                    color[id(path.pop())] = _Color.BLACK
                    stack.pop()

        return None

    def has_cycle(self) -> bool:
        """True when the graph contains a directed cycle."""
        return self.find_cycle() is not None

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready rendering: vertices, edges and the cycle flag."""
        index = {id(v): i for i, v in enumerate(self._vertices)}
        vertices = []
        for v in self._vertices:
            entry: dict[str, Any] = {
                "id": index[id(v)],
                "kind": v.kind.value,
                "name": v.name,
                "label": v.label,
            }
            if v.kind is VertexKind.TOPIC:
                entry["value"] = v.message.text if v.message is not None else None
            vertices.append(entry)

        edges = [
            {"source": index[id(v)], "target": index[id(target)]}
            for v in self._vertices
            for target in v.edges
            if id(target) in index
        ]
        return {"vertices": vertices, "edges": edges, "has_cycle": self.has_cycle()}
