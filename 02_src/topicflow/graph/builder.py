"""GraphBuilder: derives the topic/agent graph from a topic registry."""

from ..logging_config import get_logger
from ..models import Vertex, VertexKind
from ..topics import ITopicRegistry
from .graph import Graph

logger = get_logger(__name__)


class GraphBuilder:
    """Materializes a fresh graph from the registry's current state.

    Topics without subscribers or publishers are skipped. Agents are keyed by
    identity, so two agents sharing a name still get separate vertices; the
    first occurrence of an agent creates its vertex. Iteration follows the
    registry's creation order and each topic's membership order.
    """

    def __init__(self, registry: ITopicRegistry):
        self._registry = registry

    def build(self) -> Graph:
        graph = Graph()
        topic_vertices: dict[str, Vertex] = {}
        agent_vertices: dict[int, Vertex] = {}

        def agent_vertex(agent) -> Vertex:
            vertex = agent_vertices.get(id(agent))
            if vertex is None:
                vertex = graph.add(Vertex(VertexKind.AGENT, agent.name))
                agent_vertices[id(agent)] = vertex
            return vertex

        topics = self._registry.topics()

        # Phase 1: topic vertices and topic -> subscriber edges
        for topic in topics:
            subscribers = topic.subscribers
            if not subscribers and not topic.publishers:
                continue

            topic_vertex = graph.add(
                Vertex(VertexKind.TOPIC, topic.name, message=topic.last_message)
            )
            topic_vertices[topic.name] = topic_vertex
            for agent in subscribers:
                topic_vertex.add_edge(agent_vertex(agent))

        # Phase 2: publisher -> topic edges
        for topic in topics:
            topic_vertex = topic_vertices.get(topic.name)
            if topic_vertex is None:
                continue
            for agent in topic.publishers:
                agent_vertex(agent).add_edge(topic_vertex)

        logger.debug(
            "Built graph: %s vertices, %s edges", len(graph), graph.edge_count
        )
        return graph


def build_from_registry(registry: ITopicRegistry) -> Graph:
    """Build the graph of the registry's current wiring."""
    return GraphBuilder(registry).build()
