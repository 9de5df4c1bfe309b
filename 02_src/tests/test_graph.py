"""Tests for Graph and GraphBuilder."""

import pytest

from conftest import RecordingAgent
from topicflow.graph import Graph, GraphBuilder, build_from_registry
from topicflow.models import Message, Vertex, VertexKind


def wire(registry, name, subs=(), pubs=()):
    agent = RecordingAgent(name, subs, pubs)
    agent.wire(registry)
    return agent


class TestVertex:
    """Tests for Vertex."""

    def test_labels(self):
        """Test that labels carry the kind prefix."""
        assert Vertex(VertexKind.TOPIC, "A").label == "TA"
        assert Vertex(VertexKind.AGENT, "Inc").label == "AInc"


class TestGraphBuilder:
    """Tests for GraphBuilder."""

    def test_empty_registry(self, registry):
        """Test that an empty registry gives an empty graph."""
        graph = GraphBuilder(registry).build()

        assert len(graph) == 0
        assert not graph.has_cycle()

    def test_skips_unused_topics(self, registry):
        """Test that topics without members get no vertex."""
        registry.get_topic("lonely")
        wire(registry, "agent", subs=["A"])

        graph = build_from_registry(registry)

        assert [v.name for v in graph.topics] == ["A"]

    def test_edges(self, registry):
        """Test topic -> subscriber and publisher -> topic edges."""
        wire(registry, "agent", subs=["A"], pubs=["B"])

        graph = build_from_registry(registry)
        by_label = {v.label: v for v in graph}

        assert by_label["TA"].edges == [by_label["Aagent"]]
        assert by_label["Aagent"].edges == [by_label["TB"]]
        assert by_label["TB"].edges == []
        assert graph.edge_count == 2

    def test_agent_shared_by_topics_has_one_vertex(self, registry):
        """Test that an agent on several topics appears once."""
        wire(registry, "plus", subs=["A", "B"], pubs=["C"])

        graph = build_from_registry(registry)

        assert len(graph.agents) == 1
        assert len(graph.topics) == 3

    def test_same_name_agents_are_distinct(self, registry):
        """Test that agents are keyed by identity, not name."""
        wire(registry, "twin", subs=["A"])
        wire(registry, "twin", subs=["A"])

        assert len(build_from_registry(registry).agents) == 2

    def test_publisher_only_agent(self, registry):
        """Test that an agent that only publishes still gets a vertex."""
        wire(registry, "source", pubs=["A"])

        graph = build_from_registry(registry)

        assert [v.label for v in graph] == ["TA", "Asource"]

    @pytest.mark.asyncio
    async def test_topic_vertex_carries_last_message(self, registry):
        """Test that topic vertices hold the topic's last message."""
        wire(registry, "agent", pubs=["A"])
        msg = Message.from_number(4.0)
        await registry.get_topic("A").publish(msg)

        graph = build_from_registry(registry)

        assert graph.topics[0].message is msg

    def test_deterministic(self, registry):
        """Test that two builds of the same registry agree."""
        wire(registry, "x", subs=["A", "B"], pubs=["C"])
        wire(registry, "y", subs=["C"], pubs=["D"])

        first = build_from_registry(registry).to_dict()
        second = build_from_registry(registry).to_dict()

        assert first == second


class TestCycleDetection:
    """Tests for Graph.find_cycle() and has_cycle()."""

    def test_feedback_loop(self, registry):
        """Test that A -> agent1 -> B -> agent2 -> A is a cycle."""
        wire(registry, "Agent1", subs=["A"], pubs=["B"])
        wire(registry, "Agent2", subs=["B"], pubs=["A"])

        graph = build_from_registry(registry)
        cycle = graph.find_cycle()

        assert graph.has_cycle()
        assert cycle[0] is cycle[-1]
        assert {v.label for v in cycle} == {"TA", "AAgent1", "TB", "AAgent2"}

    def test_chain_has_no_cycle(self, registry):
        """Test that a pipeline is acyclic."""
        wire(registry, "first", subs=["A"], pubs=["B"])
        wire(registry, "second", subs=["B"], pubs=["C"])

        assert build_from_registry(registry).find_cycle() is None

    def test_diamond_has_no_cycle(self, registry):
        """Test that converging paths are not a cycle."""
        wire(registry, "left", subs=["A"], pubs=["L"])
        wire(registry, "right", subs=["A"], pubs=["R"])
        wire(registry, "join", subs=["L", "R"], pubs=["out"])

        assert not build_from_registry(registry).has_cycle()

    def test_cycle_in_second_component(self, registry):
        """Test that a cycle in a disconnected component is found."""
        wire(registry, "chain", subs=["A"], pubs=["B"])
        wire(registry, "loop1", subs=["X"], pubs=["Y"])
        wire(registry, "loop2", subs=["Y"], pubs=["X"])

        assert build_from_registry(registry).has_cycle()

    def test_self_loop(self, registry):
        """Test that an agent publishing to its own input is a cycle."""
        wire(registry, "echo", subs=["A"], pubs=["A"])

        assert build_from_registry(registry).has_cycle()

    def test_long_chain(self):
        """Test that deep graphs do not hit the recursion limit."""
        graph = Graph()
        previous = graph.add(Vertex(VertexKind.TOPIC, "t0"))
        for i in range(1, 5000):
            vertex = graph.add(Vertex(VertexKind.TOPIC, f"t{i}"))
            previous.add_edge(vertex)
            previous = vertex

        assert not graph.has_cycle()


class TestGraphToDict:
    """Tests for Graph.to_dict()."""

    @pytest.mark.asyncio
    async def test_rendering(self, registry):
        """Test the JSON rendering of vertices and edges."""
        wire(registry, "inc", subs=["A"], pubs=["B"])
        await registry.get_topic("A").publish(Message.from_text("hi"))

        data = build_from_registry(registry).to_dict()

        assert data["has_cycle"] is False
        assert data["vertices"][0] == {
            "id": 0,
            "kind": "topic",
            "name": "A",
            "label": "TA",
            "value": "hi",
        }
        assert data["vertices"][1]["kind"] == "agent"
        assert "value" not in data["vertices"][1]
        assert {"source": 0, "target": 1} in data["edges"]
