"""Tests for Application."""

import pytest

from conftest import CYCLE_CONFIG, PIPELINE_CONFIG, PLUS_INC_CONFIG
from topicflow.app import Application
from topicflow.errors import ConfigurationError, CycleError
from topicflow.processing import IncrementAgent, PlusAgent, default_factories


class TestApplicationStart:
    """Tests for Application.start()."""

    @pytest.mark.asyncio
    async def test_start_initializes_components(self):
        """Test that start creates the registry and factory table."""
        app = Application()
        await app.start()

        assert app.registry is not None
        assert "PlusAgent" in app.factories
        assert app.loader is None
        await app.stop()

    def test_registry_before_start_raises(self):
        """Test that the registry is unavailable before start."""
        with pytest.raises(RuntimeError):
            Application().registry

    @pytest.mark.asyncio
    async def test_start_loads_initial_config(self, write_config, eventually):
        """Test that an initial configuration is loaded on start."""
        factories = default_factories([("pkg.Plus", PlusAgent), ("pkg.Inc", IncrementAgent)])
        app = Application(factories=factories, initial_config=write_config(PLUS_INC_CONFIG))
        await app.start()

        await app.publish("A", "7")
        await app.publish("B", "3")

        def d_value():
            last = app.registry.get_topic("D").last_message
            return last.number if last is not None else None

        assert await eventually(lambda: d_value() == 11.0)
        await app.stop()
        assert app.loader is None


class TestApplicationConfiguration:
    """Tests for loading and replacing configurations."""

    @pytest.mark.asyncio
    async def test_load_returns_graph(self, application, write_config):
        """Test that loading returns the graph of the new wiring."""
        graph = await application.load_configuration(write_config(PIPELINE_CONFIG))

        assert len(graph) == 8
        assert not graph.has_cycle()
        assert application.config_path is not None

    @pytest.mark.asyncio
    async def test_replace_closes_previous(self, application, write_config):
        """Test that a new configuration replaces the old one entirely."""
        await application.load_configuration(write_config(PIPELINE_CONFIG, "first.conf"))
        old_agents = application.loader.parallel_agents

        await application.load_configuration(write_config("IncAgent\nX\nY\n", "second.conf"))

        assert not any(p.running for p in old_agents)
        assert [t.name for t in application.topics()] == ["X", "Y"]

    @pytest.mark.asyncio
    async def test_cycle_rejected(self, application, write_config):
        """Test that a feedback loop is torn down and rejected."""
        with pytest.raises(CycleError) as exc_info:
            await application.load_configuration(write_config(CYCLE_CONFIG))

        assert exc_info.value.path[0] == exc_info.value.path[-1]
        assert application.loader is None
        assert application.topics() == []

    @pytest.mark.asyncio
    async def test_invalid_config_rejected(self, application):
        """Test that uploaded garbage is a configuration error."""
        with pytest.raises(ConfigurationError):
            await application.load_configuration_bytes(b"NoSuchAgent\nA\nB\n")

        assert application.topics() == []

    @pytest.mark.asyncio
    async def test_load_bytes(self, application):
        """Test loading a configuration from uploaded content."""
        graph = await application.load_configuration_bytes(PIPELINE_CONFIG.encode())

        assert len(graph.agents) == 3


class TestApplicationPublish:
    """Tests for Application.publish()."""

    @pytest.mark.asyncio
    async def test_publish_number(self, application):
        """Test that numeric input becomes a numeric message."""
        msg = await application.publish("A", "5")

        assert msg.number == 5.0
        assert application.registry.get_topic("A").last_message is msg

    @pytest.mark.asyncio
    async def test_publish_text(self, application):
        """Test that other input is published as text."""
        msg = await application.publish("A", "hello")

        assert msg.text == "hello"
        assert not msg.is_numeric


class TestApplicationReset:
    """Tests for reset() and reset_topics()."""

    @pytest.mark.asyncio
    async def test_reset_topics(self, application, write_config, eventually):
        """Test that a soft reset clears values and agent state but keeps wiring."""
        await application.load_configuration(write_config(PIPELINE_CONFIG))
        await application.publish("A", "5")
        await application.publish("B", "3")
        r3 = application.registry.get_topic("R3")
        assert await eventually(lambda: r3.last_message is not None)

        await application.reset_topics()

        assert all(t.last_message is None for t in application.topics())
        for agent in application.loader.agents:
            assert (agent.left, agent.right) == (0.0, 0.0)
        assert len(application.graph()) == 8

    @pytest.mark.asyncio
    async def test_reset(self, application, write_config):
        """Test that a full reset drops the configuration and every topic."""
        await application.load_configuration(write_config(PIPELINE_CONFIG))

        await application.reset()

        assert application.loader is None
        assert application.topics() == []
        assert len(application.graph()) == 0
