"""Application bootstrap and lifecycle management."""

import os
import tempfile
from pathlib import Path
from typing import Protocol

from .config import DEFAULT_QUEUE_CAPACITY, PathLike
from .errors import CycleError
from .graph import Graph, build_from_registry
from .logging_config import get_logger
from .models import Message, parse_value
from .processing import AgentFactories, ConfigLoader, IAgent, default_factories
from .topics import Topic, TopicRegistry

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Create the registry and load the initial configuration, if any."""
        ...

    async def stop(self) -> None:
        """Close the active configuration, then clear the registry."""
        ...

    async def load_configuration(self, path: PathLike) -> Graph:
        """Replace the active configuration with the one at path."""
        ...

    async def load_configuration_bytes(self, content: bytes) -> Graph:
        """Replace the active configuration with uploaded content."""
        ...

    async def publish(self, topic: str, raw: str) -> Message:
        """Publish a raw value on a topic."""
        ...

    async def reset(self) -> None:
        """Full reset: drop the configuration and every topic."""
        ...

    async def reset_topics(self) -> None:
        """Soft reset: reset agents and clear last messages."""
        ...

    def topics(self) -> list[Topic]:
        """Snapshot of the registry."""
        ...

    def graph(self) -> Graph:
        """Graph of the current wiring."""
        ...


class Application:
    """Main application bootstrap."""

    def __init__(
        self,
        queue_capacity: int = DEFAULT_QUEUE_CAPACITY,
        factories: AgentFactories | None = None,
        initial_config: PathLike | None = None,
    ):
        self._queue_capacity = queue_capacity
        self._initial_config = initial_config

        # Components (will be initialized in start())
        self._registry: TopicRegistry | None = None
        self._factories: AgentFactories | None = factories
        self._loader: ConfigLoader | None = None

    async def start(self) -> None:
        """Create the registry and load the initial configuration, if any."""
        logger.info("Starting application")

        # 1. Topic registry (no dependencies)
        self._registry = TopicRegistry()

        # 2. Agent factories (plugins may have registered their own)
        if self._factories is None:
            self._factories = default_factories()
        logger.info("Agent factories: %s", ", ".join(self._factories.identifiers))

        # 3. Initial configuration (depends on both)
        if self._initial_config:
            await self.load_configuration(self._initial_config)

    async def stop(self) -> None:
        """Close the active configuration, then clear the registry."""
        await self._close_loader()
        if self._registry is not None:
            self._registry.clear()
        logger.info("Application stopped")

    async def _close_loader(self) -> None:
        loader, self._loader = self._loader, None
        if loader:
            await loader.close()

    async def load_configuration(self, path: PathLike) -> Graph:
        """Replace the active configuration with the one at path.

        The previous configuration is closed before the new one is created.
        A configuration containing a feedback loop is torn down and rejected
        with CycleError.
        """
        registry = self.registry
        await self._close_loader()

        loader = ConfigLoader(path, registry, self.factories, self._queue_capacity)
        await loader.create()

        graph = build_from_registry(registry)
        cycle = graph.find_cycle()
        if cycle is not None:
            labels = [vertex.label for vertex in cycle]
            logger.warning("Rejecting configuration %s: cycle %s", path, labels)
            await loader.close()
            raise CycleError(labels)

        self._loader = loader
        return graph

    async def load_configuration_bytes(self, content: bytes) -> Graph:
        """Replace the active configuration with uploaded content."""
        with tempfile.NamedTemporaryFile(suffix=".conf", delete=False) as f:
            f.write(content)
            conf_path = f.name

        try:
            return await self.load_configuration(conf_path)
        finally:
            os.unlink(conf_path)

    async def publish(self, topic: str, raw: str) -> Message:
        """Publish raw on topic: a number when it parses as one, else text."""
        message = parse_value(raw)
        logger.info("Publishing %r to %s", message.text, topic)
        await self.registry.get_topic(topic).publish(message)
        return message

    async def reset(self) -> None:
        """Full reset: drop the configuration and every topic."""
        await self._close_loader()
        self.registry.clear()
        logger.info("Reset complete")

    async def reset_topics(self) -> None:
        """Reset every agent reachable from a topic and clear last messages."""
        topics = self.registry.topics()

        agents: dict[int, IAgent] = {}
        for topic in topics:
            for agent in topic.subscribers + topic.publishers:
                agents.setdefault(id(agent), agent)

        for agent in agents.values():
            agent.reset()
        for topic in topics:
            topic.clear_last_message()

        logger.info("Reset %s agents and %s topics", len(agents), len(topics))

    def topics(self) -> list[Topic]:
        """Snapshot of the registry."""
        return self.registry.topics()

    def graph(self) -> Graph:
        """Graph of the current wiring."""
        return build_from_registry(self.registry)

    @property
    def registry(self) -> TopicRegistry:
        """Get topic registry instance."""
        if self._registry is None:
            raise RuntimeError("Application not started")
        return self._registry

    @property
    def factories(self) -> AgentFactories:
        """Get agent factory table."""
        if self._factories is None:
            raise RuntimeError("Application not started")
        return self._factories

    @property
    def loader(self) -> ConfigLoader | None:
        """The active configuration, if one is loaded."""
        return self._loader

    @property
    def config_path(self) -> Path | None:
        return self._loader.path if self._loader else None
