"""Configuration loader: builds and wires agents from a text configuration."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from ..config import DEFAULT_QUEUE_CAPACITY, PathLike
from ..errors import ConfigurationError
from ..logging_config import get_logger
from ..topics import ITopicRegistry
from .agents.base import IAgent
from .factories import AgentFactories
from .parallel import ParallelAgent

logger = get_logger(__name__)


@dataclass
class AgentSpec:
    """One 3-line record of a configuration file."""

    identifier: str
    subs: list[str] = field(default_factory=list)
    pubs: list[str] = field(default_factory=list)
    line: int = 1  # 1-based line of the identifier


def _parse_topics(raw: str, line: int) -> list[str]:
    raw = raw.strip()
    if not raw:
        return []

    names = [name.strip() for name in raw.split(",")]
    if any(not name for name in names):
        raise ConfigurationError(f"Empty topic name in {raw!r}", line=line)
    return names


def parse_config(text: str) -> list[AgentSpec]:
    """Parse configuration text into agent records.

    Every record is three lines: agent identifier, comma-separated input
    topics, comma-separated output topics. An empty line is an empty list.
    """
    lines = text.splitlines()
    if len(lines) % 3 != 0:
        raise ConfigurationError(
            f"Invalid configuration: {len(lines)} lines is not a multiple of 3"
        )

    records = []
    for i in range(0, len(lines), 3):
        identifier = lines[i].strip()
        if not identifier:
            raise ConfigurationError("Missing agent identifier", line=i + 1)
        records.append(
            AgentSpec(
                identifier=identifier,
                subs=_parse_topics(lines[i + 1], i + 2),
                pubs=_parse_topics(lines[i + 2], i + 3),
                line=i + 1,
            )
        )
    return records


class IConfigLoader(Protocol):
    """Owns the agents of one loaded configuration."""

    async def create(self) -> None:
        """Read the file, build, wrap, start and wire every agent."""
        ...

    async def close(self) -> None:
        """Close every agent, then clear the topic registry."""
        ...


class ConfigLoader:
    """Loads a configuration file into a running set of ParallelAgents."""

    def __init__(
        self,
        path: PathLike,
        registry: ITopicRegistry,
        factories: AgentFactories,
        capacity: int = DEFAULT_QUEUE_CAPACITY,
    ):
        self._path = Path(path)
        self._registry = registry
        self._factories = factories
        self._capacity = capacity
        self._agents: list[IAgent] = []
        self._parallel_agents: list[ParallelAgent] = []
        self._created = False

    @property
    def path(self) -> Path:
        return self._path

    @property
    def agents(self) -> list[IAgent]:
        """The wrapped agents, in configuration order."""
        return list(self._agents)

    @property
    def parallel_agents(self) -> list[ParallelAgent]:
        return list(self._parallel_agents)

    async def create(self) -> None:
        """Read the file, build, wrap, start and wire every agent.

        On failure everything built so far is torn down before the
        ConfigurationError propagates.
        """
        if self._created:
            raise RuntimeError(f"Configuration {self._path} already created")
        self._created = True

        try:
            try:
                text = self._path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise ConfigurationError(
                    f"Cannot read configuration {self._path}: {e}"
                ) from e

            for record in parse_config(text):
                try:
                    agent = self._factories.create(record.identifier, record.subs, record.pubs)
                except ConfigurationError as e:
                    raise ConfigurationError(str(e), line=record.line) from e

                parallel = ParallelAgent(agent, self._capacity)
                self._agents.append(agent)
                self._parallel_agents.append(parallel)
                await parallel.start()
                parallel.wire(self._registry)
        except ConfigurationError:
            logger.error("Failed to load configuration %s", self._path)
            await self.close()
            raise

        logger.info(
            "Loaded configuration %s: %s agents",
            self._path,
            len(self._parallel_agents),
        )

    async def close(self) -> None:
        """Close every agent, then clear the topic registry."""
        for parallel in self._parallel_agents:
            await parallel.close()

        closed = len(self._parallel_agents)
        self._parallel_agents.clear()
        self._agents.clear()
        self._registry.clear()
        if closed:
            logger.info("Closed configuration %s: %s agents", self._path, closed)
