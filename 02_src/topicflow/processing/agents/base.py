"""Agent contract and the shared base for topic-wired agents."""

import itertools
from typing import Iterator, Protocol, Sequence

from ...logging_config import get_logger
from ...models import Message
from ...topics import ITopicRegistry

logger = get_logger(__name__)


class IAgent(Protocol):
    """A named unit of computation reacting to messages on its topics."""

    @property
    def name(self) -> str:
        """Human label, used as the graph vertex name."""
        ...

    def wire(self, registry: ITopicRegistry, handle: "IAgent | None" = None) -> None:
        """Subscribe / register `handle` (default: self) with the agent's topics."""
        ...

    def reset(self) -> None:
        """Return internal state to its initial value."""
        ...

    async def deliver(self, topic: str, message: Message) -> None:
        """Handle a message published on a subscribed topic."""
        ...

    async def close(self) -> None:
        """Unsubscribe / unregister and release resources."""
        ...


class TopicAgent:
    """Base class for agents reading `subs` topics and writing `pubs` topics.

    Construction has no side effects. `wire()` attaches a handle to the
    topics: the agent itself, or a wrapper such as ParallelAgent that must be
    the object topics deliver to. `close()` detaches exactly what was wired.
    """

    _counters: dict[str, Iterator[int]] = {}

    def __init__(self, name: str, subs: Sequence[str], pubs: Sequence[str]):
        self._name = name
        self._subs = list(subs)
        self._pubs = list(pubs)
        self._registry: ITopicRegistry | None = None
        self._handle: IAgent | None = None

    @classmethod
    def next_name(cls, prefix: str) -> str:
        """Generate a process-unique name such as "PlusAgent_3"."""
        counter = cls._counters.setdefault(prefix, itertools.count(1))
        return f"{prefix}_{next(counter)}"

    @property
    def name(self) -> str:
        return self._name

    @property
    def subs(self) -> list[str]:
        return list(self._subs)

    @property
    def pubs(self) -> list[str]:
        return list(self._pubs)

    @property
    def wired(self) -> bool:
        return self._registry is not None

    def wire(self, registry: ITopicRegistry, handle: IAgent | None = None) -> None:
        """Subscribe / register `handle` (default: self) with the agent's topics."""
        if self._registry is not None:
            raise RuntimeError(f"Agent {self._name} is already wired")

        self._registry = registry
        self._handle = handle if handle is not None else self
        for topic in self._subs:
            registry.get_topic(topic).subscribe(self._handle)
        for topic in self._pubs:
            registry.get_topic(topic).add_publisher(self._handle)

        logger.debug(
            "Wired %s: subs=%s pubs=%s", self._name, self._subs, self._pubs
        )

    def reset(self) -> None:
        pass

    async def deliver(self, topic: str, message: Message) -> None:
        raise NotImplementedError

    async def publish(self, topic: str, message: Message) -> None:
        """Publish message on one of this agent's topics."""
        if self._registry is None:
            raise RuntimeError(f"Agent {self._name} is not wired")
        await self._registry.get_topic(topic).publish(message)

    async def close(self) -> None:
        """Detach from every wired topic; safe to call twice."""
        registry, handle = self._registry, self._handle
        if registry is None or handle is None:
            return

        self._registry = None
        self._handle = None
        # find_topic: a cleared registry must not get its topics back
        for name in self._subs:
            topic = registry.find_topic(name)
            if topic is not None:
                topic.unsubscribe(handle)
        for name in self._pubs:
            topic = registry.find_topic(name)
            if topic is not None:
                topic.remove_publisher(handle)
