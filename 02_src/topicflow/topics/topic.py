"""Topic implementation: a named pub/sub channel."""

from __future__ import annotations

import asyncio
import threading
from typing import TYPE_CHECKING

from ..logging_config import get_logger
from ..models import Message

if TYPE_CHECKING:
    from ..processing.agents.base import IAgent

logger = get_logger(__name__)


def _remove_by_identity(agents: list[IAgent], agent: IAgent) -> bool:
    for i, existing in enumerate(agents):
        if existing is agent:
            del agents[i]
            return True
    return False


class Topic:
    """Named channel holding subscribers, publishers and the last message.

    Membership lists are deduplicated by identity and kept in insertion order.
    Publishes to one topic are serialized, so every subscriber observes them
    in the order `publish()` was called.
    """

    def __init__(self, name: str):
        self._name = name
        self._subscribers: list[IAgent] = []
        self._publishers: list[IAgent] = []
        self._last_message: Message | None = None
        self._members_lock = threading.Lock()
        self._publish_lock = asyncio.Lock()

    def __repr__(self) -> str:
        return f"Topic({self._name!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def subscribers(self) -> tuple[IAgent, ...]:
        """Snapshot of subscribers in subscription order."""
        with self._members_lock:
            return tuple(self._subscribers)

    @property
    def publishers(self) -> tuple[IAgent, ...]:
        """Snapshot of publishers in registration order."""
        with self._members_lock:
            return tuple(self._publishers)

    @property
    def last_message(self) -> Message | None:
        return self._last_message

    def subscribe(self, agent: IAgent) -> None:
        """Append agent to subscribers unless already present."""
        with self._members_lock:
            if not any(existing is agent for existing in self._subscribers):
                self._subscribers.append(agent)

    def unsubscribe(self, agent: IAgent) -> None:
        """Remove agent from subscribers; no-op when absent."""
        with self._members_lock:
            _remove_by_identity(self._subscribers, agent)

    def add_publisher(self, agent: IAgent) -> None:
        """Register agent as publisher unless already present."""
        with self._members_lock:
            if not any(existing is agent for existing in self._publishers):
                self._publishers.append(agent)

    def remove_publisher(self, agent: IAgent) -> None:
        """Unregister a publisher; no-op when absent."""
        with self._members_lock:
            _remove_by_identity(self._publishers, agent)

    def clear_last_message(self) -> None:
        self._last_message = None

    async def publish(self, message: Message) -> None:
        """Store message as last message, then deliver it to every subscriber."""
        async with self._publish_lock:
            self._last_message = message
            subscribers = self.subscribers

            logger.debug(
                "Publishing %r to %s subscribers of %s",
                message.text,
                len(subscribers),
                self._name,
            )

            for agent in subscribers:
                try:
                    await agent.deliver(self._name, message)
                except Exception:
                    logger.exception(
                        "Error delivering to %s on topic %s",
                        agent.name,
                        self._name,
                        extra={"context": {"topic": self._name, "agent": agent.name}},
                    )
