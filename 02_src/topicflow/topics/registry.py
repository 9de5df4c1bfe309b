"""TopicRegistry: the mapping from topic name to Topic."""

import threading
from typing import Protocol

from ..logging_config import get_logger
from .topic import Topic

logger = get_logger(__name__)


class ITopicRegistry(Protocol):
    """Name -> Topic mapping with lazy creation."""

    def get_topic(self, name: str) -> Topic:
        """Return the topic for name, creating it on first reference."""
        ...

    def find_topic(self, name: str) -> Topic | None:
        """Return the topic for name without creating it."""
        ...

    def topics(self) -> list[Topic]:
        """Snapshot of all topics in creation order."""
        ...

    def clear(self) -> None:
        """Drop every topic."""
        ...


class TopicRegistry:
    """Thread-safe topic registry.

    While a name stays registered, `get_topic` always returns the same
    instance for it. `clear()` swaps in an empty mapping in one step;
    deliveries already dispatched through old topics may still complete.
    """

    def __init__(self):
        self._topics: dict[str, Topic] = {}
        self._lock = threading.Lock()

    def get_topic(self, name: str) -> Topic:
        """Return the topic for name, creating it on first reference."""
        with self._lock:
            topic = self._topics.get(name)
            if topic is None:
                topic = Topic(name)
                self._topics[name] = topic
                logger.debug("Created topic %s", name)
            return topic

    def find_topic(self, name: str) -> Topic | None:
        """Return the topic for name without creating it."""
        with self._lock:
            return self._topics.get(name)

    def topics(self) -> list[Topic]:
        """Snapshot of all topics in creation order."""
        with self._lock:
            return list(self._topics.values())

    def clear(self) -> None:
        """Drop every topic."""
        with self._lock:
            count = len(self._topics)
            self._topics = {}
        logger.info("Cleared %s topics", count)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._topics

    def __len__(self) -> int:
        with self._lock:
            return len(self._topics)
