"""Increment agent."""

from typing import Sequence

from ...models import Message
from .base import TopicAgent


class IncrementAgent(TopicAgent):
    """Publishes value + 1 to pubs[0] for every number received on subs[0]."""

    def __init__(self, subs: Sequence[str], pubs: Sequence[str], name: str | None = None):
        if len(subs) < 1 or len(pubs) < 1:
            raise ValueError("IncrementAgent needs one input topic and one output topic")
        super().__init__(name or self.next_name("IncAgent"), subs[:1], pubs[:1])

    async def deliver(self, topic: str, message: Message) -> None:
        if topic != self._subs[0] or not message.is_numeric:
            return
        await self.publish(self._pubs[0], Message.from_number(message.number + 1.0))
