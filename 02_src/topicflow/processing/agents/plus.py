"""Plus agent: adds the latest values of two input topics."""

from typing import Sequence

from ...models import Message
from .base import TopicAgent


class PlusAgent(TopicAgent):
    """Publishes subs[0] + subs[1] to pubs[0].

    Unlike BinaryOperatorAgent, reset() makes both inputs absent again, so
    the next sum needs a fresh value on each input.
    """

    def __init__(self, subs: Sequence[str], pubs: Sequence[str], name: str | None = None):
        if len(subs) < 2 or len(pubs) < 1:
            raise ValueError("PlusAgent needs two input topics and one output topic")
        super().__init__(name or self.next_name("PlusAgent"), subs[:2], pubs[:1])
        self._x: float | None = None
        self._y: float | None = None

    @property
    def inputs(self) -> tuple[float | None, float | None]:
        return self._x, self._y

    def reset(self) -> None:
        self._x = None
        self._y = None

    async def deliver(self, topic: str, message: Message) -> None:
        if not message.is_numeric:
            return

        if topic == self._subs[0]:
            self._x = message.number
        elif topic == self._subs[1]:
            self._y = message.number
        else:
            return

        if self._x is not None and self._y is not None:
            await self.publish(self._pubs[0], Message.from_number(self._x + self._y))
