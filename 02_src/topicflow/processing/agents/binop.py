"""Binary operator agent: combines the latest values of two topics."""

import math
from typing import Callable

from ...logging_config import get_logger
from ...models import Message
from .base import TopicAgent

logger = get_logger(__name__)


BinaryOperator = Callable[[float, float], float]


def divide(left: float, right: float) -> float:
    """IEEE division: x/0 is +-inf and 0/0 is NaN instead of an exception."""
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


class BinaryOperatorAgent(TopicAgent):
    """Publishes op(left, right) on out_topic once both inputs have a value."""

    def __init__(
        self,
        name: str,
        left_topic: str,
        right_topic: str,
        out_topic: str,
        op: BinaryOperator,
    ):
        super().__init__(name, [left_topic, right_topic], [out_topic])
        self._left_topic = left_topic
        self._right_topic = right_topic
        self._out_topic = out_topic
        self._op = op
        self._left: float | None = None
        self._right: float | None = None

    @property
    def left(self) -> float | None:
        return self._left

    @property
    def right(self) -> float | None:
        return self._right

    def reset(self) -> None:
        """Zero both operands."""
        self._left = 0.0
        self._right = 0.0

    async def deliver(self, topic: str, message: Message) -> None:
        if not message.is_numeric:
            return

        if topic == self._left_topic:
            self._left = message.number
        elif topic == self._right_topic:
            self._right = message.number
        else:
            return

        if self._left is None or self._right is None:
            return

        result = self._op(self._left, self._right)
        logger.debug(
            "%s: op(%s, %s) = %s", self._name, self._left, self._right, result
        )
        await self.publish(self._out_topic, Message.from_number(result))
