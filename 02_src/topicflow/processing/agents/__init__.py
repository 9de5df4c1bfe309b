"""Agent contract and built-in agents."""

from .base import IAgent, TopicAgent
from .binop import BinaryOperatorAgent, divide
from .increment import IncrementAgent
from .plus import PlusAgent

__all__ = [
    "BinaryOperatorAgent",
    "IAgent",
    "IncrementAgent",
    "PlusAgent",
    "TopicAgent",
    "divide",
]
