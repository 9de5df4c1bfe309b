"""Processing module."""

from .agents import (
    BinaryOperatorAgent,
    IAgent,
    IncrementAgent,
    PlusAgent,
    TopicAgent,
)
from .factories import AgentFactories, AgentFactory, default_factories
from .loader import AgentSpec, ConfigLoader, IConfigLoader, parse_config
from .parallel import ParallelAgent

__all__ = [
    "AgentFactories",
    "AgentFactory",
    "AgentSpec",
    "BinaryOperatorAgent",
    "ConfigLoader",
    "IAgent",
    "IConfigLoader",
    "IncrementAgent",
    "ParallelAgent",
    "PlusAgent",
    "TopicAgent",
    "default_factories",
    "parse_config",
]
