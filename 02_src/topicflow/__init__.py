"""Topicflow: publish/subscribe dataflow of agents over named topics."""

from .app import Application, IApplication
from .errors import ConfigurationError, CycleError, TopicflowError
from .graph import Graph, GraphBuilder, build_from_registry
from .models import Message, Vertex, VertexKind, parse_value
from .processing import (
    AgentFactories,
    BinaryOperatorAgent,
    ConfigLoader,
    IAgent,
    IncrementAgent,
    ParallelAgent,
    PlusAgent,
    TopicAgent,
    default_factories,
)
from .topics import ITopicRegistry, Topic, TopicRegistry

__all__ = [
    # Application
    "Application",
    "IApplication",
    # Errors
    "TopicflowError",
    "ConfigurationError",
    "CycleError",
    # Models
    "Message",
    "parse_value",
    "Vertex",
    "VertexKind",
    # Topics
    "Topic",
    "ITopicRegistry",
    "TopicRegistry",
    # Agents
    "IAgent",
    "TopicAgent",
    "BinaryOperatorAgent",
    "PlusAgent",
    "IncrementAgent",
    "ParallelAgent",
    # Loading
    "AgentFactories",
    "default_factories",
    "ConfigLoader",
    # Graph
    "Graph",
    "GraphBuilder",
    "build_from_registry",
]
