"""Agent factory table: configuration identifiers -> agent constructors."""

import operator
from typing import Callable, Iterable, Sequence

from ..errors import ConfigurationError
from ..logging_config import get_logger
from .agents.base import IAgent, TopicAgent
from .agents.binop import BinaryOperator, BinaryOperatorAgent, divide
from .agents.increment import IncrementAgent
from .agents.plus import PlusAgent

logger = get_logger(__name__)


AgentFactory = Callable[[Sequence[str], Sequence[str]], IAgent]


def binary_operator_factory(prefix: str, op: BinaryOperator) -> AgentFactory:
    """Factory building a BinaryOperatorAgent over subs[0], subs[1] -> pubs[0]."""

    def factory(subs: Sequence[str], pubs: Sequence[str]) -> IAgent:
        if len(subs) < 2 or len(pubs) < 1:
            raise ValueError(f"{prefix} needs two input topics and one output topic")
        return BinaryOperatorAgent(
            TopicAgent.next_name(prefix), subs[0], subs[1], pubs[0], op
        )

    return factory


class AgentFactories:
    """Registry of agent factories keyed by configuration identifier.

    Plugins register extra agent types with `register()` before a
    configuration is loaded.
    """

    def __init__(self):
        self._factories: dict[str, AgentFactory] = {}

    def register(self, identifier: str, factory: AgentFactory) -> None:
        """Register factory under identifier, replacing any previous one."""
        identifier = identifier.strip()
        if not identifier:
            raise ValueError("Agent identifier must be a non-empty string")
        if identifier in self._factories:
            logger.warning("Replacing agent factory %s", identifier)
        self._factories[identifier] = factory

    def resolve(self, identifier: str) -> AgentFactory:
        """Return the factory for identifier."""
        try:
            return self._factories[identifier]
        except KeyError:
            raise ConfigurationError(f"Unknown agent type: {identifier!r}") from None

    def create(self, identifier: str, subs: Sequence[str], pubs: Sequence[str]) -> IAgent:
        """Resolve identifier and build an unwired agent."""
        factory = self.resolve(identifier)
        try:
            return factory(list(subs), list(pubs))
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Cannot create {identifier}: {e}") from e

    @property
    def identifiers(self) -> list[str]:
        return sorted(self._factories)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._factories


BUILTIN_FACTORIES: dict[str, AgentFactory] = {
    "PlusAgent": PlusAgent,
    "IncAgent": IncrementAgent,
    "AddAgent": binary_operator_factory("AddAgent", operator.add),
    "SubAgent": binary_operator_factory("SubAgent", operator.sub),
    "MulAgent": binary_operator_factory("MulAgent", operator.mul),
    "DivAgent": binary_operator_factory("DivAgent", divide),
}


def default_factories(extra: Iterable[tuple[str, AgentFactory]] = ()) -> AgentFactories:
    """Factory table with the built-in agents under short and dotted names."""
    factories = AgentFactories()
    for identifier, factory in BUILTIN_FACTORIES.items():
        factories.register(identifier, factory)
        factories.register(f"topicflow.agents.{identifier}", factory)
    for identifier, factory in extra:
        factories.register(identifier, factory)
    return factories
