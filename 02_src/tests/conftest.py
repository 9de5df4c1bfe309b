"""Pytest configuration and fixtures."""

import asyncio
import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from topicflow.processing.agents.base import TopicAgent  # noqa: E402


class RecordingAgent(TopicAgent):
    """Test agent that records every (topic, message) it receives."""

    def __init__(self, name="recorder", subs=(), pubs=(), delay: float = 0.0):
        super().__init__(name, subs, pubs)
        self.received = []
        self.resets = 0
        self.closed = False
        self.delay = delay

    def reset(self) -> None:
        self.resets += 1

    async def deliver(self, topic, message) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        self.received.append((topic, message))

    async def close(self) -> None:
        self.closed = True
        await super().close()

    @property
    def numbers(self) -> list[float]:
        return [message.number for _, message in self.received]


@pytest.fixture
def registry():
    """Create an empty topic registry."""
    from topicflow.topics import TopicRegistry

    return TopicRegistry()


@pytest.fixture
def factories():
    """Create the built-in agent factory table."""
    from topicflow.processing import default_factories

    return default_factories()


@pytest.fixture
def recorder(registry):
    """Create a wired recording agent factory."""

    def make(*subs, pubs=(), name="recorder", delay=0.0):
        agent = RecordingAgent(name=name, subs=subs, pubs=pubs, delay=delay)
        agent.wire(registry)
        return agent

    return make


@pytest.fixture
def write_config(tmp_path):
    """Write configuration text to a file and return its path."""

    def write(text: str, name: str = "agents.conf") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return write


@pytest.fixture
def eventually():
    """Poll a condition until it holds or the timeout expires."""

    async def wait(condition, timeout: float = 2.0, interval: float = 0.01) -> bool:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while not condition():
            if loop.time() >= deadline:
                return False
            await asyncio.sleep(interval)
        return True

    return wait


@pytest_asyncio.fixture
async def application():
    """Create a started Application."""
    from topicflow.app import Application

    app = Application(queue_capacity=10)
    await app.start()
    yield app
    await app.stop()


PLUS_INC_CONFIG = "pkg.Plus\nA,B\nC\npkg.Inc\nC\nD\n"

PIPELINE_CONFIG = (
    "AddAgent\nA,B\nR1\n"
    "SubAgent\nA,B\nR2\n"
    "MulAgent\nR1,R2\nR3\n"
)

CYCLE_CONFIG = "IncAgent\nA\nB\nIncAgent\nB\nA\n"
