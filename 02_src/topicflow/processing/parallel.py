"""ParallelAgent: a bounded FIFO queue and one worker task in front of an agent."""

import asyncio

from ..config import DEFAULT_QUEUE_CAPACITY
from ..logging_config import get_logger
from ..models import Message
from ..topics import ITopicRegistry
from .agents.base import IAgent

logger = get_logger(__name__)


class ParallelAgent:
    """Decouples publishers from a slow agent.

    `deliver()` enqueues and returns; a single worker task feeds the wrapped
    agent in exact enqueue order. A full queue suspends the publisher until
    the worker takes an item (backpressure). The wrapper is transparent by
    name and is the object topics see as subscriber and publisher.
    """

    def __init__(self, agent: IAgent, capacity: int = DEFAULT_QUEUE_CAPACITY):
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")

        self._agent = agent
        self._capacity = capacity
        self._queue: asyncio.Queue[tuple[str, Message]] = asyncio.Queue(maxsize=capacity)
        self._worker: asyncio.Task | None = None
        self._running = False
        self._closed = False
        self._blocked_puts: set[asyncio.Future] = set()

    def __repr__(self) -> str:
        return f"ParallelAgent({self._agent.name!r}, capacity={self._capacity})"

    @property
    def name(self) -> str:
        return self._agent.name

    @property
    def agent(self) -> IAgent:
        return self._agent

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def pending(self) -> int:
        """Number of queued messages not yet taken by the worker."""
        return self._queue.qsize()

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Spawn the worker task."""
        if self._closed:
            raise RuntimeError(f"ParallelAgent {self.name} is closed")
        if self._worker is not None:
            return

        self._running = True
        self._worker = asyncio.create_task(
            self._run(), name=f"parallel-agent:{self.name}"
        )

    def wire(self, registry: ITopicRegistry, handle: IAgent | None = None) -> None:
        """Wire the wrapped agent with this wrapper as its topic handle."""
        self._agent.wire(registry, handle if handle is not None else self)

    def reset(self) -> None:
        """Reset the wrapped agent; queued messages stay queued."""
        self._agent.reset()

    async def deliver(self, topic: str, message: Message) -> None:
        """Enqueue (topic, message), waiting while the queue is full."""
        if self._closed:
            logger.debug("Dropping message for closed agent %s", self.name)
            return

        item = (topic, message)
        if not self._queue.full():
            self._queue.put_nowait(item)
            return

        # close() cancels this future, raising CancelledError in the caller
        put = asyncio.ensure_future(self._queue.put(item))
        self._blocked_puts.add(put)
        try:
            await put
        finally:
            self._blocked_puts.discard(put)

    async def _run(self) -> None:
        while self._running:
            topic, message = await self._queue.get()
            try:
                await self._agent.deliver(topic, message)
            except asyncio.CancelledError:
                # Our own cancellation (close, loop shutdown) ends the worker.
                # Anything else is a downstream agent abandoning an enqueue.
                if asyncio.current_task().cancelling():
                    raise
                logger.warning(
                    "Delivery from %s to %s was cancelled downstream",
                    topic,
                    self.name,
                )
            except Exception:
                logger.exception(
                    "Agent %s failed on message from %s",
                    self.name,
                    topic,
                    extra={"context": {"agent": self.name, "topic": topic}},
                )
            finally:
                self._queue.task_done()

    async def close(self, drain: bool = False) -> None:
        """Stop the worker, then close the wrapped agent.

        Queued messages are discarded unless `drain` is set, in which case
        they are processed first. A delivery in flight is cancelled at its
        next suspension point. Calling close twice is a no-op.
        """
        if self._closed:
            return

        if drain and self._worker is not None and self._running:
            await self._queue.join()

        self._closed = True
        self._running = False

        for put in list(self._blocked_puts):
            put.cancel()

        worker = self._worker
        if worker is not None:
            worker.cancel()
            try:
                await worker
            except asyncio.CancelledError:
                pass

        dropped = self._queue.qsize()
        if dropped:
            logger.info("Discarding %s queued messages for %s", dropped, self.name)

        await self._agent.close()
        logger.debug("Closed parallel agent %s", self.name)
