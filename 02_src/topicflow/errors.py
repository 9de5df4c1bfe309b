"""Exception hierarchy for topicflow.

Configuration and cycle errors surface to the caller. Delivery faults never
leave the component that caught them: they are logged and dropped.
"""

from typing import Sequence


class TopicflowError(Exception):
    """Base class for errors raised by the dataflow runtime."""


class ConfigurationError(TopicflowError):
    """A configuration could not be read, parsed or instantiated."""

    def __init__(self, message: str, line: int | None = None):
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line


class CycleError(TopicflowError):
    """The wired graph contains a feedback loop."""

    def __init__(self, path: Sequence[str] = ()):
        self.path = list(path)
        if self.path:
            message = "Configuration contains a cycle: " + " -> ".join(self.path)
        else:
            message = "Configuration contains a cycle"
        super().__init__(message)
