"""Message model: an immutable payload with bytes, text and numeric views."""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone


def _parse_number(text: str) -> float:
    """Parse text as a real number, NaN when it is not one."""
    candidate = text.strip()
    # float() accepts digit-group underscores ("1_000"); a decimal view must not
    if not candidate or "_" in candidate:
        return math.nan
    try:
        return float(candidate)
    except ValueError:
        return math.nan


@dataclass(frozen=True, eq=False)
class Message:
    """A value flowing through topics.

    Build instances with `from_bytes`, `from_text` or `from_number`; the three
    views are always consistent with each other. Equality is identity.
    """

    data: bytes
    text: str
    number: float
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_bytes(cls, data: bytes) -> "Message":
        data = bytes(data)
        text = data.decode("utf-8", errors="replace")
        return cls(data=data, text=text, number=_parse_number(text))

    @classmethod
    def from_text(cls, text: str) -> "Message":
        return cls(data=text.encode("utf-8"), text=text, number=_parse_number(text))

    @classmethod
    def from_number(cls, value: float) -> "Message":
        # repr() is the shortest decimal that round-trips to the same float
        text = repr(float(value))
        return cls(data=text.encode("utf-8"), text=text, number=_parse_number(text))

    @property
    def is_numeric(self) -> bool:
        """True unless the numeric view is the NaN sentinel."""
        return not math.isnan(self.number)


def parse_value(raw: str) -> Message:
    """Numeric message when raw parses as a real, text message otherwise."""
    number = _parse_number(raw)
    if math.isnan(number):
        return Message.from_text(raw)
    return Message.from_number(number)
