from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol


@dataclass(frozen=True, order=True, slots=True)
class Timestamp:
    """
    Immutable UTC instant with whole-second precision.

    :ivar epoch: Seconds since the Unix epoch.
    """

    epoch: int

    @classmethod
    def from_epoch(cls, value: int | float | str) -> Timestamp:
        """Build from an epoch value (``exp`` claims arrive as int or str)."""
        return cls(int(value))

    @classmethod
    def from_datetime(cls, dt: datetime) -> Timestamp:
        """Build from a datetime; naive values are labelled as UTC."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=UTC)
        return cls(int(dt.timestamp()))

    def to_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.epoch, tz=UTC)

    def add_seconds(self, seconds: int) -> Timestamp:
        return Timestamp(self.epoch + int(seconds))

    def diff_in_minutes(self, other: Timestamp) -> int:
        """Absolute difference in whole (truncated) minutes."""
        return abs(self.epoch - other.epoch) // 60

    def __str__(self) -> str:
        return self.to_datetime().isoformat()


class Clock(Protocol):
    """Port for reading the current time."""

    def now(self) -> Timestamp: ...

    def is_past(self, ts: Timestamp) -> bool: ...

    def is_future(self, ts: Timestamp) -> bool: ...


class SystemClock(Clock):
    """Wall clock in UTC."""

    def now(self) -> Timestamp:
        return Timestamp.from_datetime(datetime.now(UTC))

    def is_past(self, ts: Timestamp) -> bool:
        return ts < self.now()

    def is_future(self, ts: Timestamp) -> bool:
        return ts > self.now()


class ManualClock(Clock):
    """
    Deterministic clock used in unit tests.

    .. note::
       Starts at the current wall-clock second unless ``start`` is given and
       only moves when :meth:`advance` or :meth:`set` is called.
    """

    def __init__(self, start: Timestamp | None = None) -> None:
        self._now = start or SystemClock().now()
        self._lock = threading.Lock()

    def now(self) -> Timestamp:
        return self._now

    def is_past(self, ts: Timestamp) -> bool:
        return ts < self._now

    def is_future(self, ts: Timestamp) -> bool:
        return ts > self._now

    def advance(self, seconds: int) -> Timestamp:
        with self._lock:
            self._now = self._now.add_seconds(seconds)
            return self._now

    def set(self, ts: Timestamp) -> None:
        with self._lock:
            self._now = ts
