from __future__ import annotations

import copy
import threading
from dataclasses import dataclass
from typing import Any, Protocol

from token_denylist.services._shared.errors import NotFoundError
from token_denylist.services._shared.ports.clock import Clock, SystemClock, Timestamp


def ensure_ttl(ttl_minutes: int) -> int:
    """Reject TTLs a backend would read as "no expiry" or "delete now"."""
    ttl = int(ttl_minutes)
    if ttl < 1:
        raise ValueError(f"ttl_minutes must be a positive integer, got {ttl_minutes!r}")
    return ttl


class TTLStore(Protocol):
    """
    Key-value store whose entries expire after a per-key time-to-live.

    Single-key operations MUST be atomic. Backend failures MUST surface as
    :class:`~token_denylist.services._shared.errors.StoreError`.
    """

    def set(self, key: str, value: dict[str, Any], ttl_minutes: int) -> None:
        """Write ``value`` under ``key`` for ``ttl_minutes`` (>= 1), replacing any entry."""

    def has(self, key: str) -> bool:
        """Return whether a live entry exists for ``key``."""

    def get(self, key: str) -> dict[str, Any]:
        """
        Return the stored mapping.

        :raises NotFoundError: If the key is absent or expired.
        """

    def delete(self, key: str) -> bool:
        """Remove ``key``. :returns: True if an entry existed."""

    def clear(self) -> None:
        """Remove every entry owned by this store."""


@dataclass(frozen=True, slots=True)
class _Entry:
    value: dict[str, Any]
    expires_at: Timestamp


class InMemoryTTLStore(TTLStore):
    """
    Process-local TTL store.

    Expiry is evaluated lazily against the injected clock, so tests can move
    time forward with a :class:`~.ManualClock` and watch entries disappear.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self.clock = clock or SystemClock()
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def _live(self, key: str) -> _Entry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at <= self.clock.now():
            del self._entries[key]
            return None
        return entry

    def set(self, key: str, value: dict[str, Any], ttl_minutes: int) -> None:
        ttl = ensure_ttl(ttl_minutes)
        with self._lock:
            self._entries[key] = _Entry(
                value=copy.deepcopy(value),
                expires_at=self.clock.now().add_seconds(ttl * 60),
            )

    def has(self, key: str) -> bool:
        with self._lock:
            return self._live(key) is not None

    def get(self, key: str) -> dict[str, Any]:
        with self._lock:
            entry = self._live(key)
            if entry is None:
                raise NotFoundError("RevocationEntry", key)
            return copy.deepcopy(entry.value)

    def delete(self, key: str) -> bool:
        with self._lock:
            existed = self._live(key) is not None
            self._entries.pop(key, None)
            return existed

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def expires_at(self, key: str) -> Timestamp | None:
        """Expiry of the live entry for ``key`` (test introspection)."""
        with self._lock:
            entry = self._live(key)
            return entry.expires_at if entry else None

    def __len__(self) -> int:
        with self._lock:
            return sum(1 for key in list(self._entries) if self._live(key) is not None)
