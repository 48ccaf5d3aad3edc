"""
token_denylist.services._shared.ports
=====================================

Collection of *ports* (hexagonal interfaces) that define the contracts the
revocation service depends on.

These ports decouple the service layer from concrete storage engines and from
the wall clock.

Modules
-------
- :mod:`ttl_store`:
    Defines :class:`~.TTLStore` (key-value storage with per-key expiry)
    and :class:`~.InMemoryTTLStore`, the process-local implementation.

- :mod:`clock`:
    Defines :class:`~.Timestamp`, :class:`~.Clock`, :class:`~.SystemClock`
    and :class:`~.ManualClock` (deterministic time for tests).

Design Notes
------------
Concrete adapters (Redis, SQL) implement these interfaces under
``token_denylist.infra``.
"""

from __future__ import annotations

from .clock import Clock, ManualClock, SystemClock, Timestamp
from .ttl_store import InMemoryTTLStore, TTLStore, ensure_ttl

__all__ = [
    "Clock",
    "SystemClock",
    "ManualClock",
    "Timestamp",
    "TTLStore",
    "InMemoryTTLStore",
    "ensure_ttl",
]
