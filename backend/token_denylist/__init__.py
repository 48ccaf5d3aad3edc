"""Token revocation list (denylist) for bearer tokens.

Provide convenient access to :func:`token_denylist.factory.create_app` and to
the revocation service so callers can ``from token_denylist import
RevocationList`` without traversing the package structure.
"""

from __future__ import annotations

from .factory import create_app
from .services import (
    InMemoryTTLStore,
    ManualClock,
    NotFoundError,
    RevocationList,
    StoreError,
    SystemClock,
    Timestamp,
    TTLStore,
)

__all__ = [
    "create_app",
    "RevocationList",
    "TTLStore",
    "InMemoryTTLStore",
    "Timestamp",
    "SystemClock",
    "ManualClock",
    "StoreError",
    "NotFoundError",
]
