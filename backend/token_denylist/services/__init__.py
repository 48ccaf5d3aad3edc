"""Service layer public API.

This package exposes the revocation service and its collaborators so that
callers can import from :mod:`token_denylist.services` without knowing the
internal structure.

Re-exports
----------
- Revocation service (from ``token_denylist.services.revocation``)
    * :class:`RevocationList`
    * DTOs: :class:`RevocationEntry`, :class:`RevocationStatus`

- Ports (from ``token_denylist.services._shared.ports``)
    * :class:`TTLStore`, :class:`InMemoryTTLStore`
    * :class:`Clock`, :class:`SystemClock`, :class:`ManualClock`, :class:`Timestamp`

- Errors (from ``token_denylist.services._shared.errors``)
    * :class:`ServiceError`, :class:`StoreError`, :class:`NotFoundError`
"""

from __future__ import annotations

from ._shared.errors import NotFoundError, ServiceError, StoreError
from ._shared.ports import (
    Clock,
    InMemoryTTLStore,
    ManualClock,
    SystemClock,
    Timestamp,
    TTLStore,
)
from .revocation.dto import RevocationEntry, RevocationStatus
from .revocation.service import RevocationList

__all__ = [
    # Revocation
    "RevocationList",
    "RevocationEntry",
    "RevocationStatus",
    # Ports
    "TTLStore",
    "InMemoryTTLStore",
    "Clock",
    "SystemClock",
    "ManualClock",
    "Timestamp",
    # Errors
    "ServiceError",
    "StoreError",
    "NotFoundError",
]
