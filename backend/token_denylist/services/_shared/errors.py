"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask, HTTP, Redis or SQLAlchemy directly. They serve as stable contracts
between storage adapters and the revocation service.

The translation to HTTP responses (RFC 7807) is handled by
``token_denylist/core/errors.py``.
"""

from __future__ import annotations

from dataclasses import dataclass

# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from storage adapters or domain logic.
    """

    pass


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when a key is absent (or already expired) in a TTL store.

    :param entity: Entity name (e.g., "RevocationEntry").
    :type entity: str
    :param key: Store key that was looked up.
    :type key: str
    """

    entity: str
    key: str

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.entity} not found: {self.key}"


class StoreError(ServiceError):
    """
    Raised when the underlying storage backend is unreachable or rejects
    an operation.

    Adapters wrap their driver exceptions in this type (``raise ... from exc``)
    so callers only deal with one failure kind.
    """

    def __init__(self, message: str = "Revocation store unavailable", *, backend: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.backend = backend
