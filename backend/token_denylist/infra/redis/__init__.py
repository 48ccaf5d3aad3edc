"""Redis adapters."""

from __future__ import annotations

from .redis_ttl_store import DEFAULT_PREFIX, RedisTTLStore

__all__ = ["RedisTTLStore", "DEFAULT_PREFIX"]
