"""SQL (Flask-SQLAlchemy) adapters."""

from __future__ import annotations

from .sql_ttl_store import SQLTTLStore

__all__ = ["SQLTTLStore"]
