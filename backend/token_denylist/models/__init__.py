"""SQLAlchemy models used by the SQL-backed TTL store."""

from __future__ import annotations

from .revocation_entry import RevocationEntryRecord

__all__ = ["RevocationEntryRecord"]
