"""Persistent row for a revocation entry (SQL TTL store)."""

from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from token_denylist.core.extensions import db


class RevocationEntryRecord(db.Model):
    """One TTL store entry.

    Attributes
    ----------
    key:
        Store key (the token ``jti``).
    value:
        JSON payload written by the revocation service.
    expires_at:
        Epoch seconds after which the row is treated as absent. Stored as an
        integer so comparisons do not depend on the dialect's timezone
        handling.
    """

    __tablename__ = "revocation_entries"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    expires_at: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<RevocationEntryRecord key={self.key} expires_at={self.expires_at}>"
