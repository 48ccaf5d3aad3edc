# comments in English; reST docstrings
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from token_denylist.core.extensions import db
from token_denylist.models.revocation_entry import RevocationEntryRecord
from token_denylist.services._shared.errors import NotFoundError, StoreError
from token_denylist.services._shared.ports.clock import Clock, SystemClock
from token_denylist.services._shared.ports.ttl_store import TTLStore, ensure_ttl

T = TypeVar("T")


@dataclass(slots=True)
class SQLTTLStore(TTLStore):
    """
    Relational TTL store on top of Flask-SQLAlchemy.

    Rows past ``expires_at`` are invisible to every read; they are physically
    removed by overwrites, :meth:`delete`, :meth:`clear` or
    :meth:`purge_expired`.

    .. note::
       Requires an active Flask app context. Each write commits its own
       transaction; on failure the session is rolled back and the driver
       error is wrapped in :class:`StoreError`.
    """

    clock: Clock = field(default_factory=SystemClock)
    session_factory: Callable[[], Session] = field(default=lambda: db.session)

    # -------------------- helpers --------------------

    def _now(self) -> int:
        return self.clock.now().epoch

    def _run(self, op: str, fn: Callable[[Session], T], *, commit: bool = False) -> T:
        session = self.session_factory()
        try:
            result = fn(session)
            if commit:
                session.commit()
            return result
        except SQLAlchemyError as exc:
            session.rollback()
            raise StoreError(f"SQL {op} failed: {exc}", backend="sql") from exc

    def _live(self, session: Session, key: str) -> RevocationEntryRecord | None:
        stmt = select(RevocationEntryRecord).where(
            RevocationEntryRecord.key == key,
            RevocationEntryRecord.expires_at > self._now(),
        )
        return session.execute(stmt).scalar_one_or_none()

    # -------------------- API ------------------------

    def set(self, key: str, value: dict[str, Any], ttl_minutes: int) -> None:
        ttl = ensure_ttl(ttl_minutes)
        expires_at = self._now() + ttl * 60

        def _write(session: Session) -> None:
            session.merge(RevocationEntryRecord(key=key, value=dict(value), expires_at=expires_at))

        self._run("set", _write, commit=True)

    def has(self, key: str) -> bool:
        return self._run("has", lambda s: self._live(s, key) is not None)

    def get(self, key: str) -> dict[str, Any]:
        row = self._run("get", lambda s: self._live(s, key))
        if row is None:
            raise NotFoundError("RevocationEntry", key)
        return dict(row.value)

    def delete(self, key: str) -> bool:
        def _delete(session: Session) -> bool:
            existed = self._live(session, key) is not None
            session.execute(delete(RevocationEntryRecord).where(RevocationEntryRecord.key == key))
            return existed

        return self._run("delete", _delete, commit=True)

    def clear(self) -> None:
        self._run("clear", lambda s: s.execute(delete(RevocationEntryRecord)), commit=True)

    def purge_expired(self) -> int:
        """
        Physically delete expired rows.

        :returns: Number of rows removed.
        """

        def _purge(session: Session) -> int:
            res = session.execute(
                delete(RevocationEntryRecord).where(RevocationEntryRecord.expires_at <= self._now())
            )
            return int(res.rowcount or 0)

        return self._run("purge", _purge, commit=True)
