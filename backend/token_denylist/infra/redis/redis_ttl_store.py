# comments in English; reST docstrings
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, cast

import redis  # type: ignore[import-untyped]
from redis.exceptions import RedisError  # type: ignore[import-untyped]

from token_denylist.services._shared.errors import NotFoundError, StoreError
from token_denylist.services._shared.ports.ttl_store import TTLStore, ensure_ttl

DEFAULT_PREFIX = "denylist:at:"


@dataclass(slots=True)
class RedisTTLStore(TTLStore):
    """
    Redis-backed TTL store for revocation entries.

    Values are JSON-encoded strings written with ``SET key value EX seconds``,
    so Redis itself drops an entry once its TTL elapses.

    :param r: A Redis client (already connected).
    :param prefix: Namespace for every key; :meth:`clear` only touches keys
        under this prefix.
    :param scan_count: ``COUNT`` hint used while scanning during :meth:`clear`.
    """

    r: redis.Redis
    prefix: str = DEFAULT_PREFIX
    scan_count: int = 500

    # -------------------- helpers --------------------

    def _k(self, key: str) -> str:
        return f"{self.prefix}{key}"

    @staticmethod
    def _fail(op: str, exc: RedisError) -> StoreError:
        return StoreError(f"Redis {op} failed: {exc}", backend="redis")

    # -------------------- API ------------------------

    def set(self, key: str, value: dict[str, Any], ttl_minutes: int) -> None:
        ttl = ensure_ttl(ttl_minutes)
        try:
            self.r.set(self._k(key), json.dumps(value), ex=ttl * 60)
        except RedisError as exc:
            raise self._fail("set", exc) from exc

    def has(self, key: str) -> bool:
        try:
            return cast(int, self.r.exists(self._k(key))) == 1
        except RedisError as exc:
            raise self._fail("exists", exc) from exc

    def get(self, key: str) -> dict[str, Any]:
        try:
            raw = self.r.get(self._k(key))
        except RedisError as exc:
            raise self._fail("get", exc) from exc
        if raw is None:
            raise NotFoundError("RevocationEntry", key)
        if isinstance(raw, bytes | bytearray):
            raw = raw.decode()
        return cast(dict[str, Any], json.loads(raw))

    def delete(self, key: str) -> bool:
        try:
            return cast(int, self.r.delete(self._k(key))) == 1
        except RedisError as exc:
            raise self._fail("delete", exc) from exc

    def clear(self) -> None:
        """
        Delete every key under :attr:`prefix`.

        Uses ``SCAN`` rather than ``FLUSHDB`` so a shared Redis database keeps
        unrelated keys.
        """
        try:
            batch: list[Any] = []
            for k in self.r.scan_iter(match=f"{self.prefix}*", count=self.scan_count):
                batch.append(k)
                if len(batch) >= self.scan_count:
                    self.r.delete(*batch)
                    batch.clear()
            if batch:
                self.r.delete(*batch)
        except RedisError as exc:
            raise self._fail("clear", exc) from exc

    def ping(self) -> bool:
        try:
            return bool(self.r.ping())
        except RedisError as exc:
            raise self._fail("ping", exc) from exc
