# tests/unit/infra/test_redis_ttl_store.py
"""
Unit tests for RedisTTLStore using fakeredis.

These tests exercise:
- set / has / get with JSON values and server-side TTL
- delete and prefix-scoped clear
- translation of RedisError into StoreError
- RevocationList running on top of Redis

They use fakeredis.FakeRedis so they run entirely in-memory and integrate with pytest.
"""

from __future__ import annotations

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from token_denylist.infra.redis import DEFAULT_PREFIX, RedisTTLStore
from token_denylist.services._shared.errors import NotFoundError, StoreError
from token_denylist.services._shared.ports import ManualClock, SystemClock
from token_denylist.services.revocation import RevocationList


@pytest.fixture
def redis_store(fake_redis):
    """Provide a RedisTTLStore backed by FakeRedis."""
    return RedisTTLStore(r=fake_redis)


def test_set_writes_json_with_ttl(redis_store, fake_redis):
    redis_store.set("jti-1", {"effective_at": 1_700_000_000}, 61)

    key = f"{DEFAULT_PREFIX}jti-1"
    assert fake_redis.get(key) == b'{"effective_at": 1700000000}'
    ttl = fake_redis.ttl(key)
    assert 61 * 60 - 5 <= ttl <= 61 * 60


def test_has_and_get(redis_store):
    assert redis_store.has("jti") is False
    redis_store.set("jti", {"effective_at": 5}, 1)
    assert redis_store.has("jti") is True
    assert redis_store.get("jti") == {"effective_at": 5}


def test_get_missing_raises_not_found(redis_store):
    with pytest.raises(NotFoundError):
        redis_store.get("missing")


def test_non_positive_ttl_rejected(redis_store, fake_redis):
    with pytest.raises(ValueError):
        redis_store.set("jti", {}, 0)
    assert fake_redis.exists(f"{DEFAULT_PREFIX}jti") == 0


def test_delete_reports_existence(redis_store):
    redis_store.set("jti", {"effective_at": 5}, 1)
    assert redis_store.delete("jti") is True
    assert redis_store.delete("jti") is False


def test_clear_only_touches_prefixed_keys(fake_redis):
    store = RedisTTLStore(r=fake_redis, prefix="deny:", scan_count=2)
    for i in range(5):
        store.set(f"jti-{i}", {"effective_at": i}, 1)
    fake_redis.set("rt:unrelated", "keep")

    store.clear()

    assert list(fake_redis.scan_iter(match="deny:*")) == []
    assert fake_redis.get("rt:unrelated") == b"keep"


def test_redis_errors_become_store_errors(redis_store, monkeypatch):
    def _boom(*args, **kwargs):
        raise RedisConnectionError("connection refused")

    for name in ("set", "exists", "get", "delete", "scan_iter", "ping"):
        monkeypatch.setattr(redis_store.r, name, _boom)

    with pytest.raises(StoreError) as excinfo:
        redis_store.set("jti", {}, 1)
    assert excinfo.value.backend == "redis"
    assert isinstance(excinfo.value.__cause__, RedisConnectionError)

    with pytest.raises(StoreError):
        redis_store.has("jti")
    with pytest.raises(StoreError):
        redis_store.get("jti")
    with pytest.raises(StoreError):
        redis_store.delete("jti")
    with pytest.raises(StoreError):
        redis_store.clear()
    with pytest.raises(StoreError):
        redis_store.ping()


def test_revocation_list_on_redis(redis_store):
    """
    End-to-end over Redis: Redis keeps its own time, so the manual clock only
    decides the grace window while the key's TTL is checked directly.
    """
    clock = ManualClock(SystemClock().now())
    revocations = RevocationList(redis_store, clock=clock)
    expiry = clock.now().add_seconds(120)

    assert revocations.revoke("jti", expiry) is True
    assert revocations.is_revoked("jti") is False

    clock.set(expiry)
    assert revocations.is_revoked("jti") is True
    assert redis_store.r.ttl(redis_store._k("jti")) > 120

    assert revocations.unrevoke("jti") is True
    assert revocations.is_revoked("jti") is False
