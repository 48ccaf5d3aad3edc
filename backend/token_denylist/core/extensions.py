"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

import logging

import redis  # type: ignore[import-untyped]
from flask import Flask, current_app
from flask_jwt_extended import JWTManager
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

from token_denylist.core.config import STORE_BACKENDS
from token_denylist.services._shared.ports.clock import Clock, SystemClock
from token_denylist.services._shared.ports.ttl_store import InMemoryTTLStore, TTLStore
from token_denylist.services.revocation.service import RevocationList

log = logging.getLogger(__name__)

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
jwt = JWTManager()
redis_client: redis.Redis | None = None

REVOCATION_EXTENSION_KEY = "revocation_list"


def _connect_redis(app: Flask) -> redis.Redis:
    """Create and ping the Redis client configured by ``REDIS_URL``."""
    global redis_client
    redis_url = app.config.get("REDIS_URL")
    if not redis_url:
        raise RuntimeError("REVOCATION_STORE=redis requires REDIS_URL to be set.")

    redis_client = redis.Redis.from_url(redis_url)
    try:
        redis_client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Failed to connect to Redis at {redis_url!r}") from exc
    app.extensions["redis_client"] = redis_client
    return redis_client


def build_store(app: Flask, clock: Clock) -> TTLStore:
    """Instantiate the TTL store selected by ``REVOCATION_STORE``.

    Parameters
    ----------
    app: flask.Flask
        Application whose configuration selects and parameterizes the store.
    clock: Clock
        Time source shared with the revocation list (memory and SQL stores
        evaluate expiry against it; Redis expires keys on its own).

    Raises
    ------
    RuntimeError
        If the backend name is unknown or its connection cannot be made.
    """
    backend = str(app.config.get("REVOCATION_STORE", "memory")).strip().lower()
    if backend not in STORE_BACKENDS:
        raise RuntimeError(
            f"Unknown REVOCATION_STORE {backend!r}; expected one of {', '.join(STORE_BACKENDS)}."
        )

    if backend == "redis":
        from token_denylist.infra.redis.redis_ttl_store import RedisTTLStore

        return RedisTTLStore(
            r=_connect_redis(app),
            prefix=app.config.get("REVOCATION_KEY_PREFIX", "denylist:at:"),
        )

    if backend == "sql":
        from token_denylist.infra.sql.sql_ttl_store import SQLTTLStore

        with app.app_context():
            db.create_all()
        return SQLTTLStore(clock=clock)

    return InMemoryTTLStore(clock=clock)


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, JWT and the revocation list.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`token_denylist.models` package so SQLAlchemy metadata is ready
        before the SQL store creates its table.

    Notes
    -----
    The revocation list is stored under ``app.extensions["revocation_list"]``
    and consulted by Flask-JWT-Extended for every protected request.
    """
    db.init_app(app)

    # Ensure models are imported so metadata includes the store table
    from token_denylist import models as _models  # noqa: F401

    jwt.init_app(app)

    from token_denylist.infra.jwt.blocklist import register_blocklist_loader

    register_blocklist_loader(jwt)

    clock = SystemClock()
    store = build_store(app, clock)
    revocations = RevocationList(
        store,
        clock=clock,
        grace_period=app.config.get("REVOCATION_GRACE_PERIOD", 0),
    )
    app.extensions[REVOCATION_EXTENSION_KEY] = revocations
    log.info(
        "revocation.store_ready",
        extra={"store": type(store).__name__, "grace_period": revocations.grace_period},
    )


def get_revocation_list() -> RevocationList:
    """Return the revocation list bound to the current application."""
    revocations = current_app.extensions.get(REVOCATION_EXTENSION_KEY)
    if revocations is None:
        raise RuntimeError("Revocation list is not initialized. Call init_app() first.")
    return revocations
