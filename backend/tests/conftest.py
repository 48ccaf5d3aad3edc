"""Pytest fixtures for the revocation list, its stores and the Flask app.

Temporal behaviour is driven by :class:`ManualClock` so every assertion about
grace windows and store expiry is deterministic.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from datetime import timedelta
from typing import Any

import fakeredis
import pytest
from flask import Flask
from flask_jwt_extended import create_access_token

from token_denylist import create_app
from token_denylist.core.extensions import REVOCATION_EXTENSION_KEY, db
from token_denylist.services._shared.ports import (
    InMemoryTTLStore,
    ManualClock,
    SystemClock,
    Timestamp,
)
from token_denylist.services.revocation import RevocationList

# Fixed origin for unit tests (2023-11-14T22:13:20Z)
T0 = Timestamp(1_700_000_000)

ADMIN_SCOPE = "revocations:admin"


class TestConfig:
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Uses the in-memory revocation store and an in-memory SQLite database.
    - Avoids hitting external services.
    """

    TESTING = True
    DEBUG = False
    PROPAGATE_EXCEPTIONS = True
    SECRET_KEY = "test-secret"
    JWT_SECRET_KEY = "test-jwt-secret-key-with-at-least-32-bytes"
    REVOCATION_STORE = "memory"
    REVOCATION_GRACE_PERIOD = 0
    REVOCATION_ADMIN_SCOPE = ADMIN_SCOPE
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = "WARNING"


# ------------------------------ Core fixtures ------------------------------ #


@pytest.fixture
def clock() -> ManualClock:
    """Provide a manual clock pinned at :data:`T0`."""
    return ManualClock(T0)


@pytest.fixture
def store(clock: ManualClock) -> InMemoryTTLStore:
    """Provide an in-memory TTL store sharing the manual clock."""
    return InMemoryTTLStore(clock=clock)


@pytest.fixture
def revocations(store: InMemoryTTLStore, clock: ManualClock) -> RevocationList:
    """Provide a revocation list with no grace period."""
    return RevocationList(store, clock=clock)


@pytest.fixture
def fake_redis():
    """Provide a fresh FakeRedis instance for each test."""
    r = fakeredis.FakeRedis()
    r.flushall()
    return r


# ------------------------------ App fixtures ------------------------------- #


@pytest.fixture
def app() -> Generator[Flask, None, None]:
    """Create a Flask application configured for testing."""
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture
def sql_app() -> Generator[Flask, None, None]:
    """Create an app whose revocation list runs on the SQL store (in-memory SQLite)."""

    class SQLTestConfig(TestConfig):
        REVOCATION_STORE = "sql"

    application = create_app(SQLTestConfig)
    with application.app_context():
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture
def app_clock() -> ManualClock:
    """Manual clock starting at the real current second.

    Tokens are verified by Flask-JWT-Extended against wall-clock time, so the
    revocation list must start from the same instant to stay consistent.
    """
    return ManualClock(SystemClock().now())


@pytest.fixture
def app_revocations(app: Flask, app_clock: ManualClock) -> RevocationList:
    """Swap the app's revocation list for one driven by :func:`app_clock`."""
    revocations = RevocationList(InMemoryTTLStore(clock=app_clock), clock=app_clock)
    app.extensions[REVOCATION_EXTENSION_KEY] = revocations
    return revocations


@pytest.fixture
def client(app: Flask, app_revocations: RevocationList):
    """Return a Flask test client bound to the manual-clock revocation list."""
    return app.test_client()


@pytest.fixture
def issue_token(app: Flask) -> Callable[..., str]:
    """Return a helper generating access tokens for tests."""

    def _issue(
        identity: str = "user-1",
        *,
        expires_delta: timedelta = timedelta(minutes=15),
        scopes: list[str] | None = None,
    ) -> str:
        claims: dict[str, Any] = {"scopes": scopes} if scopes else {}
        with app.app_context():
            return create_access_token(
                identity=identity, expires_delta=expires_delta, additional_claims=claims
            )

    return _issue


@pytest.fixture
def auth_header(issue_token: Callable[..., str]) -> dict[str, str]:
    """Authorization header for a plain user token."""
    return {"Authorization": f"Bearer {issue_token()}"}


@pytest.fixture
def admin_header(issue_token: Callable[..., str]) -> dict[str, str]:
    """Authorization header for a token carrying the admin scope."""
    return {"Authorization": f"Bearer {issue_token('admin-1', scopes=[ADMIN_SCOPE])}"}
