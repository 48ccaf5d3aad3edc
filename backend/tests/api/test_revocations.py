"""API tests for the revocation management endpoints."""

from __future__ import annotations

import pytest

from token_denylist.services._shared.ports import Timestamp

BASE = "/api/v1/revocations"


def test_requires_authentication(client) -> None:
    assert client.get(f"{BASE}/abc").status_code == 401


def test_requires_admin_scope(client, auth_header) -> None:
    resp = client.get(f"{BASE}/abc", headers=auth_header)
    assert resp.status_code == 403
    body = resp.get_json()
    assert body["code"] == "forbidden"
    assert body["request_id"]


def test_revoke_status_unrevoke_flow(client, admin_header, app_clock) -> None:
    expiry = app_clock.now().add_seconds(600)

    resp = client.post(BASE, json={"jti": "jti-1", "expires_at": expiry.epoch}, headers=admin_header)
    assert resp.status_code == 201
    assert resp.get_json()["data"] == {"jti": "jti-1", "stored": True}

    status = client.get(f"{BASE}/jti-1", headers=admin_header).get_json()["data"]
    assert status == {"jti": "jti-1", "revoked": False}

    app_clock.set(expiry)
    status = client.get(f"{BASE}/jti-1", headers=admin_header).get_json()["data"]
    assert status["revoked"] is True

    resp = client.delete(f"{BASE}/jti-1", headers=admin_header)
    assert resp.get_json()["data"] == {"jti": "jti-1", "removed": True}
    status = client.get(f"{BASE}/jti-1", headers=admin_header).get_json()["data"]
    assert status["revoked"] is False


def test_revoke_accepts_iso_datetime(client, admin_header, app_clock, app_revocations) -> None:
    expiry = app_clock.now().add_seconds(120)
    resp = client.post(
        BASE,
        json={"jti": "jti-iso", "expires_at": expiry.to_datetime().isoformat()},
        headers=admin_header,
    )
    assert resp.status_code == 201
    assert app_revocations.store.get("jti-iso") == {"effective_at": expiry.epoch}


def test_revoke_expired_token_is_not_stored(client, admin_header, app_clock, app_revocations) -> None:
    past = Timestamp(app_clock.now().epoch - 10)
    resp = client.post(BASE, json={"jti": "jti-old", "expires_at": past.epoch}, headers=admin_header)

    assert resp.status_code == 200
    assert resp.get_json()["data"]["stored"] is False
    assert app_revocations.store.has("jti-old") is False


def test_revoke_validates_payload(client, admin_header) -> None:
    resp = client.post(BASE, json={"jti": "", "expires_at": "soon"}, headers=admin_header)
    assert resp.status_code == 422
    body = resp.get_json()
    assert body["code"] == "validation_error"
    assert set(body["details"]["errors"]) == {"jti", "expires_at"}


def test_clear(client, admin_header, app_clock, app_revocations) -> None:
    expiry = app_clock.now().add_seconds(60)
    for jti in ("a", "b"):
        app_revocations.revoke(jti, expiry)

    resp = client.delete(BASE, headers=admin_header)
    assert resp.get_json()["data"] == {"cleared": True}
    assert len(app_revocations.store) == 0


@pytest.mark.parametrize("expires_at", [float("inf"), float("nan"), 99_999_999_999_999, "99999999999999"])
def test_revoke_rejects_unrepresentable_expiry(client, admin_header, app_revocations, expires_at) -> None:
    resp = client.post(BASE, json={"jti": "far", "expires_at": expires_at}, headers=admin_header)

    assert resp.status_code == 422
    body = resp.get_json()
    assert body["code"] == "validation_error"
    assert "expires_at" in body["details"]["errors"]
    assert app_revocations.store.has("far") is False


def test_grace_period_is_read_only(client, admin_header, app_clock, app_revocations) -> None:
    app_revocations.set_grace_period(90)

    resp = client.get(f"{BASE}/grace-period", headers=admin_header)
    assert resp.get_json()["data"] == {"grace_period": 90}

    resp = client.put(f"{BASE}/grace-period", json={"grace_period": 5}, headers=admin_header)
    assert resp.status_code == 405
    assert app_revocations.grace_period == 90

    expiry = app_clock.now().add_seconds(60)
    client.post(BASE, json={"jti": "g", "expires_at": expiry.epoch}, headers=admin_header)
    assert app_revocations.store.get("g") == {"effective_at": expiry.epoch + 90}
