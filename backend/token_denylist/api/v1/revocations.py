"""Revocation list management endpoints (admin scope)."""

from __future__ import annotations

from flask import Blueprint, request

from token_denylist.api.deps import json_response, require_scope, timing
from token_denylist.core.extensions import get_revocation_list
from token_denylist.schemas import GracePeriodSchema, RevocationStatusSchema, RevokeSchema
from token_denylist.services.revocation.dto import RevocationStatus

bp = Blueprint("revocations", __name__, url_prefix="/revocations")

revoke_schema = RevokeSchema()
grace_schema = GracePeriodSchema()
status_schema = RevocationStatusSchema()


@bp.post("")
@require_scope()
@timing
def revoke():
    """Revoke a token by ``jti`` until its expiry.

    Returns ``201`` when an entry was written and ``200`` with
    ``stored: false`` when the token had already expired.
    """

    data = revoke_schema.load(request.get_json(silent=True) or {})
    stored = get_revocation_list().revoke(data["jti"], data["expires_at"])
    body = {"data": {"jti": data["jti"], "stored": stored}}
    return json_response(body, status=201 if stored else 200)


@bp.get("/<string:jti>")
@require_scope()
@timing
def status(jti: str):
    """Return whether ``jti`` is currently revoked."""

    revoked = get_revocation_list().is_revoked(jti)
    body = {"data": status_schema.dump(RevocationStatus(token_id=jti, revoked=revoked))}
    return json_response(body)


@bp.delete("/<string:jti>")
@require_scope()
@timing
def unrevoke(jti: str):
    """Remove ``jti`` from the revocation list."""

    removed = get_revocation_list().unrevoke(jti)
    return json_response({"data": {"jti": jti, "removed": removed}})


@bp.delete("")
@require_scope()
@timing
def clear():
    """Remove every entry from the revocation list."""

    cleared = get_revocation_list().clear()
    return json_response({"data": {"cleared": cleared}})


@bp.get("/grace-period")
@require_scope()
@timing
def get_grace_period():
    """Return the grace period applied to new revocations.

    Read-only: the value comes from ``REVOCATION_GRACE_PERIOD`` so every
    worker process revokes with the same grace period.
    """

    grace_period = get_revocation_list().grace_period
    return json_response({"data": grace_schema.dump({"grace_period": grace_period})})
