"""Authentication endpoints backed by the revocation list."""

from __future__ import annotations

from flask import Blueprint
from flask_jwt_extended import get_jwt

from token_denylist.api.deps import json_response, require_auth, timing
from token_denylist.core.extensions import get_revocation_list
from token_denylist.infra.jwt.blocklist import claim_token_id, revoke_claims
from token_denylist.schemas import LogoutResponseSchema, WhoAmISchema

bp = Blueprint("auth", __name__, url_prefix="/auth")

logout_schema = LogoutResponseSchema()
whoami_schema = WhoAmISchema()


@bp.post("/logout")
@require_auth
@timing
def logout():
    """Revoke the access token presented with the request."""

    claims = get_jwt()
    revoked = revoke_claims(get_revocation_list(), claims)
    body = {"data": logout_schema.dump({"jti": claim_token_id(claims), "revoked": revoked})}
    return json_response(body)


@bp.get("/whoami")
@require_auth
@timing
def whoami():
    """Return the identity carried by a valid, non-revoked token."""

    claims = get_jwt()
    body = {
        "data": whoami_schema.dump(
            {"sub": claims.get("sub"), "jti": claims.get("jti"), "expires_at": claims.get("exp")}
        )
    }
    return json_response(body)
