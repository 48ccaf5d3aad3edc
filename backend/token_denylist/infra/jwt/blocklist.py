# token_denylist/infra/jwt/blocklist.py
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flask_jwt_extended import JWTManager

from token_denylist.services._shared.ports.clock import Timestamp
from token_denylist.services.revocation.service import RevocationList


def claim_token_id(claims: Mapping[str, Any]) -> str:
    """Return the ``jti`` claim of a decoded token."""
    jti = claims.get("jti")
    if not jti:
        raise ValueError("Token payload has no 'jti' claim.")
    return str(jti)


def claim_expiry(claims: Mapping[str, Any]) -> Timestamp:
    """Return the ``exp`` claim of a decoded token as a :class:`Timestamp`."""
    exp = claims.get("exp")
    if exp is None:
        raise ValueError("Token payload has no 'exp' claim.")
    return Timestamp.from_epoch(exp)


def revoke_claims(revocations: RevocationList, claims: Mapping[str, Any]) -> bool:
    """
    Revoke a decoded, already-verified token payload.

    :param revocations: Target revocation list.
    :param claims: Decoded JWT payload carrying ``jti`` and ``exp``.
    :returns: Result of :meth:`RevocationList.revoke`.
    :raises ValueError: If either claim is missing.
    """
    return revocations.revoke(claim_token_id(claims), claim_expiry(claims))


def register_blocklist_loader(manager: JWTManager) -> None:
    """
    Make Flask-JWT-Extended reject tokens found in the revocation list.

    The callback runs after signature and ``exp`` verification; a store
    failure propagates (the request fails instead of letting the token in).
    """

    @manager.token_in_blocklist_loader
    def _token_in_blocklist(jwt_header: dict[str, Any], jwt_payload: dict[str, Any]) -> bool:
        from token_denylist.core.extensions import get_revocation_list

        return get_revocation_list().is_revoked(claim_token_id(jwt_payload))
