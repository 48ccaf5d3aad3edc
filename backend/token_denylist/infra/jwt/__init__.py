"""Flask-JWT-Extended integration for the revocation list."""

from __future__ import annotations

from .blocklist import claim_expiry, claim_token_id, register_blocklist_loader, revoke_claims

__all__ = ["claim_expiry", "claim_token_id", "register_blocklist_loader", "revoke_claims"]
