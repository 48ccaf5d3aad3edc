"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields


class LogoutResponseSchema(Schema):
    """Response payload returned after revoking the presented token."""

    jti = fields.String(required=True)
    revoked = fields.Boolean(required=True)


class WhoAmISchema(Schema):
    """Response payload exposing the identity carried by the access token."""

    sub = fields.String(required=True)
    jti = fields.String(required=True)
    expires_at = fields.Integer(required=True)
