"""Marshmallow schemas for request validation and response shaping."""

from __future__ import annotations

from .auth import LogoutResponseSchema, WhoAmISchema
from .revocation import ExpiryField, GracePeriodSchema, RevocationStatusSchema, RevokeSchema

__all__ = [
    "ExpiryField",
    "GracePeriodSchema",
    "LogoutResponseSchema",
    "RevocationStatusSchema",
    "RevokeSchema",
    "WhoAmISchema",
]
