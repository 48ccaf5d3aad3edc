"""Revocation-related Marshmallow schemas."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any

from marshmallow import Schema, fields, validate

from token_denylist.services._shared.ports.clock import Timestamp


class ExpiryField(fields.Field):
    """Token expiry given as epoch seconds (``exp`` style) or ISO-8601 datetime."""

    default_error_messages = {"invalid": "Expected epoch seconds or an ISO-8601 datetime."}

    def _deserialize(self, value: Any, attr: str | None, data: Any, **kwargs: Any) -> Timestamp:
        if isinstance(value, bool):
            raise self.make_error("invalid")
        if isinstance(value, float) and not math.isfinite(value):
            raise self.make_error("invalid")
        if isinstance(value, int | float):
            return self._in_range(Timestamp.from_epoch(value))
        if isinstance(value, str):
            raw = value.strip()
            try:
                if raw.lstrip("-").isdigit():
                    ts = Timestamp.from_epoch(raw)
                else:
                    ts = Timestamp.from_datetime(datetime.fromisoformat(raw.replace("Z", "+00:00")))
            except (OverflowError, ValueError) as exc:
                raise self.make_error("invalid") from exc
            return self._in_range(ts)
        raise self.make_error("invalid")

    def _in_range(self, ts: Timestamp) -> Timestamp:
        # must round-trip through datetime for display and ISO output
        try:
            ts.to_datetime()
        except (OverflowError, OSError, ValueError) as exc:
            raise self.make_error("invalid") from exc
        return ts

    def _serialize(self, value: Any, attr: str | None, obj: Any, **kwargs: Any) -> int | None:
        if value is None:
            return None
        return value.epoch


class RevokeSchema(Schema):
    """Input payload for revoking a token."""

    jti = fields.String(required=True, validate=validate.Length(min=1, max=255))
    expires_at = ExpiryField(required=True)


class GracePeriodSchema(Schema):
    """Output payload for the configured revocation grace period (seconds)."""

    grace_period = fields.Integer(required=True)


class RevocationStatusSchema(Schema):
    """Response payload exposing a token's revocation state."""

    jti = fields.String(required=True, attribute="token_id")
    revoked = fields.Boolean(required=True)
