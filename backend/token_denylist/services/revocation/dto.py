# token_denylist/services/revocation/dto.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from token_denylist.services._shared.ports.clock import Timestamp

EFFECTIVE_AT_FIELD = "effective_at"


@dataclass(frozen=True, slots=True)
class RevocationEntry:
    """
    Value stored for a revoked token.

    :param token_id: Token unique identifier (``jti``); used as the store key.
    :type token_id: str
    :param effective_at: Instant from which the token counts as revoked
        (token expiry plus the grace period active at revocation time).
    :type effective_at: Timestamp
    """

    token_id: str
    effective_at: Timestamp

    def to_store(self) -> dict[str, Any]:
        return {EFFECTIVE_AT_FIELD: self.effective_at.epoch}

    @classmethod
    def from_store(cls, token_id: str, value: dict[str, Any]) -> RevocationEntry:
        return cls(token_id=token_id, effective_at=Timestamp.from_epoch(value[EFFECTIVE_AT_FIELD]))


@dataclass(frozen=True, slots=True)
class RevocationStatus:
    """
    Output DTO describing a token's revocation state.

    :param token_id: Token unique identifier.
    :param revoked: Whether the token must be rejected now.
    """

    token_id: str
    revoked: bool
