"""Token revocation list service."""

from __future__ import annotations

from .dto import RevocationEntry, RevocationStatus
from .service import TTL_SAFETY_MARGIN_MINUTES, RevocationList

__all__ = ["RevocationList", "RevocationEntry", "RevocationStatus", "TTL_SAFETY_MARGIN_MINUTES"]
