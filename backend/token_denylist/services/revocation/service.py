# token_denylist/services/revocation/service.py
from __future__ import annotations

import logging

from token_denylist.services._shared.errors import NotFoundError
from token_denylist.services._shared.ports.clock import Clock, SystemClock, Timestamp
from token_denylist.services._shared.ports.ttl_store import TTLStore
from token_denylist.services.revocation.dto import RevocationEntry

log = logging.getLogger(__name__)

# Added to the token's remaining whole minutes; absorbs minute truncation and
# clock skew between issuer and store.
TTL_SAFETY_MARGIN_MINUTES = 1


class RevocationList:
    """
    Revocation list (denylist) for bearer tokens.

    Records that a token, identified by its ``jti``, must be rejected and
    answers whether it is currently revoked. An entry becomes effective at
    ``token_expiry + grace_period``. With no grace period it is kept in the
    store only until shortly after the token's natural expiry; a grace period
    extends that retention by twice its length (pending, then revoked).

    The instance holds no per-token state; storage and time are injected.
    """

    def __init__(
        self,
        store: TTLStore,
        *,
        clock: Clock | None = None,
        grace_period: int = 0,
    ) -> None:
        """
        :param store: TTL key-value store holding revocation entries.
        :param clock: Time source (defaults to the UTC wall clock).
        :param grace_period: Seconds added to the token expiry before the
            revocation takes effect.
        """
        self.store = store
        self.clock = clock or SystemClock()
        self._grace_period = self._coerce_grace(grace_period)

    # ------------------------------------------------------------------ #
    # Configuration
    # ------------------------------------------------------------------ #

    @property
    def grace_period(self) -> int:
        return self._grace_period

    def set_grace_period(self, seconds: int) -> RevocationList:
        """
        Change the grace period used by subsequent :meth:`revoke` calls.

        Existing entries keep the ``effective_at`` computed when they were
        written.

        :raises ValueError: If ``seconds`` is negative.
        """
        self._grace_period = self._coerce_grace(seconds)
        log.info("revocation.grace_period", extra={"grace_period": self._grace_period})
        return self

    @staticmethod
    def _coerce_grace(seconds: int) -> int:
        value = int(seconds)
        if value < 0:
            raise ValueError(f"grace period must be >= 0 seconds, got {value}")
        return value

    # ------------------------------------------------------------------ #
    # Operations
    # ------------------------------------------------------------------ #

    def revoke(self, token_id: str, token_expiry: Timestamp) -> bool:
        """
        Add a token to the revocation list.

        :param token_id: Token unique identifier (``jti``).
        :param token_expiry: Token's declared expiry (``exp``).
        :returns: ``False`` when the token has already expired (nothing is
            written), ``True`` once the entry is stored.
        :raises StoreError: If the store rejects the write.
        """
        self._ensure_id(token_id)
        now = self.clock.now()

        # an expired token is unusable anyway
        if token_expiry <= now:
            log.debug("revocation.skip_expired", extra={"token_id": token_id})
            return False

        # keep the entry through the grace window, then as long again once revoked
        grace_minutes = -(-self._grace_period // 60)
        ttl_minutes = (
            token_expiry.diff_in_minutes(now) + TTL_SAFETY_MARGIN_MINUTES + 2 * grace_minutes
        )
        entry = RevocationEntry(
            token_id=token_id,
            effective_at=token_expiry.add_seconds(self._grace_period),
        )
        self.store.set(token_id, entry.to_store(), ttl_minutes)
        log.debug(
            "revocation.revoke",
            extra={
                "token_id": token_id,
                "ttl_minutes": ttl_minutes,
                "effective_at": entry.effective_at.epoch,
            },
        )
        return True

    def is_revoked(self, token_id: str) -> bool:
        """
        Determine whether the token is currently revoked.

        A stored entry whose ``effective_at`` is still in the future is inside
        its grace window and does not count as revoked yet.

        :raises StoreError: If the store cannot be read.
        """
        if not self.store.has(token_id):
            return False

        try:
            entry = RevocationEntry.from_store(token_id, self.store.get(token_id))
        except NotFoundError:
            # expired between has() and get()
            return False

        if self.clock.is_future(entry.effective_at):
            return False

        return True

    def unrevoke(self, token_id: str) -> bool:
        """
        Remove a token from the revocation list.

        :returns: Whether an entry existed.
        :raises StoreError: If the store rejects the delete.
        """
        removed = self.store.delete(token_id)
        log.info("revocation.unrevoke", extra={"token_id": token_id, "removed": removed})
        return removed

    def clear(self) -> bool:
        """Remove every entry from the revocation list."""
        self.store.clear()
        log.info("revocation.clear")
        return True

    @staticmethod
    def _ensure_id(token_id: str) -> None:
        if not isinstance(token_id, str) or not token_id:
            raise ValueError("token id must be a non-empty string")
