"""Rolling per-sender daily quota.

Each sender owns at most one window ``[window_start, window_start + W)``.
A sender with no record, or whose window has run out (``now >= window_start
+ W``), is treated as starting a fresh window at ``now``. Only successful
reservations are persisted; a denied one leaves the record as it was.

``now`` always comes from ``ctx.block_time`` so the window boundaries are the
same on every replica.
"""

from __future__ import annotations

import logging

from kudos.context import Context
from kudos.keys import daily_quota_key
from kudos.ledger.storage import get_model, set_model
from kudos.models.ledger import DailyQuota, QuotaStatus

logger = logging.getLogger(__name__)

DEFAULT_DAILY_LIMIT = 100
DAILY_QUOTA_WINDOW_SECONDS = 60 * 60 * 24


class QuotaTracker:
    def __init__(
        self,
        daily_limit: int = DEFAULT_DAILY_LIMIT,
        window_seconds: int = DAILY_QUOTA_WINDOW_SECONDS,
    ) -> None:
        if daily_limit < 1:
            raise ValueError("daily_limit must be positive")
        if window_seconds < 1:
            raise ValueError("window_seconds must be positive")
        self.daily_limit = daily_limit
        self.window_seconds = window_seconds

    def _active_record(self, ctx: Context, sender: str) -> DailyQuota | None:
        record = get_model(ctx.store, daily_quota_key(sender), DailyQuota)
        if record is None:
            return None
        if ctx.block_time >= record.window_start + self.window_seconds:
            return None
        return record

    def check_and_reserve(self, ctx: Context, sender: str, amount: int) -> tuple[bool, int]:
        """Reserve *amount* from the sender's window.

        Returns ``(ok, remaining)``. On success the record is persisted and
        ``remaining`` is what is left after the reservation; on denial nothing
        is written and ``remaining`` is what was available.
        """
        record = self._active_record(ctx, sender)
        if record is None:
            window_start, used = ctx.block_time, 0
        else:
            window_start, used = record.window_start, record.used

        available = max(0, self.daily_limit - used)
        if amount > available:
            logger.debug(
                "Quota denied for %s: requested=%d available=%d",
                sender,
                amount,
                available,
            )
            return False, available

        used += amount
        set_model(ctx.store, daily_quota_key(sender), DailyQuota(window_start=window_start, used=used))
        return True, self.daily_limit - used

    def get_daily_quota(self, ctx: Context, sender: str) -> QuotaStatus:
        record = self._active_record(ctx, sender)
        if record is None:
            return QuotaStatus(used=0, remaining=self.daily_limit)
        return QuotaStatus(
            used=record.used,
            remaining=max(0, self.daily_limit - record.used),
            window_start=record.window_start,
            resets_at=record.window_start + self.window_seconds,
        )


__all__ = ["DAILY_QUOTA_WINDOW_SECONDS", "DEFAULT_DAILY_LIMIT", "QuotaTracker"]
