"""Keeper: the ledger's state-transition surface.

The keeper holds configuration only. All state lives in ``ctx.store`` and is
re-read on every call, so two keepers over the same store always agree.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from kudos.config import KudosSettings
from kudos.context import Context
from kudos.errors import (
    CommentTooLongError,
    DailyLimitExceededError,
    InvalidAmountError,
    SameAddressError,
)
from kudos.events import Event
from kudos.keys import MODULE_NAME
from kudos.ledger import balances, history, leaderboard
from kudos.ledger.quota import DAILY_QUOTA_WINDOW_SECONDS, DEFAULT_DAILY_LIMIT, QuotaTracker
from kudos.models.ledger import HistoryEntry, LeaderboardEntry, QuotaStatus

logger = logging.getLogger(__name__)

MAX_COMMENT_LENGTH = 140


class Keeper:
    def __init__(
        self,
        *,
        daily_limit: int = DEFAULT_DAILY_LIMIT,
        window_seconds: int = DAILY_QUOTA_WINDOW_SECONDS,
        max_comment_length: int = MAX_COMMENT_LENGTH,
    ) -> None:
        self.quota = QuotaTracker(daily_limit=daily_limit, window_seconds=window_seconds)
        self.max_comment_length = max_comment_length

    @classmethod
    def from_settings(cls, settings: KudosSettings) -> Keeper:
        return cls(
            daily_limit=settings.quota.daily_limit,
            window_seconds=settings.quota.window_seconds,
            max_comment_length=settings.messages.max_comment_length,
        )

    # Balances

    def get_kudos_balance(self, ctx: Context, address: str) -> int:
        return balances.get_balance(ctx, address)

    def set_kudos_balance(self, ctx: Context, address: str, balance: int) -> None:
        balances.set_balance(ctx, address, balance)

    def add_kudos(self, ctx: Context, address: str, amount: int) -> int:
        return balances.add_kudos(ctx, address, amount)

    def get_all_kudos_balances(self, ctx: Context) -> dict[str, int]:
        return balances.get_all_balances(ctx)

    # History

    def get_history_counter(self, ctx: Context) -> int:
        return history.get_history_counter(ctx)

    def set_history_counter(self, ctx: Context, counter: int) -> None:
        history.set_history_counter(ctx, counter)

    def add_kudos_history(
        self,
        ctx: Context,
        from_address: str,
        to_address: str,
        amount: int,
        comment: str,
    ) -> HistoryEntry:
        return history.add_kudos_history(ctx, from_address, to_address, amount, comment)

    def get_history_entry(self, ctx: Context, history_id: int) -> HistoryEntry | None:
        return history.get_history_entry(ctx, history_id)

    def iter_history(self, ctx: Context, start_id: int = 1) -> Iterator[HistoryEntry]:
        return history.iter_history(ctx, start_id)

    # Quota

    def check_and_reserve(self, ctx: Context, sender: str, amount: int) -> tuple[bool, int]:
        return self.quota.check_and_reserve(ctx, sender, amount)

    def get_daily_quota(self, ctx: Context, sender: str) -> QuotaStatus:
        return self.quota.get_daily_quota(ctx, sender)

    # Leaderboard

    def get_leaderboard(self, ctx: Context, limit: int) -> list[LeaderboardEntry]:
        return leaderboard.get_leaderboard(ctx, limit)

    # Transfers

    def send_kudos(
        self,
        ctx: Context,
        from_address: str,
        to_address: str,
        amount: int,
        comment: str = "",
    ) -> HistoryEntry:
        """Credit *amount* kudos to *to_address* on behalf of *from_address*.

        Checks run in a fixed order and the first failure is raised before
        anything is written. A credit that would overflow the recipient's
        balance raises ``StoreError`` ahead of the quota check. The sender's
        balance is never debited: kudos are minted on receipt and only the
        sender's daily quota is consumed.
        """
        if from_address == to_address:
            raise SameAddressError()
        if amount <= 0:
            raise InvalidAmountError()
        if len(comment) > self.max_comment_length:
            raise CommentTooLongError(f"comment exceeds {self.max_comment_length} characters")

        # Overflow is fatal and must surface before the quota record is written.
        new_balance = balances.credited_balance(ctx, to_address, amount)

        ok, remaining = self.quota.check_and_reserve(ctx, from_address, amount)
        if not ok:
            raise DailyLimitExceededError(
                f"daily kudos limit exceeded: requested {amount}, remaining {remaining}"
            )

        balances.set_balance(ctx, to_address, new_balance)
        entry = history.add_kudos_history(ctx, from_address, to_address, amount, comment)

        ctx.events.emit(
            Event(
                type=MODULE_NAME,
                attributes=(
                    ("action", "send_kudos"),
                    ("from", from_address),
                    ("to", to_address),
                    ("amount", str(amount)),
                    ("history_id", str(entry.id)),
                ),
            )
        )
        logger.info(
            "Sent %d kudos from %s to %s (history_id=%d, quota_remaining=%d)",
            amount,
            from_address,
            to_address,
            entry.id,
            remaining,
        )
        return entry


__all__ = ["MAX_COMMENT_LENGTH", "Keeper"]
