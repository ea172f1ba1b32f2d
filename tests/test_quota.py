"""Tests for the rolling daily quota window."""

from __future__ import annotations

import pytest
from kudos.context import Context
from kudos.keys import daily_quota_key
from kudos.ledger.quota import DAILY_QUOTA_WINDOW_SECONDS, DEFAULT_DAILY_LIMIT, QuotaTracker
from kudos.store.memory import MemoryKVStore

from tests.helpers import ALICE, BOB, DAY, GENESIS_TIME


@pytest.fixture
def tracker() -> QuotaTracker:
    return QuotaTracker()


def test_defaults() -> None:
    assert DEFAULT_DAILY_LIMIT == 100
    assert DAILY_QUOTA_WINDOW_SECONDS == DAY


def test_fresh_sender_has_full_quota(tracker: QuotaTracker, ctx: Context) -> None:
    status = tracker.get_daily_quota(ctx, ALICE)
    assert (status.used, status.remaining) == (0, 100)
    assert status.window_start is None
    assert status.resets_at is None


def test_reserve_opens_window_at_now(tracker: QuotaTracker, ctx: Context) -> None:
    assert tracker.check_and_reserve(ctx, ALICE, 30) == (True, 70)

    status = tracker.get_daily_quota(ctx, ALICE)
    assert status.used == 30
    assert status.remaining == 70
    assert status.window_start == GENESIS_TIME
    assert status.resets_at == GENESIS_TIME + DAY


def test_reservations_accumulate_within_window(tracker: QuotaTracker, ctx: Context) -> None:
    tracker.check_and_reserve(ctx, ALICE, 30)
    later = ctx.with_block_time(GENESIS_TIME + DAY - 1)
    assert tracker.check_and_reserve(later, ALICE, 70) == (True, 0)
    # Window start does not slide with later sends.
    assert tracker.get_daily_quota(later, ALICE).window_start == GENESIS_TIME


def test_exact_limit_then_any_more_is_denied(tracker: QuotaTracker, ctx: Context) -> None:
    assert tracker.check_and_reserve(ctx, ALICE, 100) == (True, 0)
    assert tracker.check_and_reserve(ctx, ALICE, 1) == (False, 0)


def test_single_request_over_limit_is_denied(
    tracker: QuotaTracker, ctx: Context, store: MemoryKVStore
) -> None:
    assert tracker.check_and_reserve(ctx, ALICE, 101) == (False, 100)
    assert store.get(daily_quota_key(ALICE)) is None


def test_denied_reservation_writes_nothing(
    tracker: QuotaTracker, ctx: Context, store: MemoryKVStore
) -> None:
    tracker.check_and_reserve(ctx, ALICE, 60)
    before = store.get(daily_quota_key(ALICE))

    assert tracker.check_and_reserve(ctx, ALICE, 41) == (False, 40)

    assert store.get(daily_quota_key(ALICE)) == before


def test_window_resets_at_boundary_without_a_write(
    tracker: QuotaTracker, ctx: Context, store: MemoryKVStore
) -> None:
    tracker.check_and_reserve(ctx, ALICE, 100)
    before = store.get(daily_quota_key(ALICE))

    just_before = ctx.with_block_time(GENESIS_TIME + DAY - 1)
    assert tracker.get_daily_quota(just_before, ALICE).remaining == 0

    boundary = ctx.with_block_time(GENESIS_TIME + DAY)
    status = tracker.get_daily_quota(boundary, ALICE)
    assert (status.used, status.remaining) == (0, 100)
    assert store.get(daily_quota_key(ALICE)) == before


def test_expired_window_restarts_at_current_time(tracker: QuotaTracker, ctx: Context) -> None:
    tracker.check_and_reserve(ctx, ALICE, 100)
    later = ctx.with_block_time(GENESIS_TIME + DAY + 3600)

    assert tracker.check_and_reserve(later, ALICE, 100) == (True, 0)
    status = tracker.get_daily_quota(later, ALICE)
    assert status.window_start == GENESIS_TIME + DAY + 3600
    assert status.used == 100


def test_quota_is_per_sender(tracker: QuotaTracker, ctx: Context) -> None:
    tracker.check_and_reserve(ctx, ALICE, 100)
    assert tracker.check_and_reserve(ctx, BOB, 100) == (True, 0)


def test_custom_limits(ctx: Context) -> None:
    tracker = QuotaTracker(daily_limit=5, window_seconds=60)
    assert tracker.check_and_reserve(ctx, ALICE, 5) == (True, 0)
    assert tracker.check_and_reserve(ctx, ALICE, 1)[0] is False
    assert tracker.check_and_reserve(ctx.with_block_time(GENESIS_TIME + 60), ALICE, 5) == (True, 0)


def test_lowered_limit_reports_no_negative_remaining(ctx: Context) -> None:
    QuotaTracker(daily_limit=100).check_and_reserve(ctx, ALICE, 80)
    tighter = QuotaTracker(daily_limit=50)
    assert tighter.get_daily_quota(ctx, ALICE).remaining == 0
    assert tighter.check_and_reserve(ctx, ALICE, 1) == (False, 0)


@pytest.mark.parametrize(("daily_limit", "window_seconds"), [(0, 60), (10, 0)])
def test_rejects_non_positive_configuration(daily_limit: int, window_seconds: int) -> None:
    with pytest.raises(ValueError):
        QuotaTracker(daily_limit=daily_limit, window_seconds=window_seconds)
