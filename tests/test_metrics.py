"""Tests for kudos.core.metrics."""

from __future__ import annotations

from kudos.core.metrics import metrics_generate_latest, record_query, record_transfer

from tests.helpers import sample


def test_successful_transfer_counts_minted_amount() -> None:
    ok_before = sample("kudos_transfers_total", {"outcome": "ok"})
    minted_before = sample("kudos_minted_total")

    record_transfer("ok", 12)

    assert sample("kudos_transfers_total", {"outcome": "ok"}) == ok_before + 1
    assert sample("kudos_minted_total") == minted_before + 12


def test_rejection_does_not_mint() -> None:
    minted_before = sample("kudos_minted_total")
    record_transfer("DailyLimitExceededError", 12)
    assert sample("kudos_minted_total") == minted_before


def test_query_counter_and_exposition() -> None:
    record_query("leaderboard")
    output = metrics_generate_latest().decode("utf-8")
    assert 'kudos_queries_total{query="leaderboard"}' in output
