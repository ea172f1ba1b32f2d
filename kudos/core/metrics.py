"""Prometheus metrics for the kudos ledger.

Metrics are observational only. Nothing in the state machine reads them, so
they cannot make replicas diverge.
"""

from __future__ import annotations

from prometheus_client import Counter, generate_latest

TRANSFERS_TOTAL = Counter(
    "kudos_transfers_total",
    "Send-kudos messages processed, by outcome",
    ["outcome"],
)
KUDOS_MINTED_TOTAL = Counter("kudos_minted_total", "Kudos credited to recipients")
QUERIES_TOTAL = Counter("kudos_queries_total", "Read-only queries served", ["query"])

metrics_generate_latest = generate_latest


def record_transfer(outcome: str, amount: int = 0) -> None:
    """Count one transfer attempt; *outcome* is ``ok`` or an error class name."""
    TRANSFERS_TOTAL.labels(outcome=outcome).inc()
    if outcome == "ok" and amount > 0:
        KUDOS_MINTED_TOTAL.inc(amount)


def record_query(query: str) -> None:
    QUERIES_TOTAL.labels(query=query).inc()


__all__ = [
    "KUDOS_MINTED_TOTAL",
    "QUERIES_TOTAL",
    "TRANSFERS_TOTAL",
    "metrics_generate_latest",
    "record_query",
    "record_transfer",
]
