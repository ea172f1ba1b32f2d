"""Shared test helpers."""

from __future__ import annotations

from prometheus_client import REGISTRY

GENESIS_TIME = 1_700_000_000
DAY = 60 * 60 * 24

ALICE = "cosmos1alice"
BOB = "cosmos1bob"
CAROL = "cosmos1carol"
DAVE = "cosmos1dave"


def sample(name: str, labels: dict[str, str] | None = None) -> float:
    """Current value of a Prometheus sample, 0.0 when it was never touched."""
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0
