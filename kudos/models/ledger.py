from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from kudos.keys import MAX_UINT64


class HistoryEntry(BaseModel):
    """One completed transfer. Written once, never updated."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1, le=MAX_UINT64)
    from_address: str
    to_address: str
    amount: int = Field(ge=1, le=MAX_UINT64)
    comment: str = ""
    timestamp: int


class DailyQuota(BaseModel):
    """Persisted per-sender usage inside the current window."""

    model_config = ConfigDict(frozen=True)

    window_start: int
    used: int = Field(ge=0, le=MAX_UINT64)


class QuotaStatus(BaseModel):
    """Read-only projection of a sender's quota at a given logical time.

    ``window_start`` and ``resets_at`` are ``None`` when the sender has no
    active window, i.e. the next send opens a fresh one.
    """

    used: int
    remaining: int
    window_start: int | None = None
    resets_at: int | None = None


class LeaderboardEntry(BaseModel):
    address: str
    balance: int


class GenesisState(BaseModel):
    """Initial module state. Carries no fields yet."""

    model_config = ConfigDict(extra="forbid")

    def validate_genesis(self) -> None:
        return None


__all__ = [
    "DailyQuota",
    "GenesisState",
    "HistoryEntry",
    "LeaderboardEntry",
    "QuotaStatus",
]
