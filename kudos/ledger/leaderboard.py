from __future__ import annotations

from kudos.context import Context
from kudos.errors import InvalidLeaderboardParamsError
from kudos.ledger.balances import get_all_balances
from kudos.models.ledger import LeaderboardEntry


def get_leaderboard(ctx: Context, limit: int) -> list[LeaderboardEntry]:
    """Rank every credited account by balance, highest first.

    Ties break on ascending address so every replica returns the same order.
    ``limit == 0`` returns the full ranking.
    """
    if limit < 0:
        raise InvalidLeaderboardParamsError(f"limit must be non-negative, got {limit}")

    ranked = sorted(get_all_balances(ctx).items(), key=lambda item: (-item[1], item[0]))
    if limit:
        ranked = ranked[:limit]
    return [LeaderboardEntry(address=address, balance=balance) for address, balance in ranked]


__all__ = ["get_leaderboard"]
