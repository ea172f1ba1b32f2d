"""Query server: read-only entry points. Never touches the quota record."""

from __future__ import annotations

from kudos.context import Context
from kudos.core.metrics import record_query
from kudos.errors import InvalidAddressError, InvalidLeaderboardParamsError
from kudos.ledger.keeper import Keeper
from kudos.models.ledger import QuotaStatus
from kudos.models.messages import (
    QueryKudosBalanceRequest,
    QueryKudosBalanceResponse,
    QueryKudosLeaderboardRequest,
    QueryKudosLeaderboardResponse,
    validate_address,
)

DEFAULT_LEADERBOARD_LIMIT = 10


class QueryServer:
    def __init__(
        self,
        keeper: Keeper,
        *,
        address_prefix: str = "cosmos",
        default_leaderboard_limit: int = DEFAULT_LEADERBOARD_LIMIT,
    ) -> None:
        self.keeper = keeper
        self.address_prefix = address_prefix
        self.default_leaderboard_limit = default_leaderboard_limit

    def kudos_balance(
        self, ctx: Context, request: QueryKudosBalanceRequest | None
    ) -> QueryKudosBalanceResponse:
        if not isinstance(request, QueryKudosBalanceRequest):
            raise InvalidAddressError("empty balance request")
        validate_address(request.address, self.address_prefix)
        record_query("balance")
        return QueryKudosBalanceResponse(balance=self.keeper.get_kudos_balance(ctx, request.address))

    def kudos_leaderboard(
        self, ctx: Context, request: QueryKudosLeaderboardRequest | None
    ) -> QueryKudosLeaderboardResponse:
        if not isinstance(request, QueryKudosLeaderboardRequest):
            raise InvalidLeaderboardParamsError("empty leaderboard request")
        limit = request.limit or self.default_leaderboard_limit
        record_query("leaderboard")
        return QueryKudosLeaderboardResponse(entries=self.keeper.get_leaderboard(ctx, limit))

    def daily_quota(self, ctx: Context, address: str) -> QuotaStatus:
        validate_address(address, self.address_prefix)
        record_query("daily_quota")
        return self.keeper.get_daily_quota(ctx, address)


__all__ = ["DEFAULT_LEADERBOARD_LIMIT", "QueryServer"]
