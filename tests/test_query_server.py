from __future__ import annotations

import pytest
from kudos.context import Context
from kudos.errors import InvalidAddressError, InvalidLeaderboardParamsError
from kudos.ledger.keeper import Keeper
from kudos.ledger.query_server import QueryServer
from kudos.models.messages import QueryKudosBalanceRequest, QueryKudosLeaderboardRequest

from tests.helpers import ALICE, BOB, DAY, GENESIS_TIME, sample


@pytest.fixture
def server(keeper: Keeper) -> QueryServer:
    return QueryServer(keeper)


class TestKudosBalance:
    def test_returns_balance(self, server: QueryServer, keeper: Keeper, ctx: Context) -> None:
        keeper.add_kudos(ctx, ALICE, 12)
        response = server.kudos_balance(ctx, QueryKudosBalanceRequest(address=ALICE))
        assert response.balance == 12

    def test_unknown_address_is_zero(self, server: QueryServer, ctx: Context) -> None:
        assert server.kudos_balance(ctx, QueryKudosBalanceRequest(address=BOB)).balance == 0

    def test_missing_request(self, server: QueryServer, ctx: Context) -> None:
        with pytest.raises(InvalidAddressError):
            server.kudos_balance(ctx, None)

    def test_malformed_address(self, server: QueryServer, ctx: Context) -> None:
        with pytest.raises(InvalidAddressError):
            server.kudos_balance(ctx, QueryKudosBalanceRequest(address="not-an-address"))

    def test_counts_query(self, server: QueryServer, ctx: Context) -> None:
        before = sample("kudos_queries_total", {"query": "balance"})
        server.kudos_balance(ctx, QueryKudosBalanceRequest(address=ALICE))
        assert sample("kudos_queries_total", {"query": "balance"}) == before + 1


class TestKudosLeaderboard:
    def test_zero_limit_uses_default(self, keeper: Keeper, ctx: Context) -> None:
        for i in range(12):
            keeper.set_kudos_balance(ctx, f"cosmos1user{i:02d}", i + 1)

        response = QueryServer(keeper).kudos_leaderboard(ctx, QueryKudosLeaderboardRequest())

        assert len(response.entries) == 10
        assert response.entries[0].address == "cosmos1user11"

    def test_configured_default(self, keeper: Keeper, ctx: Context) -> None:
        for i in range(5):
            keeper.set_kudos_balance(ctx, f"cosmos1user{i}", i + 1)
        server = QueryServer(keeper, default_leaderboard_limit=3)
        assert len(server.kudos_leaderboard(ctx, QueryKudosLeaderboardRequest(limit=0)).entries) == 3

    def test_explicit_limit(self, server: QueryServer, keeper: Keeper, ctx: Context) -> None:
        keeper.set_kudos_balance(ctx, ALICE, 1)
        keeper.set_kudos_balance(ctx, BOB, 2)
        entries = server.kudos_leaderboard(ctx, QueryKudosLeaderboardRequest(limit=1)).entries
        assert [(e.address, e.balance) for e in entries] == [(BOB, 2)]

    def test_missing_request(self, server: QueryServer, ctx: Context) -> None:
        with pytest.raises(InvalidLeaderboardParamsError):
            server.kudos_leaderboard(ctx, None)


class TestDailyQuota:
    def test_reports_projection(self, server: QueryServer, keeper: Keeper, ctx: Context) -> None:
        keeper.send_kudos(ctx, ALICE, BOB, 40)
        status = server.daily_quota(ctx, ALICE)
        assert (status.used, status.remaining) == (40, 60)

        reset = server.daily_quota(ctx.with_block_time(GENESIS_TIME + DAY), ALICE)
        assert (reset.used, reset.remaining) == (0, 100)

    def test_malformed_address(self, server: QueryServer, ctx: Context) -> None:
        with pytest.raises(InvalidAddressError):
            server.daily_quota(ctx, "bogus")
