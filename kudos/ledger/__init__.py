"""Ledger state machine: balances, history, quotas, leaderboard and the keeper that composes them."""

from kudos.ledger.keeper import Keeper
from kudos.ledger.msg_server import MsgServer
from kudos.ledger.query_server import QueryServer
from kudos.ledger.quota import QuotaTracker

__all__ = ["Keeper", "MsgServer", "QueryServer", "QuotaTracker"]
