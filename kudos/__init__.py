"""Deterministic kudos ledger: balances, transfer history, daily quotas and leaderboards."""

from kudos.config import KudosSettings, load_config
from kudos.context import Context
from kudos.errors import KudosError, StoreError
from kudos.ledger.keeper import Keeper
from kudos.module import KudosModule, create_module

__all__ = [
    "Context",
    "Keeper",
    "KudosError",
    "KudosModule",
    "KudosSettings",
    "StoreError",
    "create_module",
    "load_config",
]
