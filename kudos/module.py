"""Host-facing module: wires the store, keeper and servers together.

``deliver`` is the only path that mutates committed state. It applies one
message inside a ``CacheKVStore`` branch and flushes the branch only when the
message succeeds, so a rejected or aborted message leaves no writes behind.
Deliveries and queries share one lock, so a query never observes a branch
flush half-applied and never reads the store while a delivery writes to it.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from kudos.config import KudosSettings, load_config
from kudos.context import Context
from kudos.core.logging import setup_logging
from kudos.errors import (
    InvalidAddressError,
    InvalidLeaderboardParamsError,
    KudosError,
    StoreError,
)
from kudos.events import Event, EventManager, EventSubscriber
from kudos.ledger.keeper import Keeper
from kudos.ledger.msg_server import MsgServer
from kudos.ledger.query_server import QueryServer
from kudos.models.ledger import GenesisState, QuotaStatus
from kudos.models.messages import (
    MsgSendKudos,
    MsgSendKudosResponse,
    QueryKudosBalanceRequest,
    QueryKudosLeaderboardRequest,
    QueryKudosLeaderboardResponse,
)
from kudos.persistence.sqlite_store import SQLiteKVStore
from kudos.protocols.store import CommittableStore, KVStore
from kudos.store.cache import CacheKVStore
from kudos.store.memory import MemoryKVStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeliverResult:
    response: MsgSendKudosResponse
    events: tuple[Event, ...]


class KudosModule:
    def __init__(self, store: KVStore, settings: KudosSettings | None = None) -> None:
        self.settings = settings or KudosSettings()
        self.store = store
        self.keeper = Keeper.from_settings(self.settings)
        self.msg_server = MsgServer(
            self.keeper,
            address_prefix=self.settings.messages.address_prefix,
        )
        self.query_server = QueryServer(
            self.keeper,
            address_prefix=self.settings.messages.address_prefix,
            default_leaderboard_limit=self.settings.leaderboard.default_limit,
        )
        self._lock = threading.Lock()
        self._subscribers: list[EventSubscriber] = []

    @classmethod
    def from_settings(cls, settings: KudosSettings) -> KudosModule:
        store: KVStore
        if settings.storage.db_path is not None:
            store = SQLiteKVStore(settings.storage.db_path)
        else:
            store = MemoryKVStore()
        return cls(store, settings)

    def subscribe(self, subscriber: EventSubscriber) -> None:
        """Observe events of committed messages, in emission order."""
        self._subscribers.append(subscriber)

    def new_context(self, block_time: int = 0) -> Context:
        return Context(store=self.store, block_time=block_time)

    # Genesis

    @staticmethod
    def default_genesis() -> GenesisState:
        return GenesisState()

    def init_genesis(self, ctx: Context, state: GenesisState) -> None:
        state.validate_genesis()

    def export_genesis(self, ctx: Context) -> GenesisState:
        return GenesisState()

    # Transactions

    def deliver(self, msg: MsgSendKudos, block_time: int) -> DeliverResult:
        with self._lock:
            branch = CacheKVStore(self.store)
            events = EventManager()
            ctx = Context(store=branch, block_time=block_time, events=events)
            try:
                response = self.msg_server.send_kudos(ctx, msg)
            except KudosError:
                branch.discard()
                raise

            try:
                branch.write()
                if isinstance(self.store, CommittableStore):
                    self.store.commit()
            except StoreError:
                logger.exception("Commit failed at block_time=%d; rolling back", block_time)
                if isinstance(self.store, CommittableStore):
                    self.store.rollback()
                raise

            committed = events.events

        for event in committed:
            for subscriber in self._subscribers:
                subscriber(event)
        return DeliverResult(response=response, events=committed)

    # Queries

    def kudos_balance(self, address: str) -> int:
        try:
            request = QueryKudosBalanceRequest(address=address)
        except ValidationError as exc:
            raise InvalidAddressError(f"invalid address: {address!r}") from exc
        with self._lock:
            return self.query_server.kudos_balance(self.new_context(), request).balance

    def kudos_leaderboard(self, limit: int = 0) -> QueryKudosLeaderboardResponse:
        try:
            request = QueryKudosLeaderboardRequest(limit=limit)
        except ValidationError as exc:
            raise InvalidLeaderboardParamsError(f"invalid leaderboard limit: {limit!r}") from exc
        with self._lock:
            return self.query_server.kudos_leaderboard(self.new_context(), request)

    def daily_quota(self, address: str, block_time: int) -> QuotaStatus:
        with self._lock:
            return self.query_server.daily_quota(self.new_context(block_time), address)


def create_module(config_path: str | Path = "config/kudos.yaml") -> KudosModule:
    """Load settings, configure logging and build a ready-to-use module."""
    settings = load_config(config_path)
    setup_logging(settings.logging.level, json_output=settings.logging.json_output)
    module = KudosModule.from_settings(settings)
    logger.info(
        "Kudos module ready (daily_limit=%d, window_seconds=%d, storage=%s)",
        settings.quota.daily_limit,
        settings.quota.window_seconds,
        settings.storage.db_path or "memory",
    )
    return module


__all__ = ["DeliverResult", "KudosModule", "create_module"]
