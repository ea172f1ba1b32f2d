"""Per-call execution context handed to every keeper operation.

The context is the only channel through which the ledger sees the outside
world: the store to read and write, the host's logical block time, and the
event sink. Nothing here reads a clock.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from kudos.events import EventManager
from kudos.protocols.store import KVStore


@dataclass(frozen=True, slots=True)
class Context:
    store: KVStore
    block_time: int = 0
    events: EventManager = field(default_factory=EventManager)

    def with_store(self, store: KVStore) -> Context:
        return replace(self, store=store)

    def with_block_time(self, block_time: int) -> Context:
        return replace(self, block_time=block_time)

    def with_events(self, events: EventManager) -> Context:
        return replace(self, events=events)


__all__ = ["Context"]
