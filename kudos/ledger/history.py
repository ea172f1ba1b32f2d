"""Append-only transfer history keyed by a global counter.

Ids start at 1. Keys use the big-endian id so a prefix scan returns entries
in id order.
"""

from __future__ import annotations

from collections.abc import Iterator

from kudos.context import Context
from kudos.keys import HISTORY_COUNTER_KEY, HISTORY_PREFIX, MAX_UINT64, history_key
from kudos.ledger.storage import decode_model, get_model, get_uint64, set_model, set_uint64
from kudos.models.ledger import HistoryEntry


def get_history_counter(ctx: Context) -> int:
    return get_uint64(ctx.store, HISTORY_COUNTER_KEY)


def set_history_counter(ctx: Context, counter: int) -> None:
    set_uint64(ctx.store, HISTORY_COUNTER_KEY, counter)


def add_kudos_history(
    ctx: Context,
    from_address: str,
    to_address: str,
    amount: int,
    comment: str,
) -> HistoryEntry:
    counter = get_history_counter(ctx) + 1
    entry = HistoryEntry(
        id=counter,
        from_address=from_address,
        to_address=to_address,
        amount=amount,
        comment=comment,
        timestamp=ctx.block_time,
    )
    set_model(ctx.store, history_key(counter), entry)
    set_history_counter(ctx, counter)
    return entry


def get_history_entry(ctx: Context, history_id: int) -> HistoryEntry | None:
    if history_id < 1:
        return None
    return get_model(ctx.store, history_key(history_id), HistoryEntry)


def iter_history(ctx: Context, start_id: int = 1) -> Iterator[HistoryEntry]:
    """Yield history entries with ``id >= start_id`` in ascending id order.

    The scan starts at ``history_key(start_id)``; earlier entries are never read.
    """
    if start_id > MAX_UINT64:
        return
    start = history_key(start_id) if start_id > 1 else None
    for key, raw in ctx.store.iterate(HISTORY_PREFIX, start=start):
        yield decode_model(key, raw, HistoryEntry)


__all__ = [
    "add_kudos_history",
    "get_history_counter",
    "get_history_entry",
    "iter_history",
    "set_history_counter",
]
