"""Balance store: account address to unsigned kudos balance."""

from __future__ import annotations

from kudos.context import Context
from kudos.errors import StoreError
from kudos.keys import BALANCE_PREFIX, MAX_UINT64, address_from_key, balance_key, decode_uint64
from kudos.ledger.storage import get_uint64, set_uint64


def get_balance(ctx: Context, address: str) -> int:
    return get_uint64(ctx.store, balance_key(address))


def set_balance(ctx: Context, address: str, balance: int) -> None:
    set_uint64(ctx.store, balance_key(address), balance)


def credited_balance(ctx: Context, address: str, amount: int) -> int:
    """Return the balance *address* would hold after receiving *amount*.

    Nothing is written. A result past the uint64 range is a ``StoreError``.
    """
    new_balance = get_balance(ctx, address) + amount
    if new_balance > MAX_UINT64:
        raise StoreError(f"balance overflow for {address}: {new_balance} exceeds uint64")
    return new_balance


def add_kudos(ctx: Context, address: str, amount: int) -> int:
    """Credit *amount* to *address* and return the new balance.

    Read-then-write; callers rely on the host applying messages one at a time.
    """
    new_balance = credited_balance(ctx, address, amount)
    set_balance(ctx, address, new_balance)
    return new_balance


def get_all_balances(ctx: Context) -> dict[str, int]:
    balances: dict[str, int] = {}
    for key, raw in ctx.store.iterate(BALANCE_PREFIX):
        try:
            balances[address_from_key(BALANCE_PREFIX, key)] = decode_uint64(raw)
        except ValueError as exc:
            raise StoreError(f"corrupt balance at key {key.hex()}: {exc}") from exc
    return balances


__all__ = ["add_kudos", "credited_balance", "get_all_balances", "get_balance", "set_balance"]
