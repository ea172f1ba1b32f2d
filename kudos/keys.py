"""Key layout for the kudos keyspace.

Every key starts with a one-byte prefix. Integers are encoded as fixed-width
big-endian uint64 so lexicographic byte order equals numeric order.
"""

from __future__ import annotations

import struct

MODULE_NAME = "kudos"

MAX_UINT64 = 2**64 - 1

BALANCE_PREFIX = b"\x01"
HISTORY_PREFIX = b"\x02"
HISTORY_COUNTER_KEY = b"\x03"
DAILY_QUOTA_PREFIX = b"\x04"

_UINT64 = struct.Struct(">Q")


def encode_uint64(value: int) -> bytes:
    if not 0 <= value <= MAX_UINT64:
        raise ValueError(f"value out of uint64 range: {value}")
    return _UINT64.pack(value)


def decode_uint64(raw: bytes) -> int:
    if len(raw) != _UINT64.size:
        raise ValueError(f"expected {_UINT64.size} bytes for uint64, got {len(raw)}")
    return _UINT64.unpack(raw)[0]


def balance_key(address: str) -> bytes:
    return BALANCE_PREFIX + address.encode("utf-8")


def history_key(history_id: int) -> bytes:
    return HISTORY_PREFIX + encode_uint64(history_id)


def daily_quota_key(address: str) -> bytes:
    return DAILY_QUOTA_PREFIX + address.encode("utf-8")


def address_from_key(prefix: bytes, key: bytes) -> str:
    """Strip *prefix* from an address-suffixed key."""
    return key[len(prefix) :].decode("utf-8")


def prefix_end(prefix: bytes) -> bytes | None:
    """Smallest key greater than every key starting with *prefix*.

    Returns ``None`` when no such key exists (prefix is all 0xFF bytes).
    """
    end = bytearray(prefix)
    while end:
        if end[-1] != 0xFF:
            end[-1] += 1
            return bytes(end)
        end.pop()
    return None


__all__ = [
    "BALANCE_PREFIX",
    "DAILY_QUOTA_PREFIX",
    "HISTORY_COUNTER_KEY",
    "HISTORY_PREFIX",
    "MAX_UINT64",
    "MODULE_NAME",
    "address_from_key",
    "balance_key",
    "daily_quota_key",
    "decode_uint64",
    "encode_uint64",
    "history_key",
    "prefix_end",
]
