"""Sorted in-memory key-value store."""

from __future__ import annotations

import bisect
from collections.abc import Iterator

from kudos.keys import prefix_end


class MemoryKVStore:
    def __init__(self) -> None:
        self._data: dict[bytes, bytes] = {}
        self._keys: list[bytes] = []

    def get(self, key: bytes) -> bytes | None:
        return self._data.get(key)

    def has(self, key: bytes) -> bool:
        return key in self._data

    def set(self, key: bytes, value: bytes) -> None:
        if not isinstance(key, bytes) or not isinstance(value, bytes):
            raise TypeError("keys and values must be bytes")
        # The value lands before the key is indexed, so any indexed key is readable.
        is_new = key not in self._data
        self._data[key] = value
        if is_new:
            bisect.insort(self._keys, key)

    def iterate(
        self, prefix: bytes, start: bytes | None = None
    ) -> Iterator[tuple[bytes, bytes]]:
        lower = prefix if start is None else max(prefix, start)
        begin = bisect.bisect_left(self._keys, lower)
        end_key = prefix_end(prefix)
        stop = len(self._keys) if end_key is None else bisect.bisect_left(self._keys, end_key)
        # Materialize the range so writes made while the caller consumes it do not shift it.
        pairs = [(key, self._data[key]) for key in self._keys[begin:stop]]
        yield from pairs

    def __len__(self) -> int:
        return len(self._data)


__all__ = ["MemoryKVStore"]
