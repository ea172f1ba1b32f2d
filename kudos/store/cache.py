"""Write-buffering branch over a parent store.

A host runs each message against a fresh ``CacheKVStore``. Reads fall
through to the parent; writes stay in the branch until ``write()`` flushes
them. Dropping the branch (or calling ``discard()``) leaves the parent
untouched, which is what makes a failed message all-or-nothing.
"""

from __future__ import annotations

from collections.abc import Iterator

from kudos.protocols.store import KVStore


class CacheKVStore:
    def __init__(self, parent: KVStore) -> None:
        self._parent = parent
        self._writes: dict[bytes, bytes] = {}

    @property
    def parent(self) -> KVStore:
        return self._parent

    @property
    def dirty(self) -> bool:
        return bool(self._writes)

    def get(self, key: bytes) -> bytes | None:
        if key in self._writes:
            return self._writes[key]
        return self._parent.get(key)

    def has(self, key: bytes) -> bool:
        return key in self._writes or self._parent.has(key)

    def set(self, key: bytes, value: bytes) -> None:
        if not isinstance(key, bytes) or not isinstance(value, bytes):
            raise TypeError("keys and values must be bytes")
        self._writes[key] = value

    def iterate(
        self, prefix: bytes, start: bytes | None = None
    ) -> Iterator[tuple[bytes, bytes]]:
        merged = dict(self._parent.iterate(prefix, start))
        for key, value in self._writes.items():
            if key.startswith(prefix) and (start is None or key >= start):
                merged[key] = value
        for key in sorted(merged):
            yield key, merged[key]

    def write(self) -> None:
        """Flush buffered writes to the parent in key order."""
        for key in sorted(self._writes):
            self._parent.set(key, self._writes[key])
        self._writes.clear()

    def discard(self) -> None:
        self._writes.clear()


__all__ = ["CacheKVStore"]
