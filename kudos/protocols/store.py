from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol, runtime_checkable


@runtime_checkable
class KVStore(Protocol):
    """Ordered byte-key store the ledger runs against.

    ``iterate`` yields ``(key, value)`` pairs whose key starts with *prefix*,
    in ascending byte order. With *start* set, keys below it are skipped, so a
    scan can resume from a known key. Implementations raise ``StoreError`` when
    the backing storage fails.
    """

    def get(self, key: bytes) -> bytes | None: ...

    def has(self, key: bytes) -> bool: ...

    def set(self, key: bytes, value: bytes) -> None: ...

    def iterate(
        self, prefix: bytes, start: bytes | None = None
    ) -> Iterator[tuple[bytes, bytes]]: ...


@runtime_checkable
class CommittableStore(KVStore, Protocol):
    """A store whose writes become durable only on ``commit``."""

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
