"""SQLite-backed ordered key-value store.

Keys are BLOBs, which SQLite compares with ``memcmp``; a range scan over
``[prefix, prefix_end)`` therefore comes back in the same byte order as the
in-memory store. Writes accumulate in the open transaction until the host
calls ``commit()``, so commit granularity stays under host control.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from pathlib import Path

from kudos.errors import StoreError
from kudos.keys import prefix_end
from kudos.persistence.migrations import run_migrations


class SQLiteKVStore:
    def __init__(self, db_path: str | Path) -> None:
        self.db_path = str(db_path)
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        try:
            self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
            run_migrations(self._conn)
        except sqlite3.Error as exc:
            raise StoreError(f"cannot open kv store at {self.db_path}: {exc}") from exc

    def get(self, key: bytes) -> bytes | None:
        try:
            row = self._conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as exc:
            raise StoreError(f"kv read failed: {exc}") from exc
        if row is None:
            return None
        return bytes(row[0])

    def has(self, key: bytes) -> bool:
        return self.get(key) is not None

    def set(self, key: bytes, value: bytes) -> None:
        if not isinstance(key, bytes) or not isinstance(value, bytes):
            raise TypeError("keys and values must be bytes")
        try:
            self._conn.execute(
                "INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)",
                (key, value),
            )
        except sqlite3.Error as exc:
            raise StoreError(f"kv write failed: {exc}") from exc

    def iterate(
        self, prefix: bytes, start: bytes | None = None
    ) -> Iterator[tuple[bytes, bytes]]:
        lower = prefix if start is None else max(prefix, start)
        end = prefix_end(prefix)
        try:
            if end is None:
                rows = self._conn.execute(
                    "SELECT key, value FROM kv WHERE key >= ? ORDER BY key",
                    (lower,),
                ).fetchall()
            else:
                rows = self._conn.execute(
                    "SELECT key, value FROM kv WHERE key >= ? AND key < ? ORDER BY key",
                    (lower, end),
                ).fetchall()
        except sqlite3.Error as exc:
            raise StoreError(f"kv scan failed: {exc}") from exc
        for key, value in rows:
            yield bytes(key), bytes(value)

    def commit(self) -> None:
        try:
            self._conn.commit()
        except sqlite3.Error as exc:
            raise StoreError(f"kv commit failed: {exc}") from exc

    def rollback(self) -> None:
        try:
            self._conn.rollback()
        except sqlite3.Error as exc:
            raise StoreError(f"kv rollback failed: {exc}") from exc

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> SQLiteKVStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["SQLiteKVStore"]
