"""Persistence: SQLite-backed key-value store and its migration runner."""

from kudos.persistence.migrations import run_migrations
from kudos.persistence.sqlite_store import SQLiteKVStore

__all__ = ["SQLiteKVStore", "run_migrations"]
