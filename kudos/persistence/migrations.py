"""Sequential, idempotent migration runner with SHA-256 checksums."""

from __future__ import annotations

import hashlib
import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"


def _checksum(path: Path) -> str:
    return hashlib.sha256(path.read_bytes()).hexdigest()


def run_migrations(conn: sqlite3.Connection, migrations_dir: Path | None = None) -> list[str]:
    """Apply all pending migrations in order. Fail-fast on checksum mismatch.

    Returns the names of the migrations applied by this call. The
    ``_migrations`` table stores the migration sequence number rather than a
    timestamp so two replicas that migrate the same file end up byte-equal.
    """
    if migrations_dir is None:
        migrations_dir = MIGRATIONS_DIR

    conn.execute(
        "CREATE TABLE IF NOT EXISTS _migrations ("
        "  name TEXT PRIMARY KEY,"
        "  checksum TEXT NOT NULL,"
        "  seq INTEGER NOT NULL"
        ")"
    )
    conn.commit()

    applied = {
        row[0]: row[1]
        for row in conn.execute("SELECT name, checksum FROM _migrations ORDER BY name").fetchall()
    }

    newly_applied: list[str] = []
    for seq, sql_file in enumerate(sorted(migrations_dir.glob("*.sql")), start=1):
        name = sql_file.name
        checksum = _checksum(sql_file)

        if name in applied:
            if applied[name] != checksum:
                raise RuntimeError(
                    f"Migration {name} checksum mismatch: "
                    f"applied={applied[name]}, current={checksum}. "
                    f"Previously applied migrations must not be modified."
                )
            continue

        conn.executescript(sql_file.read_text(encoding="utf-8"))
        conn.execute(
            "INSERT OR IGNORE INTO _migrations (name, checksum, seq) VALUES (?, ?, ?)",
            (name, checksum, seq),
        )
        conn.commit()
        newly_applied.append(name)
        logger.info("Applied migration %s", name)

    return newly_applied


__all__ = ["MIGRATIONS_DIR", "run_migrations"]
