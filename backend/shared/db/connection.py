"""SQLite database connection and schema management."""

from __future__ import annotations

import contextlib
import os
import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = structlog.get_logger()

_DB_FILE_PERMISSIONS = 0o600

# game_plays carries UNIQUE(guest_id, game_id): two staff sessions racing on
# the same guest and game cannot both insert a play.
_SCHEMA_SQL = """\
CREATE TABLE IF NOT EXISTS guests (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    catch_phrase TEXT NOT NULL,
    photo_url TEXT,
    points INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_guests_points ON guests (points DESC);

CREATE TABLE IF NOT EXISTS games (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    assigned_user_email TEXT
);

CREATE UNIQUE INDEX IF NOT EXISTS idx_games_name ON games (name COLLATE NOCASE);

CREATE TABLE IF NOT EXISTS game_plays (
    id TEXT PRIMARY KEY,
    guest_id TEXT NOT NULL REFERENCES guests (id),
    game_id TEXT NOT NULL REFERENCES games (id),
    points_awarded INTEGER NOT NULL,
    awarded_by_email TEXT NOT NULL,
    played_at TEXT NOT NULL,
    UNIQUE (guest_id, game_id)
);

CREATE TABLE IF NOT EXISTS points_history (
    id TEXT PRIMARY KEY,
    guest_id TEXT NOT NULL REFERENCES guests (id),
    points_awarded INTEGER NOT NULL,
    points_delta INTEGER NOT NULL,
    reason TEXT NOT NULL,
    awarded_by TEXT NOT NULL,
    game_play_id TEXT REFERENCES game_plays (id),
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_points_history_guest ON points_history (guest_id);

CREATE TABLE IF NOT EXISTS staff (
    id TEXT PRIMARY KEY,
    email TEXT NOT NULL,
    data TEXT NOT NULL
);

CREATE UNIQUE INDEX IF NOT EXISTS idx_staff_email ON staff (email COLLATE NOCASE);
"""


class Database:
    """SQLite database wrapper with schema management and explicit transactions."""

    def __init__(self, path: str | Path) -> None:
        self._path = str(path)
        self._conn: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise RuntimeError("Database is not connected")
        return self._conn

    def connect(self) -> None:
        """Open the database, apply pragmas, create schema, and harden file permissions."""
        Path(self._path).parent.mkdir(parents=True, exist_ok=True)

        self._conn = sqlite3.connect(self._path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.execute("PRAGMA foreign_keys=ON")
        self._conn.execute("PRAGMA busy_timeout=5000")
        self._conn.executescript(_SCHEMA_SQL)

        self._harden_permissions()
        logger.info("database connected", path=self._path)

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    @contextlib.contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Run the enclosed statements in one transaction; roll back on any error."""
        conn = self.connection
        conn.execute("BEGIN")
        try:
            yield conn
        except BaseException:
            conn.execute("ROLLBACK")
            raise
        conn.execute("COMMIT")

    def _harden_permissions(self) -> None:
        """Restrict the DB file and its WAL/SHM siblings to the owner (best effort)."""
        if os.name != "posix":  # pragma: no cover
            return
        for suffix in ("", "-wal", "-shm"):
            p = Path(self._path + suffix)
            if p.exists():
                try:
                    p.chmod(_DB_FILE_PERMISSIONS)
                except OSError:
                    logger.warning("could not set file permissions", permissions=oct(_DB_FILE_PERMISSIONS), path=str(p))
