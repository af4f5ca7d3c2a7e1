"""SQLite-backed guest repository."""

from __future__ import annotations

import asyncio
import sqlite3
from typing import TYPE_CHECKING

import structlog

from shared.dal.errors import StoreError
from shared.dal.guest_repository import GuestRepository
from shared.dal.models import Guest

if TYPE_CHECKING:
    from shared.db.connection import Database

logger = structlog.get_logger()

_GUEST_COLUMNS = "id AS guest_id, name, catch_phrase, photo_url, points, created_at"


class SqliteGuestRepository(GuestRepository):
    """Guests are plain columns so the leaderboard can sort in SQL.

    Ties on points fall back to rowid, which is registration order.
    """

    def __init__(self, db: Database) -> None:
        self._db = db
        self._lock = asyncio.Lock()

    async def create_guest(self, guest: Guest) -> None:
        async with self._lock:
            try:
                self._db.connection.execute(
                    "INSERT INTO guests (id, name, catch_phrase, photo_url, points, created_at) "
                    "VALUES (?, ?, ?, ?, ?, ?)",
                    (
                        guest.guest_id,
                        guest.name,
                        guest.catch_phrase,
                        guest.photo_url,
                        guest.points,
                        guest.created_at.isoformat(),
                    ),
                )
                self._db.connection.commit()
            except sqlite3.Error as exc:
                self._db.connection.rollback()
                raise StoreError(f"Could not create guest '{guest.name}'") from exc

    async def get_guest(self, guest_id: str) -> Guest | None:
        row = self._query_one(f"SELECT {_GUEST_COLUMNS} FROM guests WHERE id = ?", (guest_id,))
        return Guest.model_validate(dict(row)) if row is not None else None

    async def list_by_name(self) -> list[Guest]:
        return self._query_all(f"SELECT {_GUEST_COLUMNS} FROM guests ORDER BY name COLLATE NOCASE, rowid")

    async def list_by_points(self) -> list[Guest]:
        return self._query_all(f"SELECT {_GUEST_COLUMNS} FROM guests ORDER BY points DESC, rowid")

    def _query_one(self, sql: str, params: tuple) -> sqlite3.Row | None:
        try:
            return self._db.connection.execute(sql, params).fetchone()
        except sqlite3.Error as exc:
            raise StoreError("Could not read guests") from exc

    def _query_all(self, sql: str) -> list[Guest]:
        try:
            rows = self._db.connection.execute(sql).fetchall()
        except sqlite3.Error as exc:
            raise StoreError("Could not read guests") from exc
        return [Guest.model_validate(dict(row)) for row in rows]
