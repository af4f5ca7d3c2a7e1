"""SQLite-backed repository for game plays, points history and guest totals."""

from __future__ import annotations

import asyncio
import sqlite3
from typing import TYPE_CHECKING

import structlog

from shared.dal.errors import DuplicatePlayError, StoreError
from shared.dal.models import GamePlay, PointsHistoryEntry
from shared.dal.play_repository import PlayRepository

if TYPE_CHECKING:
    from shared.db.connection import Database

logger = structlog.get_logger()

_PLAY_COLUMNS = "id AS play_id, guest_id, game_id, points_awarded, awarded_by_email, played_at"
_HISTORY_COLUMNS = (
    "id AS entry_id, guest_id, points_awarded, points_delta, reason, awarded_by, game_play_id, created_at"
)


class SqlitePlayRepository(PlayRepository):
    """Writes plays, history rows and the guest total in a single transaction.

    The asyncio lock serializes writers inside this process; the
    UNIQUE(guest_id, game_id) constraint catches duplicates from anywhere else.
    """

    def __init__(self, db: Database) -> None:
        self._db = db
        self._lock = asyncio.Lock()

    async def list_plays(self) -> list[GamePlay]:
        rows = self._fetch_all(f"SELECT {_PLAY_COLUMNS} FROM game_plays ORDER BY rowid", ())
        return [GamePlay.model_validate(dict(row)) for row in rows]

    async def find_play(self, guest_id: str, game_id: str) -> GamePlay | None:
        rows = self._fetch_all(
            f"SELECT {_PLAY_COLUMNS} FROM game_plays WHERE guest_id = ? AND game_id = ?",
            (guest_id, game_id),
        )
        return GamePlay.model_validate(dict(rows[0])) if rows else None

    async def record_award(self, play: GamePlay, entry: PointsHistoryEntry) -> None:
        async with self._lock:
            try:
                with self._db.transaction() as conn:
                    conn.execute(
                        "INSERT INTO game_plays (id, guest_id, game_id, points_awarded, awarded_by_email, played_at) "
                        "VALUES (?, ?, ?, ?, ?, ?)",
                        (
                            play.play_id,
                            play.guest_id,
                            play.game_id,
                            play.points_awarded,
                            play.awarded_by_email,
                            play.played_at.isoformat(),
                        ),
                    )
                    self._append_history(conn, entry)
                    self._apply_delta(conn, entry)
            except sqlite3.IntegrityError as exc:
                error_msg = str(exc).lower()
                if "game_plays.guest_id" in error_msg and "game_plays.game_id" in error_msg:
                    raise DuplicatePlayError(play.guest_id, play.game_id) from exc
                raise StoreError(f"Could not record play for guest '{play.guest_id}'") from exc
            except sqlite3.Error as exc:
                raise StoreError(f"Could not record play for guest '{play.guest_id}'") from exc

    async def record_update(self, play: GamePlay, entry: PointsHistoryEntry) -> None:
        async with self._lock:
            try:
                with self._db.transaction() as conn:
                    cursor = conn.execute(
                        "UPDATE game_plays SET points_awarded = ?, awarded_by_email = ? WHERE id = ?",
                        (play.points_awarded, play.awarded_by_email, play.play_id),
                    )
                    if cursor.rowcount == 0:
                        raise StoreError(f"Play '{play.play_id}' no longer exists")
                    self._append_history(conn, entry)
                    self._apply_delta(conn, entry)
            except sqlite3.Error as exc:
                raise StoreError(f"Could not update play '{play.play_id}'") from exc

    async def get_history(self, guest_id: str) -> list[PointsHistoryEntry]:
        rows = self._fetch_all(
            f"SELECT {_HISTORY_COLUMNS} FROM points_history WHERE guest_id = ? ORDER BY rowid",
            (guest_id,),
        )
        return [PointsHistoryEntry.model_validate(dict(row)) for row in rows]

    async def recompute_points(self, guest_id: str) -> int:
        rows = self._fetch_all(
            "SELECT COALESCE(SUM(points_delta), 0) AS total FROM points_history WHERE guest_id = ?",
            (guest_id,),
        )
        return int(rows[0]["total"])

    @staticmethod
    def _append_history(conn: sqlite3.Connection, entry: PointsHistoryEntry) -> None:
        conn.execute(
            "INSERT INTO points_history "
            "(id, guest_id, points_awarded, points_delta, reason, awarded_by, game_play_id, created_at) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (
                entry.entry_id,
                entry.guest_id,
                entry.points_awarded,
                entry.points_delta,
                entry.reason,
                entry.awarded_by,
                entry.game_play_id,
                entry.created_at.isoformat(),
            ),
        )

    @staticmethod
    def _apply_delta(conn: sqlite3.Connection, entry: PointsHistoryEntry) -> None:
        cursor = conn.execute(
            "UPDATE guests SET points = points + ? WHERE id = ?",
            (entry.points_delta, entry.guest_id),
        )
        if cursor.rowcount == 0:
            raise StoreError(f"Guest '{entry.guest_id}' not found")

    def _fetch_all(self, sql: str, params: tuple) -> list[sqlite3.Row]:
        try:
            return self._db.connection.execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            raise StoreError("Could not read game plays") from exc
