"""SQLite-backed game repository."""

from __future__ import annotations

import asyncio
import sqlite3
from typing import TYPE_CHECKING

import structlog

from shared.dal.errors import StoreError
from shared.dal.game_repository import GameRepository
from shared.dal.models import Game

if TYPE_CHECKING:
    from shared.db.connection import Database

logger = structlog.get_logger()

_GAME_COLUMNS = "id AS game_id, name, assigned_user_email"


class SqliteGameRepository(GameRepository):
    def __init__(self, db: Database) -> None:
        self._db = db
        self._lock = asyncio.Lock()

    async def list_games(self) -> list[Game]:
        try:
            rows = self._db.connection.execute(
                f"SELECT {_GAME_COLUMNS} FROM games ORDER BY name COLLATE NOCASE",
            ).fetchall()
        except sqlite3.Error as exc:
            raise StoreError("Could not read games") from exc
        return [Game.model_validate(dict(row)) for row in rows]

    async def get_game(self, game_id: str) -> Game | None:
        try:
            row = self._db.connection.execute(
                f"SELECT {_GAME_COLUMNS} FROM games WHERE id = ?",
                (game_id,),
            ).fetchone()
        except sqlite3.Error as exc:
            raise StoreError("Could not read games") from exc
        return Game.model_validate(dict(row)) if row is not None else None

    async def assign_game(self, game_id: str, email: str | None) -> Game | None:
        async with self._lock:
            try:
                cursor = self._db.connection.execute(
                    "UPDATE games SET assigned_user_email = ? WHERE id = ?",
                    (email, game_id),
                )
                self._db.connection.commit()
            except sqlite3.Error as exc:
                self._db.connection.rollback()
                raise StoreError(f"Could not assign game '{game_id}'") from exc
        if cursor.rowcount == 0:
            logger.warning("assign_game had no effect (game not found)", game_id=game_id)
            return None
        return await self.get_game(game_id)

    async def seed_games(self, games: list[Game]) -> int:
        async with self._lock:
            conn = self._db.connection
            if conn.execute("SELECT COUNT(*) FROM games").fetchone()[0] > 0:
                return 0
            try:
                with self._db.transaction():
                    conn.executemany(
                        "INSERT INTO games (id, name, assigned_user_email) VALUES (?, ?, ?)",
                        [(g.game_id, g.name, g.assigned_user_email) for g in games],
                    )
            except sqlite3.Error as exc:
                raise StoreError("Could not seed games") from exc
        logger.info("seeded games", count=len(games))
        return len(games)
