"""SQLite-backed staff account repository."""

from __future__ import annotations

import asyncio
import sqlite3
from typing import TYPE_CHECKING

from shared.auth.models import StaffAccount
from shared.dal.staff_repository import StaffRepository

if TYPE_CHECKING:
    from shared.db.connection import Database


class SqliteStaffRepository(StaffRepository):
    """Stores each account as a JSON snapshot with the email indexed.

    Duplicate ids and emails are caught by database uniqueness constraints
    and surfaced as ValueError.
    """

    def __init__(self, db: Database) -> None:
        self._db = db
        self._lock = asyncio.Lock()

    async def create_staff(self, account: StaffAccount) -> None:
        async with self._lock:
            try:
                self._db.connection.execute(
                    "INSERT INTO staff (id, email, data) VALUES (?, ?, ?)",
                    (account.user_id, account.email, account.model_dump_json()),
                )
                self._db.connection.commit()
            except sqlite3.IntegrityError as exc:
                self._db.connection.rollback()
                error_msg = str(exc).lower()
                if "staff.id" in error_msg:
                    raise ValueError(f"Staff account with id '{account.user_id}' already exists") from exc
                if "staff.email" in error_msg or "idx_staff_email" in error_msg:
                    raise ValueError(f"Staff account '{account.email}' already exists") from exc
                raise ValueError(str(exc)) from exc  # pragma: no cover

    async def get_by_email(self, email: str) -> StaffAccount | None:
        row = self._db.connection.execute(
            "SELECT data FROM staff WHERE email = ? COLLATE NOCASE",
            (email,),
        ).fetchone()
        if row is None:
            return None
        return StaffAccount.model_validate_json(row["data"])
