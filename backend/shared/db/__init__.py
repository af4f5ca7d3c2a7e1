"""SQLite database layer: connection management and repository implementations."""

from shared.db.connection import Database
from shared.db.game_repository import SqliteGameRepository
from shared.db.guest_repository import SqliteGuestRepository
from shared.db.play_repository import SqlitePlayRepository
from shared.db.staff_repository import SqliteStaffRepository

__all__ = [
    "Database",
    "SqliteGameRepository",
    "SqliteGuestRepository",
    "SqlitePlayRepository",
    "SqliteStaffRepository",
]
