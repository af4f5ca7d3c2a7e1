"""Data access layer: repository interfaces and shared persistence models."""

from shared.dal.errors import DuplicatePlayError, StoreError
from shared.dal.game_repository import GameRepository
from shared.dal.guest_repository import GuestRepository
from shared.dal.models import Game, GamePlay, Guest, PointsHistoryEntry
from shared.dal.play_repository import PlayRepository
from shared.dal.staff_repository import StaffRepository

__all__ = [
    "DuplicatePlayError",
    "Game",
    "GamePlay",
    "GameRepository",
    "Guest",
    "GuestRepository",
    "PlayRepository",
    "PointsHistoryEntry",
    "StaffRepository",
    "StoreError",
]
