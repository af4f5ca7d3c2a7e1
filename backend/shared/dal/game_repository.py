"""Abstract interface for game persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared.dal.models import Game


class GameRepository(ABC):
    @abstractmethod
    async def list_games(self) -> list[Game]:
        """Return every game ordered by name."""

    @abstractmethod
    async def get_game(self, game_id: str) -> Game | None: ...

    @abstractmethod
    async def assign_game(self, game_id: str, email: str | None) -> Game | None:
        """Set or clear the staff email that owns a game. Return None for unknown games."""

    @abstractmethod
    async def seed_games(self, games: list[Game]) -> int:
        """Insert games only when none exist yet. Return the number inserted."""
