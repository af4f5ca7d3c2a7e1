"""Abstract interface for game plays and the points history."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared.dal.models import GamePlay, PointsHistoryEntry


class PlayRepository(ABC):
    """Plays, history entries and guest totals change together.

    Implementations apply ``record_award`` and ``record_update`` atomically:
    either the play, its history entry and the guest total all change, or
    none of them do.
    """

    @abstractmethod
    async def list_plays(self) -> list[GamePlay]: ...

    @abstractmethod
    async def find_play(self, guest_id: str, game_id: str) -> GamePlay | None: ...

    @abstractmethod
    async def record_award(self, play: GamePlay, entry: PointsHistoryEntry) -> None:
        """Insert a new play. Raises DuplicatePlayError if the pair already played."""

    @abstractmethod
    async def record_update(self, play: GamePlay, entry: PointsHistoryEntry) -> None:
        """Overwrite an existing play's score and append the correction entry."""

    @abstractmethod
    async def get_history(self, guest_id: str) -> list[PointsHistoryEntry]:
        """Return a guest's history in insertion order."""

    @abstractmethod
    async def recompute_points(self, guest_id: str) -> int:
        """Sum the guest's history deltas, independent of the stored total."""
