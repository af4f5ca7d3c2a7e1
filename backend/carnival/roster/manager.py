"""Load the carnival roster: which games exist and which staff email runs each."""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING

import structlog
import yaml

from carnival.roster.types import DEFAULT_GAME_NAMES, RosterGame
from shared.dal.models import Game

if TYPE_CHECKING:
    from shared.dal.game_repository import GameRepository

logger = structlog.get_logger()


def _get_default_roster_path() -> Path:  # pragma: no cover
    backend_root = Path(__file__).parent.parent.parent
    return backend_root / "config" / "roster.yaml"


def _slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


class RosterManager:
    """Read ``roster.yaml`` and seed the games table from it.

    Expected shape::

        games:
          - name: "Ring Toss"
            assigned_email: "a@example.com"
          - name: "Plinko"

    A missing file falls back to the four default games with no owners.
    """

    def __init__(self, roster_path: Path | None = None) -> None:
        self._roster_path = roster_path or _get_default_roster_path()
        self._games: list[RosterGame] = []
        self._load_roster()

    def _load_roster(self) -> None:
        if not self._roster_path.exists():
            logger.info("roster file not found, using default games", path=str(self._roster_path))
            self._games = [RosterGame(name=name) for name in DEFAULT_GAME_NAMES]
            return

        with self._roster_path.open() as f:
            config = yaml.safe_load(f) or {}

        self._games = [RosterGame.model_validate(entry) for entry in config.get("games", [])]
        slugs = [_slugify(g.name) for g in self._games]
        if not all(slugs):
            raise ValueError(f"Game names in roster {self._roster_path} need at least one letter or digit")
        if len(slugs) != len(set(slugs)):
            raise ValueError(f"Duplicate game names in roster {self._roster_path}")

    def get_games(self) -> list[RosterGame]:
        return self._games.copy()

    def to_games(self) -> list[Game]:
        """Build Game records with stable ids derived from the game names."""
        return [
            Game(game_id=_slugify(g.name), name=g.name, assigned_user_email=g.assigned_email) for g in self._games
        ]

    async def seed(self, game_repo: GameRepository) -> int:
        """Insert roster games into an empty games table."""
        return await game_repo.seed_games(self.to_games())
