"""Points awarding, authorization and leaderboard aggregation."""

from carnival.scoring.entry_state import PointEntryState, entry_state
from carnival.scoring.errors import (
    AlreadyPlayedError,
    GameNotFoundError,
    GuestNotFoundError,
    InvalidPointsError,
    NoGameSelectedError,
    NotAuthorizedError,
    PlayNotFoundError,
    ScoringError,
)
from carnival.scoring.leaderboard import TOTAL_GAMES, game_champions, leaderboard_stats, standings
from carnival.scoring.permissions import available_games, can_manage_game, default_game
from carnival.scoring.search import filter_guests
from carnival.scoring.service import ScoringService

__all__ = [
    "TOTAL_GAMES",
    "AlreadyPlayedError",
    "GameNotFoundError",
    "GuestNotFoundError",
    "InvalidPointsError",
    "NoGameSelectedError",
    "NotAuthorizedError",
    "PlayNotFoundError",
    "PointEntryState",
    "ScoringError",
    "ScoringService",
    "available_games",
    "can_manage_game",
    "default_game",
    "entry_state",
    "filter_guests",
    "game_champions",
    "leaderboard_stats",
    "standings",
]
