"""Carnival roster: the configured set of mini-games and their owners."""

from carnival.roster.manager import RosterManager
from carnival.roster.types import DEFAULT_GAME_ICON, DEFAULT_GAME_NAMES, GAME_ICONS, RosterGame

__all__ = ["DEFAULT_GAME_ICON", "DEFAULT_GAME_NAMES", "GAME_ICONS", "RosterGame", "RosterManager"]
