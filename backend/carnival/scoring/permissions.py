"""Who may award points for which game.

Super admins manage every game. Everyone else manages exactly the games whose
``assigned_user_email`` matches their own email.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from shared.dal.models import Game


class StaffIdentity(Protocol):
    @property
    def email(self) -> str: ...

    @property
    def is_super_admin(self) -> bool: ...


def _owns(staff: StaffIdentity, game: Game) -> bool:
    return game.assigned_user_email is not None and game.assigned_user_email.lower() == staff.email.lower()


def can_manage_game(staff: StaffIdentity | None, game: Game | None) -> bool:
    if staff is None or game is None:
        return False
    return staff.is_super_admin or _owns(staff, game)


def available_games(staff: StaffIdentity, games: list[Game]) -> list[Game]:
    if staff.is_super_admin:
        return list(games)
    return [g for g in games if _owns(staff, g)]


def default_game(staff: StaffIdentity, games: list[Game]) -> Game | None:
    """Pick the game the admin page opens on: the staff member's own game, else the first one."""
    for game in games:
        if _owns(staff, game):
            return game
    manageable = available_games(staff, games)
    return manageable[0] if manageable else None
