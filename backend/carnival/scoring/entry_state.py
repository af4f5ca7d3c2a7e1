"""Point-entry state of one guest for the game selected on the admin page.

    UNPLAYED --award--> PLAYED --re-enter--> EDITING --save/cancel--> PLAYED
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared.dal.models import GamePlay


class PointEntryState(StrEnum):
    UNPLAYED = "unplayed"
    PLAYED = "played"
    EDITING = "editing"


def find_play(plays: list[GamePlay], guest_id: str, game_id: str) -> GamePlay | None:
    return next((p for p in plays if p.guest_id == guest_id and p.game_id == game_id), None)


def entry_state(
    plays: list[GamePlay],
    guest_id: str,
    game_id: str,
    editing_guest_id: str | None = None,
) -> PointEntryState:
    if find_play(plays, guest_id, game_id) is None:
        return PointEntryState.UNPLAYED
    if editing_guest_id == guest_id:
        return PointEntryState.EDITING
    return PointEntryState.PLAYED
