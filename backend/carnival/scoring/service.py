"""Award and correct game points on behalf of staff."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

from carnival.scoring.errors import (
    AlreadyPlayedError,
    GameNotFoundError,
    GuestNotFoundError,
    NoGameSelectedError,
    NotAuthorizedError,
    PlayNotFoundError,
)
from carnival.scoring.permissions import can_manage_game
from carnival.scoring.points import parse_points
from shared.dal.errors import DuplicatePlayError
from shared.dal.models import GamePlay, PointsHistoryEntry

if TYPE_CHECKING:
    from carnival.realtime.feed import LeaderboardFeed
    from carnival.scoring.permissions import StaffIdentity
    from shared.dal.game_repository import GameRepository
    from shared.dal.guest_repository import GuestRepository
    from shared.dal.models import Game, Guest
    from shared.dal.play_repository import PlayRepository

logger = structlog.get_logger()


class ScoringService:
    """Authorization, validation and the duplicate-play guard around the play repository.

    Checks run in a fixed order (game selected, staff authorized, points
    valid, records exist, not yet played) so the first problem is the one
    reported. Guest totals move in the same transaction as the history row,
    and the leaderboard feed is told after every successful change.
    """

    def __init__(
        self,
        guest_repo: GuestRepository,
        game_repo: GameRepository,
        play_repo: PlayRepository,
        feed: LeaderboardFeed | None = None,
    ) -> None:
        self._guest_repo = guest_repo
        self._game_repo = game_repo
        self._play_repo = play_repo
        self._feed = feed

    async def award_points(
        self,
        staff: StaffIdentity,
        guest_id: str,
        game_id: str | None,
        raw_points: str | None,
    ) -> GamePlay:
        game = await self._authorize(staff, game_id)
        points = parse_points(raw_points, action="award")
        guest = await self._require_guest(guest_id)

        if await self._play_repo.find_play(guest.guest_id, game.game_id) is not None:
            raise AlreadyPlayedError(game.name)

        play = GamePlay(
            play_id=str(uuid4()),
            guest_id=guest.guest_id,
            game_id=game.game_id,
            points_awarded=points,
            awarded_by_email=staff.email,
        )
        entry = PointsHistoryEntry(
            entry_id=str(uuid4()),
            guest_id=guest.guest_id,
            points_awarded=points,
            points_delta=points,
            reason=game.name,
            awarded_by=staff.email,
            game_play_id=play.play_id,
        )
        try:
            await self._play_repo.record_award(play, entry)
        except DuplicatePlayError as e:
            # Another staff session inserted between our check and our write.
            logger.warning("concurrent duplicate award rejected", guest_id=guest.guest_id, game_id=game.game_id)
            raise AlreadyPlayedError(game.name) from e

        logger.info(
            "points awarded",
            guest_id=guest.guest_id,
            game=game.name,
            points=points,
            awarded_by=staff.email,
        )
        await self._notify()
        return play

    async def update_points(
        self,
        staff: StaffIdentity,
        guest_id: str,
        game_id: str | None,
        raw_points: str | None,
    ) -> GamePlay:
        """Re-enter a guest's score for a game they already played.

        The play is overwritten; the history keeps the earlier entries and
        gains one recording the new score and its difference from the old.
        """
        game = await self._authorize(staff, game_id)
        points = parse_points(raw_points, action="update")
        guest = await self._require_guest(guest_id)

        existing = await self._play_repo.find_play(guest.guest_id, game.game_id)
        if existing is None:
            raise PlayNotFoundError

        updated = existing.model_copy(update={"points_awarded": points, "awarded_by_email": staff.email})
        entry = PointsHistoryEntry(
            entry_id=str(uuid4()),
            guest_id=guest.guest_id,
            points_awarded=points,
            points_delta=points - existing.points_awarded,
            reason=game.name,
            awarded_by=staff.email,
            game_play_id=existing.play_id,
        )
        await self._play_repo.record_update(updated, entry)

        logger.info(
            "points updated",
            guest_id=guest.guest_id,
            game=game.name,
            old_points=existing.points_awarded,
            new_points=points,
            awarded_by=staff.email,
        )
        await self._notify()
        return updated

    async def assign_game(self, staff: StaffIdentity, game_id: str, email: str | None) -> Game:
        """Hand a game to a staff email, or clear its owner. Super admins only."""
        if not staff.is_super_admin:
            raise NotAuthorizedError
        normalized = email.strip().lower() if email and email.strip() else None
        game = await self._game_repo.assign_game(game_id, normalized)
        if game is None:
            raise GameNotFoundError(game_id)
        logger.info("game assigned", game=game.name, assigned_to=normalized, assigned_by=staff.email)
        return game

    async def audit_guest_points(self, guest_id: str) -> tuple[int, int]:
        """Return (stored total, total recomputed from history) for a guest."""
        guest = await self._require_guest(guest_id)
        return guest.points, await self._play_repo.recompute_points(guest_id)

    async def _authorize(self, staff: StaffIdentity, game_id: str | None) -> Game:
        if not game_id:
            raise NoGameSelectedError
        game = await self._game_repo.get_game(game_id)
        if game is None:
            raise GameNotFoundError(game_id)
        if not can_manage_game(staff, game):
            logger.info("unauthorized scoring attempt", email=staff.email, game=game.name)
            raise NotAuthorizedError
        return game

    async def _require_guest(self, guest_id: str) -> Guest:
        guest = await self._guest_repo.get_guest(guest_id)
        if guest is None:
            raise GuestNotFoundError(guest_id)
        return guest

    async def _notify(self) -> None:
        if self._feed is not None:
            await self._feed.publish()
