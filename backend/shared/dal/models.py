"""Persistence models for the carnival data access layer."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class Guest(BaseModel, frozen=True):
    """A registered carnival attendee."""

    guest_id: str
    name: str
    catch_phrase: str
    photo_url: str | None = None
    points: int = 0  # running total, kept in step with points_history deltas
    created_at: datetime = Field(default_factory=_utcnow)


class Game(BaseModel, frozen=True):
    """One of the carnival mini-games, optionally owned by a staff email."""

    game_id: str
    name: str
    assigned_user_email: str | None = None


class GamePlay(BaseModel, frozen=True):
    """A guest's single play of a game and the score it earned."""

    play_id: str
    guest_id: str
    game_id: str
    points_awarded: int
    awarded_by_email: str
    played_at: datetime = Field(default_factory=_utcnow)


class PointsHistoryEntry(BaseModel, frozen=True):
    """Append-only audit row written on every award or correction."""

    entry_id: str
    guest_id: str
    points_awarded: int  # score recorded for the play at this point
    points_delta: int  # change applied to the guest total
    reason: str  # game name
    awarded_by: str
    game_play_id: str | None = None
    created_at: datetime = Field(default_factory=_utcnow)
