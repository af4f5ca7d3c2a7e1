"""Leaderboard aggregation over guests, games and plays.

Everything here is a linear scan over lists the store already returned;
the overall ordering itself comes from the store (points descending).
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared.dal.models import Game, GamePlay, Guest

TOTAL_GAMES = 4
PODIUM_BADGES = ("gold", "silver", "bronze")


@dataclass(frozen=True)
class GameChampion:
    game_id: str
    game_name: str
    guest_id: str
    guest_name: str
    points: int


@dataclass(frozen=True)
class StandingRow:
    rank: int
    guest: Guest
    games_played: int
    completed_all: bool
    badge: str | None  # gold/silver/bronze for the top three
    stars: int  # 3, 2, 1 for the top three, then 0


@dataclass(frozen=True)
class LeaderboardStats:
    total_guests: int
    total_games: int
    total_plays: int
    completed_all: int
    total_points: int


def _completed_all(games_played: int, total_games: int) -> bool:
    return total_games > 0 and games_played == total_games


def games_played_counts(plays: list[GamePlay]) -> Counter[str]:
    return Counter(p.guest_id for p in plays)


def game_champions(games: list[Game], plays: list[GamePlay], guests: list[Guest]) -> dict[str, GameChampion | None]:
    """Map each game id to the guest holding its top score, or None if nobody has played.

    On a tie the earliest play in ``plays`` keeps the crown.
    """
    guests_by_id = {g.guest_id: g for g in guests}
    top_plays: dict[str, GamePlay] = {}
    for play in plays:
        best = top_plays.get(play.game_id)
        if best is None or play.points_awarded > best.points_awarded:
            top_plays[play.game_id] = play

    champions: dict[str, GameChampion | None] = {}
    for game in games:
        top = top_plays.get(game.game_id)
        guest = guests_by_id.get(top.guest_id) if top is not None else None
        if top is None or guest is None:
            champions[game.game_id] = None
            continue
        champions[game.game_id] = GameChampion(
            game_id=game.game_id,
            game_name=game.name,
            guest_id=guest.guest_id,
            guest_name=guest.name,
            points=top.points_awarded,
        )
    return champions


def standings(guests: list[Guest], plays: list[GamePlay], total_games: int = TOTAL_GAMES) -> list[StandingRow]:
    """Decorate already-sorted guests with rank, podium badge and progress."""
    played = games_played_counts(plays)
    rows = []
    for index, guest in enumerate(guests):
        count = played[guest.guest_id]
        rows.append(
            StandingRow(
                rank=index + 1,
                guest=guest,
                games_played=count,
                completed_all=_completed_all(count, total_games),
                badge=PODIUM_BADGES[index] if index < len(PODIUM_BADGES) else None,
                stars=max(len(PODIUM_BADGES) - index, 0),
            ),
        )
    return rows


def leaderboard_stats(
    guests: list[Guest],
    games: list[Game],
    plays: list[GamePlay],
    total_games: int = TOTAL_GAMES,
) -> LeaderboardStats:
    played = games_played_counts(plays)
    return LeaderboardStats(
        total_guests=len(guests),
        total_games=len(games),
        total_plays=len(plays),
        completed_all=sum(1 for g in guests if _completed_all(played[g.guest_id], total_games)),
        total_points=sum(g.points for g in guests),
    )


def standing_to_dict(row: StandingRow) -> dict:
    """JSON shape shared by the live feed and the leaderboard API."""
    return {
        "rank": row.rank,
        "guest_id": row.guest.guest_id,
        "name": row.guest.name,
        "catch_phrase": row.guest.catch_phrase,
        "photo_url": row.guest.photo_url,
        "points": row.guest.points,
        "games_played": row.games_played,
        "completed_all": row.completed_all,
        "badge": row.badge,
        "stars": row.stars,
    }
