from carnival.scoring.leaderboard import (
    TOTAL_GAMES,
    game_champions,
    leaderboard_stats,
    standing_to_dict,
    standings,
)
from carnival.tests.conftest import ALL_GAMES, BALLOON_DARTS, DUCK_HUNT, PLINKO, RING_TOSS
from shared.dal.models import GamePlay, Guest


def _guest(guest_id: str, name: str, points: int) -> Guest:
    return Guest(guest_id=guest_id, name=name, catch_phrase="!", points=points)


def _play(play_id: str, guest_id: str, game_id: str, points: int) -> GamePlay:
    return GamePlay(
        play_id=play_id,
        guest_id=guest_id,
        game_id=game_id,
        points_awarded=points,
        awarded_by_email="a@x.com",
    )


MAX = _guest("g1", "Max", 40)
LUNA = _guest("g2", "Luna", 25)
OTTO = _guest("g3", "Otto", 25)
IVY = _guest("g4", "Ivy", 0)
GUESTS_BY_POINTS = [MAX, LUNA, OTTO, IVY]

PLAYS = [
    _play("p1", "g1", "ring-toss", 10),
    _play("p2", "g1", "duck-hunt", 10),
    _play("p3", "g1", "plinko", 10),
    _play("p4", "g1", "balloon-darts", 10),
    _play("p5", "g2", "ring-toss", 25),
    _play("p6", "g3", "ring-toss", 25),
]


class TestGameChampions:
    def test_top_score_per_game(self):
        champions = game_champions(ALL_GAMES, PLAYS, GUESTS_BY_POINTS)

        assert champions[DUCK_HUNT.game_id].guest_name == "Max"
        assert champions[DUCK_HUNT.game_id].points == 10

    def test_tie_goes_to_first_play(self):
        champion = game_champions(ALL_GAMES, PLAYS, GUESTS_BY_POINTS)[RING_TOSS.game_id]

        assert champion.guest_id == "g2"
        assert champion.points == 25

    def test_game_without_plays_has_no_champion(self):
        champions = game_champions(ALL_GAMES, PLAYS[:1], GUESTS_BY_POINTS)

        assert champions[PLINKO.game_id] is None
        assert champions[BALLOON_DARTS.game_id] is None

    def test_missing_guest_means_no_champion(self):
        champions = game_champions(ALL_GAMES, [_play("p9", "ghost", "plinko", 99)], GUESTS_BY_POINTS)

        assert champions[PLINKO.game_id] is None

    def test_every_game_has_an_entry(self):
        assert set(game_champions(ALL_GAMES, [], [])) == {g.game_id for g in ALL_GAMES}


class TestStandings:
    def test_keeps_store_order_and_ranks(self):
        rows = standings(GUESTS_BY_POINTS, PLAYS)

        assert [(r.rank, r.guest.name) for r in rows] == [(1, "Max"), (2, "Luna"), (3, "Otto"), (4, "Ivy")]

    def test_podium_badges_and_stars(self):
        rows = standings(GUESTS_BY_POINTS, PLAYS)

        assert [r.badge for r in rows] == ["gold", "silver", "bronze", None]
        assert [r.stars for r in rows] == [3, 2, 1, 0]

    def test_games_played_and_completion(self):
        rows = standings(GUESTS_BY_POINTS, PLAYS)

        assert [r.games_played for r in rows] == [4, 1, 1, 0]
        assert [r.completed_all for r in rows] == [True, False, False, False]
        assert TOTAL_GAMES == 4

    def test_one_play_is_not_completion(self):
        rows = standings([LUNA], [_play("p5", "g2", "ring-toss", 25)], total_games=TOTAL_GAMES)

        assert not rows[0].completed_all

    def test_no_games_means_nobody_completed(self):
        rows = standings([IVY], [], total_games=0)

        assert rows[0].completed_all is False

    def test_empty(self):
        assert standings([], PLAYS) == []

    def test_dict_shape(self):
        row = standings(GUESTS_BY_POINTS, PLAYS)[0]

        assert standing_to_dict(row) == {
            "rank": 1,
            "guest_id": "g1",
            "name": "Max",
            "catch_phrase": "!",
            "photo_url": None,
            "points": 40,
            "games_played": 4,
            "completed_all": True,
            "badge": "gold",
            "stars": 3,
        }


def test_leaderboard_stats():
    stats = leaderboard_stats(GUESTS_BY_POINTS, ALL_GAMES, PLAYS)

    assert stats.total_guests == 4
    assert stats.total_games == 4
    assert stats.total_plays == 6
    assert stats.completed_all == 1
    assert stats.total_points == 90


def test_leaderboard_stats_without_games():
    stats = leaderboard_stats([IVY], [], [], total_games=0)

    assert stats.total_plays == 0
    assert stats.completed_all == 0
