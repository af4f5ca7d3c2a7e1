from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from starlette.websockets import WebSocketDisconnect

from carnival.realtime.feed import LeaderboardFeed
from carnival.scoring.errors import (
    AlreadyPlayedError,
    GameNotFoundError,
    GuestNotFoundError,
    InvalidPointsError,
    NoGameSelectedError,
    NotAuthorizedError,
    PlayNotFoundError,
)
from carnival.scoring.service import ScoringService
from carnival.tests.conftest import Staff
from shared.dal.errors import DuplicatePlayError

ALICE = Staff(email="a@x.com")  # runs Ring Toss and Plinko
BOB = Staff(email="b@x.com")  # runs Duck Hunt
BOSS = Staff(email="boss@x.com", is_super_admin=True)


@pytest.fixture
def feed():
    return AsyncMock()


@pytest.fixture
def service(guest_repo, game_repo, play_repo, feed, games):
    return ScoringService(guest_repo, game_repo, play_repo, feed=feed)


class TestRingTossScenario:
    async def test_award_repeat_then_re_enter(self, service, play_repo, guest_repo, max_guest):
        play = await service.award_points(ALICE, max_guest.guest_id, "ring-toss", "10")

        assert play.points_awarded == 10
        assert play.awarded_by_email == "a@x.com"
        history = await play_repo.get_history(max_guest.guest_id)
        assert len(history) == 1
        assert history[0].game_play_id == play.play_id
        assert history[0].reason == "Ring Toss"

        with pytest.raises(AlreadyPlayedError, match="This guest has already played Ring Toss!"):
            await service.award_points(ALICE, max_guest.guest_id, "ring-toss", "10")
        assert await play_repo.list_plays() == [play]

        updated = await service.update_points(ALICE, max_guest.guest_id, "ring-toss", "15")

        assert updated.play_id == play.play_id
        assert (await play_repo.find_play(max_guest.guest_id, "ring-toss")).points_awarded == 15
        history = await play_repo.get_history(max_guest.guest_id)
        assert [(h.points_awarded, h.points_delta) for h in history] == [(10, 10), (15, 5)]
        assert (await guest_repo.get_guest(max_guest.guest_id)).points == 15


class TestAwardChecks:
    async def test_no_game_selected(self, service, max_guest):
        with pytest.raises(NoGameSelectedError, match="Please select a game first!"):
            await service.award_points(ALICE, max_guest.guest_id, None, "10")

    async def test_unknown_game(self, service, max_guest):
        with pytest.raises(GameNotFoundError):
            await service.award_points(BOSS, max_guest.guest_id, "tilt-a-whirl", "10")

    async def test_not_assigned(self, service, max_guest, play_repo):
        with pytest.raises(NotAuthorizedError, match="not authorized to manage this game"):
            await service.award_points(BOB, max_guest.guest_id, "ring-toss", "10")
        assert await play_repo.list_plays() == []

    async def test_authorization_checked_before_points(self, service, max_guest):
        with pytest.raises(NotAuthorizedError):
            await service.award_points(BOB, max_guest.guest_id, "ring-toss", "")

    async def test_invalid_points(self, service, max_guest):
        with pytest.raises(InvalidPointsError, match="Please enter points to award!"):
            await service.award_points(ALICE, max_guest.guest_id, "ring-toss", "0")

    async def test_unknown_guest(self, service):
        with pytest.raises(GuestNotFoundError):
            await service.award_points(ALICE, "ghost", "ring-toss", "10")

    async def test_super_admin_awards_any_game(self, service, max_guest):
        play = await service.award_points(BOSS, max_guest.guest_id, "balloon-darts", "-3")

        assert play.points_awarded == -3

    async def test_concurrent_duplicate_from_store_is_already_played(self, service, play_repo, max_guest):
        with (
            patch.object(play_repo, "record_award", side_effect=DuplicatePlayError(max_guest.guest_id, "plinko")),
            pytest.raises(AlreadyPlayedError, match="Plinko"),
        ):
            await service.award_points(ALICE, max_guest.guest_id, "plinko", "5")

    async def test_feed_notified_after_award(self, service, feed, max_guest):
        await service.award_points(ALICE, max_guest.guest_id, "plinko", "5")

        feed.publish.assert_awaited_once()

    async def test_feed_not_notified_on_refusal(self, service, feed, max_guest):
        with pytest.raises(InvalidPointsError):
            await service.award_points(ALICE, max_guest.guest_id, "plinko", "abc")

        feed.publish.assert_not_awaited()

    async def test_award_survives_a_disconnected_subscriber(self, guest_repo, game_repo, play_repo, games, max_guest):
        feed = LeaderboardFeed(guest_repo, play_repo)
        gone = AsyncMock()
        gone.send_text.side_effect = WebSocketDisconnect(code=1006)
        feed.add("gone", gone)
        service = ScoringService(guest_repo, game_repo, play_repo, feed=feed)

        play = await service.award_points(ALICE, max_guest.guest_id, "plinko", "5")

        assert play.points_awarded == 5
        assert feed.subscriber_count == 0

    async def test_award_is_logged(self, service, max_guest, caplog):
        with caplog.at_level("INFO"):
            await service.award_points(ALICE, max_guest.guest_id, "plinko", "5")

        assert any("points awarded" in str(r.msg) for r in caplog.records)


class TestUpdateChecks:
    async def test_requires_existing_play(self, service, max_guest):
        with pytest.raises(PlayNotFoundError, match="No existing game play found!"):
            await service.update_points(ALICE, max_guest.guest_id, "ring-toss", "15")

    async def test_invalid_points_wording(self, service, max_guest):
        await service.award_points(ALICE, max_guest.guest_id, "ring-toss", "10")

        with pytest.raises(InvalidPointsError, match="Please enter points to update!"):
            await service.update_points(ALICE, max_guest.guest_id, "ring-toss", "")

    async def test_other_staff_cannot_update(self, service, max_guest):
        await service.award_points(ALICE, max_guest.guest_id, "ring-toss", "10")

        with pytest.raises(NotAuthorizedError):
            await service.update_points(BOB, max_guest.guest_id, "ring-toss", "1")

    async def test_lowering_a_score_subtracts_points(self, service, guest_repo, max_guest):
        await service.award_points(ALICE, max_guest.guest_id, "ring-toss", "10")
        await service.update_points(BOSS, max_guest.guest_id, "ring-toss", "4")

        assert (await guest_repo.get_guest(max_guest.guest_id)).points == 4
        assert await service.audit_guest_points(max_guest.guest_id) == (4, 4)


class TestAssignGame:
    async def test_super_admin_assigns(self, service, game_repo):
        game = await service.assign_game(BOSS, "balloon-darts", " C@X.com ")

        assert game.assigned_user_email == "c@x.com"
        assert (await game_repo.get_game("balloon-darts")).assigned_user_email == "c@x.com"

    async def test_blank_email_clears_assignment(self, service):
        game = await service.assign_game(BOSS, "ring-toss", "")

        assert game.assigned_user_email is None

    async def test_staff_cannot_assign(self, service):
        with pytest.raises(NotAuthorizedError):
            await service.assign_game(ALICE, "duck-hunt", "a@x.com")

    async def test_unknown_game(self, service):
        with pytest.raises(GameNotFoundError):
            await service.assign_game(BOSS, "tilt-a-whirl", "a@x.com")
