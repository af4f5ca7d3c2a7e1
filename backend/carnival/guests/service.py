"""Guest self-registration."""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import urlparse
from uuid import uuid4

import structlog

from shared.dal.models import Guest

if TYPE_CHECKING:
    from carnival.realtime.feed import LeaderboardFeed
    from shared.dal.guest_repository import GuestRepository

logger = structlog.get_logger()

NAME_MAX_LENGTH = 60
CATCH_PHRASE_MAX_LENGTH = 200
PHOTO_URL_MAX_LENGTH = 2048


class RegistrationError(Exception):
    """Registration input was rejected; the message is shown to the guest."""


class GuestService:
    def __init__(self, guest_repo: GuestRepository, feed: LeaderboardFeed | None = None) -> None:
        self._guest_repo = guest_repo
        self._feed = feed

    async def register(self, name: str, catch_phrase: str, photo_url: str | None = None) -> Guest:
        """Create a guest with zero points and announce them on the live leaderboard."""
        guest = Guest(
            guest_id=str(uuid4()),
            name=_require_text(name, "stage name", NAME_MAX_LENGTH),
            catch_phrase=_require_text(catch_phrase, "catch phrase", CATCH_PHRASE_MAX_LENGTH),
            photo_url=_clean_photo_url(photo_url),
        )
        await self._guest_repo.create_guest(guest)
        logger.info("guest registered", guest_id=guest.guest_id, name=guest.name)
        if self._feed is not None:
            await self._feed.publish()
        return guest


def _require_text(value: str, label: str, max_length: int) -> str:
    value = value.strip()
    if not value:
        raise RegistrationError(f"Please enter your {label}!")
    if len(value) > max_length:
        raise RegistrationError(f"Your {label} must be at most {max_length} characters")
    return value


def _clean_photo_url(photo_url: str | None) -> str | None:
    if photo_url is None or not photo_url.strip():
        return None
    photo_url = photo_url.strip()
    parsed = urlparse(photo_url)
    if len(photo_url) > PHOTO_URL_MAX_LENGTH or parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise RegistrationError("Photo must be an http(s) link")
    return photo_url
