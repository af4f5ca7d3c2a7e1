"""Live leaderboard: push fresh standings to every subscribed WebSocket."""

from __future__ import annotations

import contextlib
import json
from typing import TYPE_CHECKING

import structlog
from starlette.websockets import WebSocketDisconnect

from carnival.scoring.leaderboard import standing_to_dict, standings
from shared.dal.errors import StoreError

if TYPE_CHECKING:
    from starlette.websockets import WebSocket

    from shared.dal.guest_repository import GuestRepository
    from shared.dal.play_repository import PlayRepository

logger = structlog.get_logger()


class LeaderboardFeed:
    """Track leaderboard subscribers and broadcast after guest data changes.

    The services that mutate guests (registration, award, update) call
    ``publish``; there is no polling.
    """

    def __init__(
        self,
        guest_repo: GuestRepository,
        play_repo: PlayRepository,
    ) -> None:
        self._guest_repo = guest_repo
        self._play_repo = play_repo
        self._connections: dict[str, WebSocket] = {}  # connection_id -> ws

    @property
    def subscriber_count(self) -> int:
        return len(self._connections)

    def add(self, connection_id: str, websocket: WebSocket) -> None:
        self._connections[connection_id] = websocket

    def remove(self, connection_id: str) -> bool:
        return self._connections.pop(connection_id, None) is not None

    async def snapshot(self) -> dict:
        guests = await self._guest_repo.list_by_points()
        plays = await self._play_repo.list_plays()
        rows = standings(guests, plays)
        return {"type": "standings", "guests": [standing_to_dict(row) for row in rows]}

    async def publish(self) -> None:
        """Broadcast current standings. Store failures are logged, never raised.

        The change that triggered the publish has already been committed, so
        a failed read here must not turn a successful award into an error.
        """
        if not self._connections:
            return
        try:
            message = await self.snapshot()
        except StoreError:
            logger.exception("could not load standings for live leaderboard")
            return
        await self.broadcast(message)

    async def broadcast(self, message: dict) -> None:
        """Send a JSON message to every subscriber, dropping sockets that fail."""
        payload = json.dumps(message)
        dead: list[str] = []
        for connection_id, ws in list(self._connections.items()):
            try:
                await ws.send_text(payload)
            except (ConnectionError, RuntimeError, WebSocketDisconnect):
                dead.append(connection_id)
        for connection_id in dead:
            self.remove(connection_id)
        if dead:
            logger.info("dropped dead leaderboard subscribers", count=len(dead))

    async def close_all(self, code: int = 1001, reason: str = "") -> None:
        connections, self._connections = self._connections, {}
        for ws in connections.values():
            with contextlib.suppress(ConnectionError, RuntimeError, WebSocketDisconnect):
                await ws.close(code=code, reason=reason)
