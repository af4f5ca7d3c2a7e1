"""WebSocket endpoint streaming the public leaderboard."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

import structlog
from starlette.websockets import WebSocket, WebSocketDisconnect

from shared.dal.errors import StoreError

if TYPE_CHECKING:
    from carnival.realtime.feed import LeaderboardFeed
    from carnival.server.settings import CarnivalServerSettings

logger = structlog.get_logger()


async def leaderboard_websocket(websocket: WebSocket) -> None:
    """Send a standings snapshot on connect, then every update until the client leaves.

    Public like the leaderboard page itself. Clients may send "ping" to keep
    idle proxies from closing the socket.
    """
    if not _check_origin(websocket):
        await websocket.close(code=4003, reason="forbidden_origin")
        return

    await websocket.accept()
    feed: LeaderboardFeed = websocket.app.state.leaderboard_feed
    connection_id = str(uuid.uuid4())
    log = logger.bind(connection_id=connection_id)

    feed.add(connection_id, websocket)
    log.info("leaderboard subscriber connected", subscribers=feed.subscriber_count)
    try:
        await websocket.send_json(await feed.snapshot())
        while True:
            message = await websocket.receive_text()
            if message == "ping":
                await websocket.send_json({"type": "pong"})
    except WebSocketDisconnect:
        pass
    except StoreError:
        log.exception("could not load standings for new subscriber")
        await websocket.close(code=1011, reason="store_unavailable")
    finally:
        feed.remove(connection_id)
        log.info("leaderboard subscriber disconnected", subscribers=feed.subscriber_count)


def _check_origin(websocket: WebSocket) -> bool:
    settings: CarnivalServerSettings = websocket.app.state.settings
    if not settings.ws_allowed_origin:
        return True
    return websocket.headers.get("origin", "") == settings.ws_allowed_origin
