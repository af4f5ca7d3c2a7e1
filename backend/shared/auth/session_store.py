"""In-memory staff session store with periodic expiry cleanup."""

import asyncio
import contextlib
import time
from uuid import uuid4

import structlog

from shared.auth.models import AuthSession, StaffRole

CLEANUP_INTERVAL_SECONDS = 300
DEFAULT_SESSION_TTL_SECONDS = 86400  # one carnival day

logger = structlog.get_logger()


class AuthSessionStore:
    """Keep staff sessions in process memory.

    A restart signs every staff member out. The app lifespan starts the
    cleanup task on startup and stops it on shutdown.
    """

    def __init__(self, ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS) -> None:
        self._ttl_seconds = ttl_seconds
        self._sessions: dict[str, AuthSession] = {}
        self._cleanup_task: asyncio.Task[None] | None = None

    def create_session(self, user_id: str, email: str, role: StaffRole = StaffRole.STAFF) -> AuthSession:
        now = time.time()
        session = AuthSession(
            session_id=str(uuid4()),
            user_id=user_id,
            email=email,
            created_at=now,
            expires_at=now + self._ttl_seconds,
            role=role,
        )
        self._sessions[session.session_id] = session
        return session

    def get_session(self, session_id: str) -> AuthSession | None:
        """Return the session unless it is unknown or has expired."""
        session = self._sessions.get(session_id)
        if session is not None and time.time() > session.expires_at:
            del self._sessions[session_id]
            return None
        return session

    def delete_session(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def cleanup_expired(self) -> int:
        """Drop expired sessions and return how many were removed."""
        now = time.time()
        expired = [sid for sid, session in self._sessions.items() if now > session.expires_at]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("expired staff sessions removed", count=len(expired))
        return len(expired)

    def start_cleanup(self) -> None:
        if self._cleanup_task is None or self._cleanup_task.done():
            self._cleanup_task = asyncio.create_task(self._cleanup_loop())

    async def stop_cleanup(self) -> None:
        if self._cleanup_task is None:
            return
        self._cleanup_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._cleanup_task
        self._cleanup_task = None

    async def _cleanup_loop(self) -> None:
        while True:
            await asyncio.sleep(CLEANUP_INTERVAL_SECONDS)
            self.cleanup_expired()
