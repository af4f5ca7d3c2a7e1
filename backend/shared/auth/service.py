"""Staff account creation, login, and session validation."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

from shared.auth.models import StaffAccount, StaffRole

if TYPE_CHECKING:
    from shared.auth.models import AuthSession
    from shared.auth.password import PasswordHasher
    from shared.auth.session_store import AuthSessionStore
    from shared.dal.staff_repository import StaffRepository

logger = structlog.get_logger()

EMAIL_MAX_LENGTH = 254
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 72  # bcrypt truncates at 72 bytes

INVALID_CREDENTIALS = "Invalid login credentials"


class AuthError(Exception):
    """Authentication failure with a message safe to show the user."""


class AuthService:
    """Coordinate staff account creation, login, and session lookup."""

    def __init__(
        self,
        staff_repo: StaffRepository,
        session_store: AuthSessionStore | None = None,
        *,
        password_hasher: PasswordHasher,
    ) -> None:
        self._staff_repo = staff_repo
        self._session_store = session_store
        self._hasher = password_hasher

    async def register_staff(self, email: str, password: str, role: StaffRole = StaffRole.STAFF) -> StaffAccount:
        """Create a staff account. Used by the operator script, never by a public page."""
        email = normalize_email(email)
        _validate_email(email)
        _validate_password(password)
        if await self._staff_repo.get_by_email(email) is not None:
            raise AuthError(f"Staff account '{email}' already exists")

        account = StaffAccount(
            user_id=str(uuid4()),
            email=email,
            password_hash=await self._hasher.hash(password),
            role=role,
        )
        try:
            await self._staff_repo.create_staff(account)
        except ValueError as e:
            raise AuthError(str(e)) from e
        logger.info("staff account created", email=email, role=role)
        return account

    async def login(self, email: str, password: str) -> AuthSession:
        """Check credentials and open a session."""
        store = self._require_session_store()
        account = await self._staff_repo.get_by_email(normalize_email(email))
        if account is None or not await self._hasher.verify(password, account.password_hash):
            logger.info("login failed", email=email)
            raise AuthError(INVALID_CREDENTIALS)
        logger.info("staff logged in", email=account.email)
        return store.create_session(account.user_id, account.email, role=account.role)

    def validate_session(self, session_id: str | None) -> AuthSession | None:
        if session_id is None:
            return None
        return self._require_session_store().get_session(session_id)

    def logout(self, session_id: str) -> None:
        self._require_session_store().delete_session(session_id)

    def _require_session_store(self) -> AuthSessionStore:
        if self._session_store is None:
            raise RuntimeError("session_store is required for session operations")
        return self._session_store


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _validate_email(email: str) -> None:
    if len(email) > EMAIL_MAX_LENGTH or not EMAIL_PATTERN.match(email):
        raise AuthError(f"'{email}' is not a valid email address")


def _validate_password(password: str) -> None:
    """Enforce 8-72 characters and at most 72 UTF-8 bytes."""
    if len(password) < PASSWORD_MIN_LENGTH or len(password) > PASSWORD_MAX_LENGTH:
        raise AuthError(f"Password must be between {PASSWORD_MIN_LENGTH} and {PASSWORD_MAX_LENGTH} characters")
    if len(password.encode("utf-8")) > PASSWORD_MAX_LENGTH:
        raise AuthError(f"Password must not exceed {PASSWORD_MAX_LENGTH} bytes when encoded")
