"""Staff account and session models for authentication."""

from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, field_validator


class StaffRole(StrEnum):
    SUPER_ADMIN = "super_admin"  # manages every game
    STAFF = "staff"  # manages only games assigned to their email


class StaffAccount(BaseModel, frozen=True):
    """Staff account stored in the staff repository."""

    user_id: str
    email: str
    password_hash: str  # bcrypt hash in production, "simple$..." in tests
    role: StaffRole = StaffRole.STAFF

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("password_hash")
    @classmethod
    def _require_password_hash(cls, value: str) -> str:
        if not value:
            raise ValueError("Staff accounts must have a password hash")
        return value

    @property
    def is_super_admin(self) -> bool:
        return self.role == StaffRole.SUPER_ADMIN


@dataclass
class AuthSession:
    """Server-side session for a signed-in staff member."""

    session_id: str  # UUID, stored in cookie
    user_id: str
    email: str
    created_at: float  # time.time()
    expires_at: float  # time.time() + TTL
    role: StaffRole = StaffRole.STAFF
