"""Staff user model for Starlette AuthenticationMiddleware integration."""

from __future__ import annotations

from starlette.authentication import BaseUser

from shared.auth.models import StaffRole


class AuthenticatedStaff(BaseUser):
    """Signed-in staff member exposed as ``request.user``.

    The email is the identity used for game ownership checks.
    """

    def __init__(self, user_id: str, email: str, role: StaffRole = StaffRole.STAFF) -> None:
        self._user_id = user_id
        self._email = email
        self._role = role

    @property
    def is_authenticated(self) -> bool:  # pragma: no cover
        return True

    @property
    def display_name(self) -> str:
        return self._email

    @property
    def identity(self) -> str:  # pragma: no cover
        return self._user_id

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def email(self) -> str:
        return self._email

    @property
    def role(self) -> StaffRole:
        return self._role

    @property
    def is_super_admin(self) -> bool:
        return self._role == StaffRole.SUPER_ADMIN
