"""Abstract interface for staff account persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared.auth.models import StaffAccount


class StaffRepository(ABC):
    @abstractmethod
    async def create_staff(self, account: StaffAccount) -> None: ...

    @abstractmethod
    async def get_by_email(self, email: str) -> StaffAccount | None: ...
