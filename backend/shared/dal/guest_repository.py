"""Abstract interface for guest persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared.dal.models import Guest


class GuestRepository(ABC):
    @abstractmethod
    async def create_guest(self, guest: Guest) -> None: ...

    @abstractmethod
    async def get_guest(self, guest_id: str) -> Guest | None: ...

    @abstractmethod
    async def list_by_name(self) -> list[Guest]: ...

    @abstractmethod
    async def list_by_points(self) -> list[Guest]:
        """Return guests by points descending; equal totals keep registration order."""
