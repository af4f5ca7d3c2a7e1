"""Errors raised by repository implementations."""


class StoreError(RuntimeError):
    """The backing store rejected or failed an operation."""


class DuplicatePlayError(ValueError):
    """A play already exists for this (guest, game) pair."""

    def __init__(self, guest_id: str, game_id: str) -> None:
        super().__init__(f"Guest '{guest_id}' already has a play for game '{game_id}'")
        self.guest_id = guest_id
        self.game_id = game_id
