"""Scoring failures carrying messages that are shown to staff as-is."""


class ScoringError(Exception):
    """A points operation was refused."""


class NoGameSelectedError(ScoringError):
    def __init__(self) -> None:
        super().__init__("Please select a game first!")


class NotAuthorizedError(ScoringError):
    def __init__(self) -> None:
        super().__init__("You are not authorized to manage this game!")


class InvalidPointsError(ScoringError):
    """Points input did not parse to a non-zero integer."""


class GameNotFoundError(ScoringError):
    def __init__(self, game_id: str) -> None:
        super().__init__(f"Game '{game_id}' not found")
        self.game_id = game_id


class GuestNotFoundError(ScoringError):
    def __init__(self, guest_id: str) -> None:
        super().__init__(f"Guest '{guest_id}' not found")
        self.guest_id = guest_id


class AlreadyPlayedError(ScoringError):
    def __init__(self, game_name: str) -> None:
        super().__init__(f"This guest has already played {game_name}!")
        self.game_name = game_name


class PlayNotFoundError(ScoringError):
    def __init__(self) -> None:
        super().__init__("No existing game play found!")
