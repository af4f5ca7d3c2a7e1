from pydantic import BaseModel, field_validator

# Used when no roster file is configured.
DEFAULT_GAME_NAMES = ("Ring Toss", "Duck Hunt", "Plinko", "Balloon Darts")

GAME_ICONS = {
    "Ring Toss": "🎯",
    "Duck Hunt": "🦆",
    "Plinko": "🎲",
    "Balloon Darts": "🎈",
}
DEFAULT_GAME_ICON = "🎮"


class RosterGame(BaseModel):
    name: str
    assigned_email: str | None = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Game name must not be empty")
        return value

    @field_validator("assigned_email")
    @classmethod
    def _normalize_email(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip().lower()
