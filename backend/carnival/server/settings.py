"""Carnival server configuration via environment variables."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import field_validator
from pydantic_settings import BaseSettings

from shared.validators import StringListEnvSettingsSource, parse_string_list

if TYPE_CHECKING:
    from pydantic_settings.sources.base import PydanticBaseSettingsSource

_PACKAGE_STATIC_DIR = Path(__file__).resolve().parent.parent / "views" / "static"


class CarnivalServerSettings(BaseSettings):
    model_config = {"env_prefix": "CARNIVAL_"}

    log_dir: str = "backend/logs/carnival"
    cors_origins: list[str] = []
    roster_path: Path | None = None
    static_dir: str = str(_PACKAGE_STATIC_DIR)
    # None disables the Origin check on the leaderboard WebSocket
    ws_allowed_origin: str | None = "http://localhost:8700"
    event_name: str = "HANIVAL"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def validate_cors_origins(cls, v: str | list[str]) -> list[str]:
        return parse_string_list(v, allow_empty=True)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, StringListEnvSettingsSource(settings_cls), dotenv_settings, file_secret_settings)
