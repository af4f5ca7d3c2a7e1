"""Auth settings for the carnival server and operator scripts."""

from typing import Literal

from pydantic_settings import BaseSettings


class AuthSettings(BaseSettings):
    model_config = {"env_prefix": "AUTH_"}

    # SQLite database file path (guests, games, plays, history, staff)
    database_path: str = "backend/carnival.db"

    # Cookie Secure flag -- True in production, False for local dev (HTTP)
    cookie_secure: bool = False

    # "simple" is only meant for tests
    password_hasher: Literal["bcrypt", "simple"] = "bcrypt"
