"""Configuration management for vidcatalog."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from vidcatalog.models import Role


class UserAccount(BaseModel):
    """A configured login for the REST API."""

    password: str
    roles: list[Role] = Field(default_factory=lambda: [Role.USER])


def _default_users() -> dict[str, UserAccount]:
    return {
        "admin": UserAccount(password="pass", roles=[Role.ADMIN, Role.USER]),
        "user0": UserAccount(password="pass", roles=[Role.USER]),
    }


class Settings(BaseSettings):
    """Application settings with environment variable overrides.

    All settings can be overridden via environment variables
    prefixed with VIDCATALOG_ (e.g. VIDCATALOG_DATA_DIR, VIDCATALOG_PORT).
    Complex values such as VIDCATALOG_USERS are parsed as JSON.
    """

    model_config = {"env_prefix": "VIDCATALOG_"}

    # Storage
    data_dir: Path = Field(
        default_factory=lambda: Path.home() / ".vidcatalog",
        description="Root directory for all vidcatalog data",
    )
    storage: Literal["sqlite", "memory"] = "sqlite"
    # Replace client-supplied urls with this server's /video/{id}/data link
    derive_data_url: bool = True

    # Server
    host: str = "127.0.0.1"
    port: int = 8080
    mcp_port: int = 9094

    log_level: str = "INFO"

    # Auth
    users: dict[str, UserAccount] = Field(default_factory=_default_users)

    @property
    def db_path(self) -> Path:
        """SQLite database path."""
        return self.data_dir / "vidcatalog.db"

    @property
    def videos_dir(self) -> Path:
        """Directory holding uploaded video payloads."""
        return self.data_dir / "videos"

    def ensure_dirs(self) -> None:
        """Create all required directories if they don't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.videos_dir.mkdir(parents=True, exist_ok=True)


# Module-level singleton — import this throughout the app
settings = Settings()
