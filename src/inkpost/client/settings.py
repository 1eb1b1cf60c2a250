"""Client configuration loaded from ``INKPOST_*`` environment variables."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Settings for talking to an Inkpost server."""

    api_base_url: str = Field(default="http://localhost:8000")
    session_file: Path = Field(default=Path.home() / ".inkpost" / "session.json")
    page_size: int = Field(default=5, ge=1)

    model_config = SettingsConfigDict(
        env_prefix="INKPOST_",
        env_file=".env",
        extra="ignore",
    )
