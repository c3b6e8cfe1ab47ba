"""Configuration helpers for golfmap constants."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_VENUES_DIR = Path("data/venues")
DEFAULT_COUNTRY_CODE = "us"

class _Settings(BaseSettings):
    venues_dir: Path = Field(default=DEFAULT_VENUES_DIR, alias="GOLFMAP_VENUES_DIR")
    default_country_code: str = Field(
        default=DEFAULT_COUNTRY_CODE, alias="GOLFMAP_DEFAULT_COUNTRY_CODE"
    )

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

@lru_cache(maxsize=1)
def get_settings() -> _Settings:
    """Return cached library settings."""

    return _Settings()  # type: ignore[call-arg]

def reset_settings_cache() -> None:
    """Clear cached settings (primarily for tests)."""

    get_settings.cache_clear()


__all__ = [
    "DEFAULT_COUNTRY_CODE",
    "DEFAULT_VENUES_DIR",
    "get_settings",
    "reset_settings_cache",
]
