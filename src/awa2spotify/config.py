"""Configuration settings using pydantic-settings for environment variable loading."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables.
    
    Automatically reads from .env file and environment variables.
    Environment variables take precedence over .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Spotify bearer token (TOKEN)
    token: str = ""

    # Any non-empty value enables debug output (DEBUG)
    debug: str = ""

    # HTTP
    spotify_api_url: str = "https://api.spotify.com/v1"
    http_timeout: float = 30.0
    search_workers: int = Field(default=1, ge=1)

    # Logging
    log_format: Literal["console", "json"] = "console"

    @property
    def is_debug(self) -> bool:
        return self.debug != ""

    @property
    def log_level(self) -> str:
        return "DEBUG" if self.is_debug else "WARNING"

    def require_token(self) -> str:
        """Return the Spotify token or raise ConfigurationError when unset."""
        if not self.token:
            raise ConfigurationError(
                'the environment variable "TOKEN" must be set to spotify token.'
            )
        return self.token


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.
    
    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
