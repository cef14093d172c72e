# app/config.py
"""
Configuration management using Pydantic Settings.

Values are read once from environment variables (or a ``.env`` file)
and shared by every fetch operation through ``get_settings()``.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_name: str = Field(default="Plant Lexicon", description="Application name")
    log_level: str = Field(default="INFO", description="Root logging level")

    # Perenual species API
    perenual_api_key: str = Field(default="", description="Perenual API key")
    perenual_base_url: str = Field(
        default="https://perenual.com/api", description="Perenual API base URL"
    )

    # Minimum time a loading indicator stays visible, in milliseconds
    minimum_loading_ms: int = Field(default=3000, ge=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
