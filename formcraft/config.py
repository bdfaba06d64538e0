"""
Configuration settings for the formcraft question engine.

Uses Pydantic Settings for environment variable management with .env file support.
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FORMCRAFT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: str = Field(
        default="WARNING",
        description="Log level for the CLI (DEBUG, INFO, WARNING, ERROR)",
    )

    # ========================================
    # Builder
    # ========================================
    default_points: float = Field(
        default=1.0,
        ge=0,
        description="Points assigned to newly built questions",
    )

    # ========================================
    # Validation
    # ========================================
    legacy_cloze_validation: bool = Field(
        default=False,
        description="Accept cloze text that merely contains '{{' and '}}' instead of matched blanks",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
