"""
Application configuration using Pydantic Settings.

Automatically loads environment variables from .env files.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Extraction tiers
    min_text_length: int = Field(
        default=50,
        ge=0,
        description="Acquired text shorter than this falls back to the specialized tier",
    )
    min_recoverable_text_length: int = Field(
        default=10,
        ge=0,
        description="Specialized summary shorter than this is a terminal failure",
    )
    parallel_field_parsing: bool = False
    parser_workers: int = Field(default=4, ge=1)

    # Upload limits (enforced by the HTTP layer, not the engine)
    max_upload_bytes: int = 10 * 1024 * 1024

    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    # Debug flags
    log_level: str = "INFO"
    debug: bool = False

    model_config = SettingsConfigDict(
        # Load from .env file in the backend directory
        env_file=Path(__file__).parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        # Case insensitive environment variable names
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application configuration loaded from environment.
    """
    return Settings()
