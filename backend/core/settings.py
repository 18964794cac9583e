"""
Centralized application settings using Pydantic BaseSettings.

This module provides type-safe access to environment variables with validation.
All settings are loaded once at application startup.
"""

from pathlib import Path
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings

# ============================================================================
# Application Constants
# ============================================================================

# Default SQLite database (file next to the project root)
DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./note_refinery.db"

# Model used for all three generation calls
DEFAULT_LLM_MODEL = "claude-sonnet-4-5-20250929"

# Number of entries returned by a search when the caller does not say
DEFAULT_SEARCH_PAGE_SIZE = 20


def _parse_bool(v, default: bool) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        return v.lower() in {"1", "true", "yes", "on"}
    return default


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults and are validated on startup.
    """

    # Authentication
    api_key_hash: Optional[str] = None
    jwt_secret: Optional[str] = None
    guest_password_hash: Optional[str] = None
    enable_guest_login: bool = False

    # Document store
    database_url: str = DEFAULT_DATABASE_URL

    # Language model
    llm_model: str = DEFAULT_LLM_MODEL
    llm_max_turns: int = 1

    # Search
    search_page_size: int = DEFAULT_SEARCH_PAGE_SIZE

    # CORS configuration
    frontend_url: Optional[str] = None

    # Debug configuration
    debug: bool = False

    @field_validator("enable_guest_login", mode="before")
    @classmethod
    def validate_enable_guest_login(cls, v: Optional[str]) -> bool:
        """Parse enable_guest_login from string to bool."""
        return _parse_bool(v, False)

    @field_validator("debug", mode="before")
    @classmethod
    def validate_debug(cls, v: Optional[str]) -> bool:
        """Parse debug from string to bool."""
        return _parse_bool(v, False)

    @field_validator("search_page_size")
    @classmethod
    def validate_search_page_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("search_page_size must be at least 1")
        return v

    @property
    def project_root(self) -> Path:
        """
        Get the project root directory (parent of backend/).

        Returns:
            Path to the project root directory
        """
        return Path(__file__).parent.parent.parent

    @property
    def env_file_path(self) -> Path:
        """Path of the .env file written by the setup script."""
        return self.project_root / ".env"

    def get_cors_origins(self) -> List[str]:
        """
        Get the list of allowed CORS origins.

        Returns:
            List of allowed origin URLs
        """
        origins = [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ]

        # Add custom frontend URL if provided
        if self.frontend_url:
            origins.append(self.frontend_url)

        return origins

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


# Singleton instance - load settings once
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()

        # Reload settings with explicit env file path if it exists
        env_path = _settings.env_file_path
        if env_path.exists():
            _settings = Settings(_env_file=str(env_path))

    return _settings


def reset_settings() -> None:
    """
    Reset the settings singleton (useful for testing).
    """
    global _settings
    _settings = None
