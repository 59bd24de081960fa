"""
Playlist API: Application Configuration
==========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the application factory, the database layer and the entry point.
When:  Loaded once at module import time; validated before the app starts.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for local development: a file-backed
    SQLite database next to the working directory and INFO logging.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Format: <dialect>+<async driver>://...
    #   sqlite+aiosqlite:///./playlists.db     file-backed (default)
    #   sqlite+aiosqlite:///:memory:           volatile, lives as long as the process
    #   postgresql+asyncpg://user:pw@host/db   server database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./playlists.db",
        description="Async SQLAlchemy connection URL",
    )

    # Pool sizing does not apply to in-memory SQLite (single static connection)
    db_pool_size: int = Field(default=5, ge=1, le=100)
    db_max_overflow: int = Field(default=10, ge=0, le=50)
    db_pool_pre_ping: bool = Field(default=True)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated origins; "*" allows any
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="127.0.0.1")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @property
    def is_in_memory_database(self) -> bool:
        return is_in_memory_url(self.database_url)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DATABASE_URL and database_url both work
    }


def is_in_memory_url(url: str) -> bool:
    """
    True when `url` names a volatile SQLite database.

    Matches the plain `:memory:` form, an empty SQLite path
    (`sqlite+aiosqlite://`) and the URI form with `mode=memory`.
    """
    if not url.startswith("sqlite"):
        return False
    _, _, path = url.partition("://")
    return path in ("", "/") or ":memory:" in path or "mode=memory" in path


# Singleton instance: imported throughout the application
settings = Settings()
