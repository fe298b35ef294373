# ABOUTME: Environment-driven settings for Hondana.
# ABOUTME: Reads HONDANA_* variables (or a .env file) for paths, credentials, and matcher defaults.

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from hondana.db.connection import DEFAULT_DB_PATH
from hondana.matching.duplicates import DEFAULT_MAX_RESULTS, DEFAULT_MIN_MATCH_SCORE


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="HONDANA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    db_path: Path = DEFAULT_DB_PATH

    # Owner of the collection for this process. The CLI's --user overrides it.
    user_id: str = "local"

    # Only the catalog commands (search, add --volume) need a key.
    google_books_api_key: str | None = None
    google_books_lang: str = "ja"
    google_books_max_results: int = Field(default=20, ge=1, le=40)
    cache_ttl_seconds: float = Field(default=300.0, ge=0)

    min_match_score: int = Field(default=DEFAULT_MIN_MATCH_SCORE, ge=0, le=100)
    max_duplicate_results: int = Field(default=DEFAULT_MAX_RESULTS, ge=0)


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()
