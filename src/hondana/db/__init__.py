# ABOUTME: Public API for the Hondana collection database layer.
# ABOUTME: Exports connection management, the per-user repository, and result types.

from hondana.db.connection import DEFAULT_DB_PATH, open_library
from hondana.db.repository import (
    BookNotFoundError,
    BookRepository,
    BookSearchOptions,
    PlatformStats,
    UserBookStats,
    UserPreferences,
)

__all__ = [
    "DEFAULT_DB_PATH",
    "BookNotFoundError",
    "BookRepository",
    "BookSearchOptions",
    "PlatformStats",
    "UserBookStats",
    "UserPreferences",
    "open_library",
]
