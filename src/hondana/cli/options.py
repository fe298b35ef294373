# ABOUTME: Shared Click options and collection access for Hondana CLI commands.
# ABOUTME: Provides --db and --user, and opens a user-scoped repository.

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import click

from hondana.config import get_settings
from hondana.db.connection import DEFAULT_DB_PATH, open_library
from hondana.db.repository import BookRepository
from hondana.googlebooks.client import GoogleBooksClient
from hondana.googlebooks.http import HondanaHttpClient

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(path_type=Path),
    default=None,
    help=f"Path to library database (default: $HONDANA_DB_PATH or {DEFAULT_DB_PATH})",
)

user_option = click.option(
    "--user",
    "user_id",
    default=None,
    help="Collection owner (default: $HONDANA_USER_ID or 'local').",
)


@contextmanager
def open_catalog() -> Iterator[GoogleBooksClient]:
    """Yield a Google Books client built from settings, closing its connections on exit.

    Raises:
        click.ClickException: If no API key is configured.
    """
    settings = get_settings()
    if not settings.google_books_api_key:
        raise click.ClickException(
            "Google Books API key is not configured. Set HONDANA_GOOGLE_BOOKS_API_KEY."
        )
    with HondanaHttpClient() as http:
        yield GoogleBooksClient(
            http,
            settings.google_books_api_key,
            lang=settings.google_books_lang,
            cache_ttl=settings.cache_ttl_seconds,
        )


@contextmanager
def open_repository(db_path: Path | None, user_id: str | None) -> Iterator[BookRepository]:
    """Open the database and yield a repository for one user, closing on exit."""
    settings = get_settings()
    conn = open_library(db_path or settings.db_path)
    try:
        yield BookRepository(conn, user_id or settings.user_id)
    finally:
        conn.close()
