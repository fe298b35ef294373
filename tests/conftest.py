# ABOUTME: Shared pytest fixtures for Hondana tests.
# ABOUTME: Provides temp-database repositories and a StoredBook factory.

from collections.abc import Callable, Iterator
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest

from hondana.books.types import BookFormat, StoredBook
from hondana.db.connection import open_library
from hondana.db.repository import BookRepository


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep tests away from the real home directory and any local .env."""
    for name in (
        "HONDANA_DB_PATH",
        "HONDANA_USER_ID",
        "HONDANA_GOOGLE_BOOKS_API_KEY",
        "HONDANA_MIN_MATCH_SCORE",
        "HONDANA_MAX_DUPLICATE_RESULTS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HONDANA_DB_PATH", str(tmp_path / "default.db"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "library.db"


@pytest.fixture
def repo(db_path: Path) -> Iterator[BookRepository]:
    """A repository for user 'alice' backed by a temporary database."""
    conn = open_library(db_path)
    yield BookRepository(conn, "alice")
    conn.close()


@pytest.fixture
def make_stored() -> Callable[..., StoredBook]:
    """Factory for in-memory StoredBooks with distinct ids and timestamps."""
    counter = {"id": 0}

    def _make(title: str, authors: list[str] | None = None, **kwargs: Any) -> StoredBook:
        counter["id"] += 1
        book_id = kwargs.pop("id", counter["id"])
        kwargs.setdefault("updated_at", datetime(2024, 1, book_id, tzinfo=UTC))
        kwargs.setdefault("format", BookFormat.PHYSICAL)
        return StoredBook(
            id=book_id,
            user_id="alice",
            title=title,
            authors=authors if authors is not None else [],
            **kwargs,
        )

    return _make
