# ABOUTME: Unit tests for the BookCollection protocol and check_collection.
# ABOUTME: Verifies fresh fetches, whole-collection matching, and fetch failure wrapping.

from collections.abc import Callable

import pytest

from hondana.books.types import CandidateBook, StoredBook
from hondana.matching.collection import BookCollection, FetchFailedError, check_collection
from hondana.matching.duplicates import MatchOptions, ReasonCode


class ListCollection:
    """In-memory collection that records how often it was fetched."""

    def __init__(self, books: list[StoredBook]) -> None:
        self.books = books
        self.fetches: list[str | None] = []

    def fetch_user_books(self, title_contains: str | None = None) -> list[StoredBook]:
        self.fetches.append(title_contains)
        return list(self.books)


class BrokenCollection:
    def fetch_user_books(self, title_contains: str | None = None) -> list[StoredBook]:
        raise ConnectionError("database is locked")


class TestCheckCollection:
    """Tests for check_collection."""

    def test_fakes_satisfy_protocol(self) -> None:
        assert isinstance(ListCollection([]), BookCollection)
        assert isinstance(BrokenCollection(), BookCollection)

    def test_finds_isbn_match_under_new_title(
        self, make_stored: Callable[..., StoredBook]
    ) -> None:
        """The whole collection is searched, so a retitled edition still matches."""
        stored = make_stored("吾輩ハ猫デアル", isbn13="9784101010014")
        collection = ListCollection([stored])

        results = check_collection(
            CandidateBook(title="吾輩は猫である", isbn13="978-4-10-101001-4"), collection
        )

        assert [r.book.id for r in results] == [stored.id]
        assert results[0].has_reason(ReasonCode.ISBN)
        assert collection.fetches == [None]

    def test_fetches_fresh_each_time(self, make_stored: Callable[..., StoredBook]) -> None:
        collection = ListCollection([])
        candidate = CandidateBook(title="Kokoro", authors=["Natsume Soseki"])

        assert check_collection(candidate, collection) == []
        collection.books.append(make_stored("Kokoro", ["Natsume Soseki"]))
        assert len(check_collection(candidate, collection)) == 1

    def test_options_passed_through(self, make_stored: Callable[..., StoredBook]) -> None:
        collection = ListCollection([make_stored("Kokoro")])
        candidate = CandidateBook(title="Kokoro")

        assert check_collection(candidate, collection) == []
        assert len(check_collection(candidate, collection, MatchOptions(min_match_score=50))) == 1

    def test_fetch_failure_wrapped(self) -> None:
        with pytest.raises(FetchFailedError, match="database is locked") as exc_info:
            check_collection(CandidateBook(title="Kokoro"), BrokenCollection())
        assert isinstance(exc_info.value.__cause__, ConnectionError)
