# ABOUTME: BookCollection protocol and the fetch-then-match duplicate check.
# ABOUTME: Any store that can list a user's books can back the duplicate matcher.

import logging
from typing import Protocol, runtime_checkable

from hondana.books.types import CandidateBook, StoredBook
from hondana.matching.duplicates import (
    MatchOptions,
    MatchResult,
    find_potential_duplicates,
)

logger = logging.getLogger(__name__)


class FetchFailedError(Exception):
    """Raised when the user's collection could not be fetched for a duplicate check."""


@runtime_checkable
class BookCollection(Protocol):
    """Protocol for a single user's book collection.

    Implementations are already scoped to one user; the matcher never sees
    which user that is.
    """

    def fetch_user_books(self, title_contains: str | None = None) -> list[StoredBook]: ...


def check_collection(
    candidate: CandidateBook,
    collection: BookCollection,
    options: MatchOptions | None = None,
) -> list[MatchResult]:
    """Fetch a fresh snapshot of the collection and look for duplicates in it.

    The whole collection is fetched, not a title-filtered subset, so that
    ISBN and catalog id matches on retitled editions are still found.

    Raises:
        FetchFailedError: If the collection fetch fails for any reason.
        InvalidArgumentError: If the candidate or options are malformed.
    """
    try:
        books = collection.fetch_user_books()
    except Exception as exc:
        raise FetchFailedError(f"Could not load collection: {exc}") from exc

    return find_potential_duplicates(candidate, books, options)
