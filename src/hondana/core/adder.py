# ABOUTME: Add-book flow that checks the collection for duplicates before saving.
# ABOUTME: A failed duplicate check degrades to a warning and never blocks the add.

import logging
from dataclasses import dataclass, field

from hondana.books.types import BookFormat, CandidateBook, StoredBook
from hondana.db.repository import BookRepository
from hondana.matching.collection import FetchFailedError, check_collection
from hondana.matching.duplicates import MatchOptions, MatchResult

logger = logging.getLogger(__name__)

DUPLICATE_CHECK_WARNING = "重複チェックに失敗しました。重複がないか確認できませんでした。"


@dataclass
class AddOutcome:
    """Result of an add attempt.

    book is None when the add was held back because duplicates were found
    and the caller did not force it.
    """

    book: StoredBook | None = None
    duplicates: list[MatchResult] = field(default_factory=list)
    warning: str | None = None

    @property
    def added(self) -> bool:
        return self.book is not None


def find_duplicates(
    repo: BookRepository,
    candidate: CandidateBook,
    options: MatchOptions | None = None,
) -> tuple[list[MatchResult], str | None]:
    """Run the duplicate check, turning a failed collection fetch into a warning.

    Returns:
        (duplicates, warning). warning is None unless the fetch failed, in
        which case duplicates is empty.

    Raises:
        InvalidArgumentError: If the candidate or options are malformed.
    """
    try:
        return check_collection(candidate, repo, options), None
    except FetchFailedError as exc:
        logger.warning("Duplicate check for %r skipped: %s", candidate.title, exc)
        return [], DUPLICATE_CHECK_WARNING


def add_with_duplicate_check(
    repo: BookRepository,
    candidate: CandidateBook,
    book_format: BookFormat = BookFormat.PHYSICAL,
    platform: str | None = None,
    *,
    force: bool = False,
    check: bool = True,
    options: MatchOptions | None = None,
    purchase_date: str | None = None,
    purchase_price: float | None = None,
    notes: str | None = None,
) -> AddOutcome:
    """Add a book unless it looks like something the user already owns.

    When duplicates are found and force is False, nothing is written and
    the duplicates are returned for the user to judge. With force=True the
    book is added and the duplicates are still reported.

    Args:
        repo: The user's collection.
        candidate: The book to add.
        book_format: Physical or digital.
        platform: Store platform id, kept only for digital books.
        force: Add even when duplicates are found.
        check: Run the duplicate check at all.
        options: Matcher threshold and result limit.
    """
    duplicates: list[MatchResult] = []
    warning: str | None = None
    if check:
        duplicates, warning = find_duplicates(repo, candidate, options)

    if duplicates and not force:
        logger.info(
            "Holding back %r: %d possible duplicate(s)", candidate.title, len(duplicates)
        )
        return AddOutcome(book=None, duplicates=duplicates, warning=warning)

    book = repo.add_book(
        candidate,
        book_format,
        platform,
        purchase_date=purchase_date,
        purchase_price=purchase_price,
        notes=notes,
    )
    return AddOutcome(book=book, duplicates=duplicates, warning=warning)
