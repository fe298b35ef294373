# ABOUTME: Scored duplicate detection between a candidate book and a user's collection.
# ABOUTME: Combines identifier, title, and author signals and explains each match.

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from hondana.books.types import CandidateBook, StoredBook
from hondana.matching.normalize import (
    is_unknown_author,
    jaccard,
    normalize_author,
    normalize_isbn,
    normalize_text,
    title_tokens,
)

logger = logging.getLogger(__name__)

# Points available per signal. An identifier match short-circuits to the max.
IDENTIFIER_SCORE = 100
TITLE_WEIGHT = 50
AUTHOR_WEIGHT = 30

# A signal must reach this similarity before it is reported as a reason.
REASON_THRESHOLD = 0.5

DEFAULT_MIN_MATCH_SCORE = 60
DEFAULT_MAX_RESULTS = 5


class InvalidArgumentError(ValueError):
    """Raised when matcher input has the wrong shape or is out of range."""


class ReasonCode(str, Enum):
    ISBN = "isbn"
    CATALOG_ID = "catalog_id"
    TITLE = "title"
    AUTHOR = "author"


@dataclass(frozen=True)
class MatchReason:
    code: ReasonCode
    detail: str


@dataclass
class MatchResult:
    """A stored book that may duplicate the candidate, with its score and reasons."""

    book: StoredBook
    score: int
    reasons: list[MatchReason] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not 0 <= self.score <= 100:
            msg = f"score must be between 0 and 100, got {self.score}"
            raise ValueError(msg)

    def has_reason(self, code: ReasonCode) -> bool:
        return any(r.code is code for r in self.reasons)


@dataclass(frozen=True)
class MatchOptions:
    min_match_score: int = DEFAULT_MIN_MATCH_SCORE
    max_results: int = DEFAULT_MAX_RESULTS

    def validate(self) -> None:
        """Raise InvalidArgumentError unless both options are integers in range."""
        for name in ("min_match_score", "max_results"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidArgumentError(f"{name} must be an integer, got {value!r}")
        if not 0 <= self.min_match_score <= 100:
            raise InvalidArgumentError(
                f"min_match_score must be between 0 and 100, got {self.min_match_score}"
            )
        if self.max_results < 0:
            raise InvalidArgumentError(
                f"max_results must not be negative, got {self.max_results}"
            )


def _identifier_reason(candidate: CandidateBook, stored: StoredBook) -> MatchReason | None:
    """Return a reason when the pair shares an ISBN or external catalog id."""
    isbn13 = normalize_isbn(candidate.isbn13)
    if isbn13 and isbn13 == normalize_isbn(stored.isbn13):
        return MatchReason(ReasonCode.ISBN, "ISBN一致")

    isbn10 = normalize_isbn(candidate.isbn10)
    if isbn10 and isbn10 == normalize_isbn(stored.isbn10):
        return MatchReason(ReasonCode.ISBN, "ISBN一致")

    catalog_id = (candidate.external_catalog_id or "").strip()
    if catalog_id and catalog_id == (stored.external_catalog_id or "").strip():
        return MatchReason(ReasonCode.CATALOG_ID, "同一カタログID")

    return None


def title_similarity(a: str, b: str) -> float:
    """Similarity of two titles in [0.0, 1.0].

    Normalized equality is 1.0; otherwise the overlap of significant words
    relative to their union.
    """
    norm_a = normalize_text(a)
    norm_b = normalize_text(b)
    if not norm_a or not norm_b:
        return 0.0
    if norm_a == norm_b:
        return 1.0
    return jaccard(title_tokens(a), title_tokens(b))


def _author_pairs(authors: Sequence[str]) -> list[tuple[str, str]]:
    """(normalized, original) pairs for known authors, first occurrence wins."""
    pairs: list[tuple[str, str]] = []
    seen: set[str] = set()
    for name in authors:
        if is_unknown_author(name):
            continue
        normalized = normalize_author(name)
        if normalized and normalized not in seen:
            seen.add(normalized)
            pairs.append((normalized, name.strip()))
    return pairs


def _name_similarity(a: str, b: str) -> float:
    # Spacing inside a name is not significant: 夏目 漱石 is 夏目漱石.
    if a.replace(" ", "") == b.replace(" ", ""):
        return 1.0
    return jaccard(frozenset(a.split()), frozenset(b.split()))


def author_overlap(
    candidate_authors: Sequence[str], stored_authors: Sequence[str]
) -> tuple[float, list[str]]:
    """Fraction of candidate authors found among the stored authors.

    Each candidate author counts by its best match against the stored
    names, so 'Robert Martin' partially matches 'Robert C. Martin'. Unknown
    placeholders on either side contribute nothing.

    Returns:
        (overlap, matched) where matched lists the stored author names
        whose best pairing reached REASON_THRESHOLD, in stored order.
    """
    wanted = _author_pairs(candidate_authors)
    have = _author_pairs(stored_authors)
    if not wanted or not have:
        return 0.0, []

    total = 0.0
    matched: set[str] = set()
    for cand_name, _ in wanted:
        best = 0.0
        for stored_name, _ in have:
            sim = _name_similarity(cand_name, stored_name)
            if sim >= REASON_THRESHOLD:
                matched.add(stored_name)
            best = max(best, sim)
        total += best

    names = [original for normalized, original in have if normalized in matched]
    return total / len(wanted), names


def score_pair(candidate: CandidateBook, stored: StoredBook) -> MatchResult:
    """Score one (candidate, stored) pair. Deterministic for a given pair."""
    identifier = _identifier_reason(candidate, stored)
    if identifier is not None:
        return MatchResult(book=stored, score=IDENTIFIER_SCORE, reasons=[identifier])

    reasons: list[MatchReason] = []

    title_sim = title_similarity(candidate.title, stored.title)
    if title_sim >= 1.0:
        reasons.append(MatchReason(ReasonCode.TITLE, "タイトルが一致"))
    elif title_sim >= REASON_THRESHOLD:
        reasons.append(MatchReason(ReasonCode.TITLE, f"タイトルが類似 ({title_sim:.0%})"))

    overlap, matched_authors = author_overlap(candidate.authors, stored.authors)
    if overlap >= REASON_THRESHOLD and matched_authors:
        reasons.append(
            MatchReason(ReasonCode.AUTHOR, f"著者が一致: {', '.join(matched_authors)}")
        )

    raw = TITLE_WEIGHT * title_sim + AUTHOR_WEIGHT * overlap
    score = min(IDENTIFIER_SCORE, int(round(raw)))
    return MatchResult(book=stored, score=score, reasons=reasons)


def _recency(result: MatchResult) -> float:
    updated = result.book.updated_at
    return updated.timestamp() if updated is not None else float("-inf")


def find_potential_duplicates(
    candidate: CandidateBook,
    existing_books: Sequence[StoredBook],
    options: MatchOptions | None = None,
) -> list[MatchResult]:
    """Rank the stored books that may already be the candidate book.

    Pairs scoring below options.min_match_score are dropped. The rest are
    ordered by score, most recently updated first among equal scores, and
    truncated to options.max_results. A blank title yields no matches.

    Raises:
        InvalidArgumentError: If the title is not a string, the authors are
            not a list of strings, or the options are out of range.
    """
    options = options or MatchOptions()
    options.validate()

    if not isinstance(candidate.title, str):
        raise InvalidArgumentError(f"title must be a string, got {type(candidate.title).__name__}")
    if not isinstance(candidate.authors, (list, tuple)) or not all(
        isinstance(a, str) for a in candidate.authors
    ):
        raise InvalidArgumentError("authors must be a list of strings")

    if not candidate.title.strip() or options.max_results == 0:
        return []

    results = [score_pair(candidate, stored) for stored in existing_books]
    results = [r for r in results if r.score >= options.min_match_score]

    # Two stable sorts: recency first, then score, so recency breaks score ties.
    results.sort(key=_recency, reverse=True)
    results.sort(key=lambda r: r.score, reverse=True)

    logger.debug(
        "Duplicate check for %r: %d of %d books at or above %d",
        candidate.title,
        len(results),
        len(existing_books),
        options.min_match_score,
    )
    return results[: options.max_results]
