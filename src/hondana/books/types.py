# ABOUTME: Core book data structures shared by the catalog, matcher, and store.
# ABOUTME: CandidateBook is an unsaved book; StoredBook is an owned entry in a collection.

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class BookFormat(str, Enum):
    """How the user owns a book."""

    PHYSICAL = "physical"
    DIGITAL = "digital"


@dataclass
class CandidateBook:
    """A book under consideration for adding to a collection.

    Identifying fields (title, authors, ISBNs, catalog id) drive duplicate
    matching. The descriptive fields are carried along from the external
    catalog so the book can be stored without a second lookup.
    """

    title: str
    authors: list[str] = field(default_factory=list)
    isbn10: str | None = None
    isbn13: str | None = None
    external_catalog_id: str | None = None
    publisher: str | None = None
    published_date: str | None = None
    description: str | None = None
    thumbnail_url: str | None = None
    page_count: int | None = None
    categories: list[str] = field(default_factory=list)

    @property
    def author(self) -> str:
        """Convenience property: joined author string for display."""
        return ", ".join(self.authors) if self.authors else ""

    @property
    def isbn(self) -> str | None:
        """The most specific ISBN available, preferring ISBN-13."""
        return self.isbn13 or self.isbn10


@dataclass
class StoredBook(CandidateBook):
    """A book in a user's collection: CandidateBook plus ownership fields."""

    id: int = 0
    user_id: str = ""
    format: BookFormat = BookFormat.PHYSICAL
    platform: str | None = None
    purchase_date: str | None = None
    purchase_price: float | None = None
    notes: str | None = None
    rating: int | None = None
    is_read: bool = False
    read_date: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_digital(self) -> bool:
        return self.format is BookFormat.DIGITAL
