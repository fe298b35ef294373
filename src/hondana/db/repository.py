# ABOUTME: Per-user CRUD, search, and statistics over the Hondana books table.
# ABOUTME: BookRepository is also the collection the duplicate matcher reads from.

import json
import logging
import sqlite3
from dataclasses import dataclass
from typing import Any

from hondana.books.types import BookFormat, CandidateBook, StoredBook
from hondana.db.mapping import candidate_to_row, coerce_date, now_timestamp, row_to_book
from hondana.matching.normalize import normalize_isbn

logger = logging.getLogger(__name__)

_SORTABLE_COLUMNS = frozenset({"created_at", "updated_at", "title", "published_date", "rating"})

_UPDATABLE_COLUMNS = frozenset(
    {
        "external_catalog_id",
        "title",
        "authors",
        "publisher",
        "published_date",
        "description",
        "thumbnail_url",
        "page_count",
        "categories",
        "format",
        "platform",
        "isbn10",
        "isbn13",
        "purchase_date",
        "purchase_price",
        "notes",
        "rating",
        "is_read",
        "read_date",
    }
)

_DEFAULT_PAGE_SIZE = 50


class BookNotFoundError(ValueError):
    """Raised when a book id does not exist in the current user's collection."""


@dataclass
class BookSearchOptions:
    """Filters and ordering for BookRepository.search_books."""

    query: str | None = None
    format: BookFormat | None = None
    platform: str | None = None
    is_read: bool | None = None
    category: str | None = None
    sort_by: str = "created_at"
    sort_order: str = "desc"
    limit: int | None = None
    offset: int | None = None


@dataclass
class UserBookStats:
    total_books: int = 0
    physical_books: int = 0
    digital_books: int = 0
    read_books: int = 0
    rated_books: int = 0
    average_rating: float = 0.0
    books_added_this_month: int = 0


@dataclass
class PlatformStats:
    platform: str
    book_count: int


@dataclass
class UserPreferences:
    default_format: BookFormat = BookFormat.PHYSICAL
    default_platform: str | None = None
    auto_suggest_duplicates: bool = True


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _validate_rating(rating: int | None) -> None:
    if rating is None:
        return
    if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
        raise ValueError(f"rating must be between 1 and 5, got {rating!r}")


class BookRepository:
    """Typed access to one user's books.

    The user id is fixed at construction; every statement is filtered on it,
    so one repository can never read or change another user's books.
    """

    def __init__(self, conn: sqlite3.Connection, user_id: str) -> None:
        if not user_id:
            raise ValueError("user_id must not be empty")
        self._conn = conn
        self._user_id = user_id

    @property
    def user_id(self) -> str:
        return self._user_id

    def add_book(
        self,
        candidate: CandidateBook,
        book_format: BookFormat = BookFormat.PHYSICAL,
        platform: str | None = None,
        *,
        purchase_date: str | None = None,
        purchase_price: float | None = None,
        notes: str | None = None,
    ) -> StoredBook:
        """Add a book to the collection and return the stored row.

        Raises:
            ValueError: If the title is blank.
        """
        if not candidate.title or not candidate.title.strip():
            raise ValueError("title must not be empty")

        row = candidate_to_row(candidate, self._user_id, book_format, platform)
        row["purchase_date"] = coerce_date(purchase_date)
        row["purchase_price"] = purchase_price
        row["notes"] = notes

        columns = ", ".join(row.keys())
        placeholders = ", ".join("?" for _ in row)
        cursor = self._conn.execute(
            f"INSERT INTO books ({columns}) VALUES ({placeholders})",
            list(row.values()),
        )
        self._conn.commit()
        logger.info("Added book %d %r for user %s", cursor.lastrowid, candidate.title, self._user_id)

        book = self.get_book(cursor.lastrowid)  # type: ignore[arg-type]
        assert book is not None
        return book

    def get_book(self, book_id: int) -> StoredBook | None:
        """Retrieve one of this user's books by id."""
        cursor = self._conn.execute(
            "SELECT * FROM books WHERE id = ? AND user_id = ?",
            (book_id, self._user_id),
        )
        row = cursor.fetchone()
        return row_to_book(row) if row else None

    def update_book(self, book_id: int, **fields: Any) -> StoredBook:
        """Update one or more columns on a book and bump its updated_at.

        List columns are JSON-serialized. Switching a book to physical
        clears its platform.

        Raises:
            ValueError: For unknown columns or an out-of-range rating.
            BookNotFoundError: If the book is not in this user's collection.
        """
        unknown = set(fields) - _UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Unknown book fields: {', '.join(sorted(unknown))}")
        if not fields:
            book = self.get_book(book_id)
            if book is None:
                raise BookNotFoundError(f"Book with id {book_id} not found")
            return book

        if "rating" in fields:
            _validate_rating(fields["rating"])
        if "title" in fields and not str(fields["title"] or "").strip():
            raise ValueError("title must not be empty")
        for key in ("authors", "categories"):
            if key in fields:
                fields[key] = json.dumps(list(fields[key] or []), ensure_ascii=False)
        if "format" in fields:
            book_format = BookFormat(fields["format"])
            fields["format"] = book_format.value
            if book_format is BookFormat.PHYSICAL:
                fields["platform"] = None
        elif "platform" in fields:
            current = self.get_book(book_id)
            if current is not None and not current.is_digital:
                fields["platform"] = None
        if "is_read" in fields:
            fields["is_read"] = int(bool(fields["is_read"]))
        for key in ("published_date", "purchase_date", "read_date"):
            if key in fields:
                fields[key] = coerce_date(fields[key])

        set_clause = ", ".join(f"{k} = ?" for k in fields)
        set_clause += ", updated_at = ?"
        values = [*fields.values(), now_timestamp(), book_id, self._user_id]

        cursor = self._conn.execute(
            f"UPDATE books SET {set_clause} WHERE id = ? AND user_id = ?",
            values,
        )
        self._conn.commit()

        if cursor.rowcount == 0:
            raise BookNotFoundError(f"Book with id {book_id} not found")

        book = self.get_book(book_id)
        assert book is not None
        return book

    def delete_book(self, book_id: int) -> None:
        """Delete a book from the collection.

        Raises:
            BookNotFoundError: If the book is not in this user's collection.
        """
        cursor = self._conn.execute(
            "DELETE FROM books WHERE id = ? AND user_id = ?",
            (book_id, self._user_id),
        )
        self._conn.commit()

        if cursor.rowcount == 0:
            raise BookNotFoundError(f"Book with id {book_id} not found")

    def delete_books(self, book_ids: list[int]) -> int:
        """Delete several books at once. Returns how many rows were removed."""
        if not book_ids:
            return 0
        placeholders = ", ".join("?" for _ in book_ids)
        cursor = self._conn.execute(
            f"DELETE FROM books WHERE user_id = ? AND id IN ({placeholders})",
            [self._user_id, *book_ids],
        )
        self._conn.commit()
        return cursor.rowcount

    def search_books(self, options: BookSearchOptions | None = None) -> list[StoredBook]:
        """List books matching the given filters.

        The free-text query matches a title substring (case-insensitive for
        ASCII) or an exact author name.

        Raises:
            ValueError: For an unsupported sort column or order.
        """
        options = options or BookSearchOptions()
        if options.sort_by not in _SORTABLE_COLUMNS:
            raise ValueError(f"Cannot sort by {options.sort_by!r}")
        if options.sort_order not in ("asc", "desc"):
            raise ValueError(f"sort_order must be 'asc' or 'desc', got {options.sort_order!r}")

        clauses = ["user_id = ?"]
        params: list[Any] = [self._user_id]

        if options.query and options.query.strip():
            term = options.query.strip()
            clauses.append(
                "(title LIKE ? ESCAPE '\\' "
                "OR EXISTS (SELECT 1 FROM json_each(books.authors) WHERE value = ?))"
            )
            params.extend([f"%{_escape_like(term)}%", term])
        if options.format is not None:
            clauses.append("format = ?")
            params.append(BookFormat(options.format).value)
        if options.platform:
            clauses.append("platform = ?")
            params.append(options.platform)
        if options.is_read is not None:
            clauses.append("is_read = ?")
            params.append(int(options.is_read))
        if options.category:
            clauses.append("EXISTS (SELECT 1 FROM json_each(books.categories) WHERE value = ?)")
            params.append(options.category)

        sql = f"SELECT * FROM books WHERE {' AND '.join(clauses)}"
        sql += f" ORDER BY {options.sort_by} {options.sort_order.upper()}, id DESC"

        if options.limit is not None or options.offset:
            sql += " LIMIT ? OFFSET ?"
            params.extend(
                [
                    options.limit if options.limit is not None else _DEFAULT_PAGE_SIZE,
                    options.offset or 0,
                ]
            )

        cursor = self._conn.execute(sql, params)
        return [row_to_book(row) for row in cursor.fetchall()]

    def fetch_user_books(self, title_contains: str | None = None) -> list[StoredBook]:
        """All of this user's books, optionally narrowed to a title substring."""
        if title_contains and title_contains.strip():
            return self._books_with_title(title_contains.strip())
        return self.search_books(BookSearchOptions(sort_by="updated_at"))

    def _books_with_title(self, fragment: str) -> list[StoredBook]:
        cursor = self._conn.execute(
            "SELECT * FROM books WHERE user_id = ? AND title LIKE ? ESCAPE '\\' "
            "ORDER BY updated_at DESC, id DESC",
            (self._user_id, f"%{_escape_like(fragment)}%"),
        )
        return [row_to_book(row) for row in cursor.fetchall()]

    def find_by_isbn(self, isbn: str) -> list[StoredBook]:
        """Books whose ISBN-10 or ISBN-13 equals the given one, ignoring hyphens."""
        wanted = normalize_isbn(isbn)
        if not wanted:
            return []
        cursor = self._conn.execute(
            "SELECT * FROM books WHERE user_id = ? AND (isbn10 IS NOT NULL OR isbn13 IS NOT NULL) "
            "ORDER BY created_at DESC",
            (self._user_id,),
        )
        books = [row_to_book(row) for row in cursor.fetchall()]
        return [
            b for b in books if wanted in (normalize_isbn(b.isbn10), normalize_isbn(b.isbn13))
        ]

    def mark_as_read(
        self, book_id: int, is_read: bool = True, read_date: str | None = None
    ) -> StoredBook:
        """Set read state. Marking read without a date uses today; unread clears it."""
        if is_read and read_date is None:
            read_date = now_timestamp()[:10]
        return self.update_book(
            book_id, is_read=is_read, read_date=read_date if is_read else None
        )

    def update_rating(self, book_id: int, rating: int) -> StoredBook:
        _validate_rating(rating)
        return self.update_book(book_id, rating=rating)

    def update_notes(self, book_id: int, notes: str) -> StoredBook:
        return self.update_book(book_id, notes=notes)

    def get_recent_books(self, limit: int = 5) -> list[StoredBook]:
        return self.search_books(BookSearchOptions(sort_by="created_at", limit=limit))

    def get_high_rated_books(self, limit: int = 5) -> list[StoredBook]:
        """Rated books, best first, most recently updated first among equals."""
        cursor = self._conn.execute(
            "SELECT * FROM books WHERE user_id = ? AND rating IS NOT NULL "
            "ORDER BY rating DESC, updated_at DESC LIMIT ?",
            (self._user_id, limit),
        )
        return [row_to_book(row) for row in cursor.fetchall()]

    def get_user_stats(self) -> UserBookStats:
        """Aggregate counts over the collection. An empty collection is all zeros."""
        cursor = self._conn.execute(
            "SELECT "
            "COUNT(*) AS total_books, "
            "SUM(format = 'physical') AS physical_books, "
            "SUM(format = 'digital') AS digital_books, "
            "SUM(is_read) AS read_books, "
            "COUNT(rating) AS rated_books, "
            "AVG(rating) AS average_rating, "
            "SUM(created_at >= strftime('%Y-%m-01', 'now')) AS books_added_this_month "
            "FROM books WHERE user_id = ?",
            (self._user_id,),
        )
        row = cursor.fetchone()
        return UserBookStats(
            total_books=row["total_books"] or 0,
            physical_books=row["physical_books"] or 0,
            digital_books=row["digital_books"] or 0,
            read_books=row["read_books"] or 0,
            rated_books=row["rated_books"] or 0,
            average_rating=round(row["average_rating"] or 0.0, 2),
            books_added_this_month=row["books_added_this_month"] or 0,
        )

    def get_platform_stats(self) -> list[PlatformStats]:
        """Digital book counts per platform, largest first."""
        cursor = self._conn.execute(
            "SELECT platform, COUNT(*) AS book_count FROM books "
            "WHERE user_id = ? AND format = 'digital' AND platform IS NOT NULL "
            "GROUP BY platform ORDER BY book_count DESC, platform",
            (self._user_id,),
        )
        return [PlatformStats(row["platform"], row["book_count"]) for row in cursor.fetchall()]

    # --- Preferences ---

    def get_preferences(self) -> UserPreferences:
        """Stored preferences for this user, or defaults if none were saved."""
        cursor = self._conn.execute(
            "SELECT * FROM user_preferences WHERE user_id = ?", (self._user_id,)
        )
        row = cursor.fetchone()
        if row is None:
            return UserPreferences()
        return UserPreferences(
            default_format=BookFormat(row["default_format"]),
            default_platform=row["default_platform"],
            auto_suggest_duplicates=bool(row["auto_suggest_duplicates"]),
        )

    def save_preferences(self, prefs: UserPreferences) -> None:
        self._conn.execute(
            "INSERT INTO user_preferences "
            "(user_id, default_format, default_platform, auto_suggest_duplicates) "
            "VALUES (?, ?, ?, ?) "
            "ON CONFLICT(user_id) DO UPDATE SET "
            "default_format = excluded.default_format, "
            "default_platform = excluded.default_platform, "
            "auto_suggest_duplicates = excluded.auto_suggest_duplicates, "
            "updated_at = strftime('%Y-%m-%dT%H:%M:%fZ', 'now')",
            (
                self._user_id,
                prefs.default_format.value,
                prefs.default_platform,
                int(prefs.auto_suggest_duplicates),
            ),
        )
        self._conn.commit()
