# ABOUTME: Converts between book dataclasses and SQLite row dictionaries.
# ABOUTME: Handles JSON list columns, date coercion, and timestamp parsing.

import json
from datetime import UTC, datetime
from typing import Any

from hondana.books.types import BookFormat, CandidateBook, StoredBook

# Catalog dates arrive as "2003", "2003-05", or "2003-05-12".
_DATE_FORMATS = ("%Y-%m-%d", "%Y/%m/%d", "%Y-%m", "%Y/%m", "%Y")


def coerce_date(value: str | None) -> str | None:
    """Coerce a loose date string to YYYY-MM-DD, or None if it can't be parsed."""
    if not value:
        return None
    text = value.strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date().isoformat()
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text).date().isoformat()
    except ValueError:
        return None


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse a stored ISO timestamp into an aware UTC datetime."""
    if not value:
        return None
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def now_timestamp() -> str:
    """Current UTC time in the same millisecond format the schema defaults use."""
    now = datetime.now(UTC)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def candidate_to_row(
    candidate: CandidateBook,
    user_id: str,
    book_format: BookFormat,
    platform: str | None = None,
) -> dict[str, Any]:
    """Convert a CandidateBook to a dict suitable for INSERT.

    The platform is only kept for digital books.
    """
    return {
        "user_id": user_id,
        "external_catalog_id": candidate.external_catalog_id,
        "title": candidate.title.strip(),
        "authors": json.dumps(candidate.authors, ensure_ascii=False),
        "publisher": candidate.publisher,
        "published_date": coerce_date(candidate.published_date),
        "description": candidate.description,
        "thumbnail_url": candidate.thumbnail_url,
        "page_count": candidate.page_count,
        "categories": json.dumps(candidate.categories, ensure_ascii=False),
        "format": book_format.value,
        "platform": platform if book_format is BookFormat.DIGITAL else None,
        "isbn10": candidate.isbn10,
        "isbn13": candidate.isbn13,
    }


def row_to_book(row: Any) -> StoredBook:
    """Convert a full database row back to a StoredBook."""
    return StoredBook(
        id=row["id"],
        user_id=row["user_id"],
        title=row["title"],
        authors=json.loads(row["authors"]) if row["authors"] else [],
        isbn10=row["isbn10"],
        isbn13=row["isbn13"],
        external_catalog_id=row["external_catalog_id"],
        publisher=row["publisher"],
        published_date=row["published_date"],
        description=row["description"],
        thumbnail_url=row["thumbnail_url"],
        page_count=row["page_count"],
        categories=json.loads(row["categories"]) if row["categories"] else [],
        format=BookFormat(row["format"]),
        platform=row["platform"],
        purchase_date=row["purchase_date"],
        purchase_price=row["purchase_price"],
        notes=row["notes"],
        rating=row["rating"],
        is_read=bool(row["is_read"]),
        read_date=row["read_date"],
        created_at=parse_timestamp(row["created_at"]),
        updated_at=parse_timestamp(row["updated_at"]),
    )
