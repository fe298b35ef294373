# ABOUTME: Parsing functions for Google Books API JSON responses.
# ABOUTME: Converts volume resources into CandidateBook instances.

from dataclasses import dataclass, field
from typing import Any

from hondana.books.types import CandidateBook

UNKNOWN_TITLE = "不明なタイトル"
UNKNOWN_AUTHOR = "不明な著者"

# Largest first; the first one present wins.
_THUMBNAIL_PRIORITY = ("large", "medium", "thumbnail", "smallThumbnail")


@dataclass
class SearchPage:
    """One page of catalog search results."""

    total_items: int = 0
    books: list[CandidateBook] = field(default_factory=list)


def extract_isbns(volume_info: dict[str, Any]) -> tuple[str | None, str | None]:
    """Pull (isbn10, isbn13) out of a volume's industryIdentifiers list."""
    isbn10 = None
    isbn13 = None
    for ident in volume_info.get("industryIdentifiers", []) or []:
        kind = ident.get("type")
        value = ident.get("identifier")
        if kind == "ISBN_10" and isbn10 is None:
            isbn10 = value
        elif kind == "ISBN_13" and isbn13 is None:
            isbn13 = value
    return isbn10, isbn13


def select_thumbnail(volume_info: dict[str, Any]) -> str | None:
    """Pick the largest available cover image, upgraded to https."""
    links = volume_info.get("imageLinks") or {}
    for size in _THUMBNAIL_PRIORITY:
        url = links.get(size)
        if url:
            return url.replace("http:", "https:", 1)
    return None


def parse_volume(volume: dict[str, Any]) -> CandidateBook:
    """Parse a Google Books volume resource into a CandidateBook.

    Missing titles and authors are filled with the same placeholders the
    rest of the app treats as unknown, so the book can still be saved.
    """
    info = volume.get("volumeInfo", {}) or {}
    isbn10, isbn13 = extract_isbns(info)

    return CandidateBook(
        title=info.get("title") or UNKNOWN_TITLE,
        authors=list(info.get("authors") or [UNKNOWN_AUTHOR]),
        isbn10=isbn10,
        isbn13=isbn13,
        external_catalog_id=volume.get("id"),
        publisher=info.get("publisher"),
        published_date=info.get("publishedDate"),
        description=info.get("description"),
        thumbnail_url=select_thumbnail(info),
        page_count=info.get("pageCount"),
        categories=list(info.get("categories") or []),
    )


def parse_search_response(data: dict[str, Any]) -> SearchPage:
    """Parse a volumes list response. 'items' is absent when nothing matched."""
    items = data.get("items", []) or []
    return SearchPage(
        total_items=int(data.get("totalItems", 0) or 0),
        books=[parse_volume(item) for item in items],
    )
