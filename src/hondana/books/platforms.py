# ABOUTME: Known digital bookstore platforms and their display names.
# ABOUTME: Platform ids are what gets stored; names are for display only.

from dataclasses import dataclass


@dataclass(frozen=True)
class Platform:
    id: str
    name: str
    description: str


DIGITAL_PLATFORMS: tuple[Platform, ...] = (
    Platform("kindle", "Kindle", "Amazon Kindle"),
    Platform("kobo", "Kobo", "楽天Kobo"),
    Platform("booklive", "BookLive!", "BookLive!"),
    Platform("bookwalker", "BookWalker", "BOOK☆WALKER"),
    Platform("ebookjapan", "ebookjapan", "ebookjapan"),
    Platform("other", "その他", "その他のストア"),
)

_BY_ID = {p.id: p for p in DIGITAL_PLATFORMS}


def platform_name(platform_id: str | None) -> str:
    """Display name for a platform id, falling back to the raw id."""
    if not platform_id:
        return ""
    known = _BY_ID.get(platform_id.lower())
    return known.name if known else platform_id
