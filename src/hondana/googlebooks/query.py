# ABOUTME: Search query cleanup and suggestion helpers for catalog searches.
# ABOUTME: Keeps Japanese scripts intact while stripping stray punctuation.

import re

# Word characters, whitespace, hiragana, katakana, and CJK ideographs.
_DISALLOWED_RE = re.compile(r"[^\w\s\u3040-\u309F\u30A0-\u30FF\u4E00-\u9FAF]")
_WHITESPACE_RE = re.compile(r"\s+")

_MAX_SUGGESTIONS = 5
_MIN_SUGGEST_LENGTH = 2

COMMON_CATEGORIES = ("小説", "漫画", "ビジネス", "技術書", "自己啓発", "歴史", "科学")


def sanitize_search_query(query: str) -> str:
    """Drop punctuation and collapse whitespace in a free-text query."""
    cleaned = _DISALLOWED_RE.sub("", query.strip())
    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def generate_search_suggestions(query: str) -> list[str]:
    """Alternative catalog queries for a user's search text.

    Two-word queries are tried both ways round as title/author pairs, and a
    known category word adds a subject search.
    """
    trimmed = query.strip()
    if len(trimmed) < _MIN_SUGGEST_LENGTH:
        return []

    suggestions = [trimmed]

    parts = trimmed.split(" ")
    if len(parts) == 2:
        suggestions.append(f"inauthor:{parts[1]} intitle:{parts[0]}")
        suggestions.append(f"inauthor:{parts[0]} intitle:{parts[1]}")

    category = next((c for c in COMMON_CATEGORIES if c in trimmed), None)
    if category:
        suggestions.append(f"subject:{category}")

    return suggestions[:_MAX_SUGGESTIONS]
