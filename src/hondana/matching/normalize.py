# ABOUTME: Field normalization helpers for duplicate matching.
# ABOUTME: Cleans ISBNs, titles, and author names into comparable forms.

import re
import unicodedata

_ISBN_KEEP_RE = re.compile(r"[^0-9X]")
_ISBN10_WITH_X_RE = re.compile(r"[0-9]{9}X")
_WHITESPACE_RE = re.compile(r"\s+")

# Common English stop words that carry no signal when comparing titles.
_TITLE_STOP_WORDS = frozenset(
    {
        "the",
        "a",
        "an",
        "of",
        "and",
        "in",
        "on",
        "at",
        "to",
        "for",
        "by",
        "with",
        "from",
        "is",
    }
)

# Author values that indicate missing/unknown authorship.
UNKNOWN_AUTHORS = frozenset(
    {
        "不明な著者",
        "不明",
        "著者不明",
        "unknown",
        "unknown author",
        "various",
        "anonymous",
        "",
    }
)


def normalize_isbn(isbn: str | None) -> str:
    """Reduce an ISBN to its digits.

    An 'X' survives only as the check character of an ISBN-10, that is
    after exactly nine digits; anywhere else it is dropped. Returns "" for
    missing input.
    """
    if not isbn:
        return ""
    kept = _ISBN_KEEP_RE.sub("", unicodedata.normalize("NFKC", isbn).upper())
    if _ISBN10_WITH_X_RE.fullmatch(kept):
        return kept
    return kept.replace("X", "")


def normalize_text(text: str | None) -> str:
    """Fold width, lowercase, drop punctuation and collapse whitespace.

    NFKC turns full-width Latin and digits (common in Japanese metadata)
    into their ASCII forms before comparison.
    """
    if not text:
        return ""
    folded = unicodedata.normalize("NFKC", text).lower()
    cleaned = "".join(
        " " if unicodedata.category(ch)[0] in ("P", "S") else ch for ch in folded
    )
    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def title_tokens(title: str | None) -> frozenset[str]:
    """Significant words of a title.

    Stop words are dropped unless the title consists only of stop words,
    in which case every token is kept so such titles still compare.
    """
    tokens = normalize_text(title).split()
    significant = [t for t in tokens if t not in _TITLE_STOP_WORDS]
    return frozenset(significant or tokens)


def normalize_author(name: str) -> str:
    """Normalize 'Last, First' to 'First Last', then fold like any other text."""
    name = name.strip()
    if "," in name:
        last, first = (p.strip() for p in name.split(",", 1))
        name = f"{first} {last}"
    return normalize_text(name)


def is_unknown_author(name: str | None) -> bool:
    """Whether an author value is a placeholder for missing authorship."""
    if name is None:
        return True
    return normalize_text(name) in UNKNOWN_AUTHORS or name.strip() in UNKNOWN_AUTHORS


def jaccard(a: frozenset[str], b: frozenset[str]) -> float:
    """Size of the intersection over size of the union; 0.0 when both are empty."""
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)
