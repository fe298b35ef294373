# ABOUTME: SQL DDL statements for the Hondana collection database.
# ABOUTME: Defines the per-user books table, indexes, and versioned migrations.

SCHEMA_V1 = """
-- Every book belongs to exactly one user; all queries filter on user_id.
CREATE TABLE books (
    id                  INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id             TEXT NOT NULL,
    external_catalog_id TEXT,
    title               TEXT NOT NULL,
    authors             TEXT NOT NULL DEFAULT '[]',
    publisher           TEXT,
    published_date      TEXT,
    description         TEXT,
    thumbnail_url       TEXT,
    page_count          INTEGER,
    categories          TEXT NOT NULL DEFAULT '[]',
    format              TEXT NOT NULL CHECK (format IN ('physical', 'digital')),
    platform            TEXT,
    isbn10              TEXT,
    isbn13              TEXT,
    purchase_date       TEXT,
    purchase_price      REAL,
    notes               TEXT,
    rating              INTEGER CHECK (rating IS NULL OR rating BETWEEN 1 AND 5),
    is_read             INTEGER NOT NULL DEFAULT 0,
    read_date           TEXT,
    created_at          TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),
    updated_at          TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
);

CREATE INDEX idx_books_user ON books(user_id, created_at);
CREATE INDEX idx_books_user_isbn13 ON books(user_id, isbn13) WHERE isbn13 IS NOT NULL;
CREATE INDEX idx_books_user_isbn10 ON books(user_id, isbn10) WHERE isbn10 IS NOT NULL;
CREATE INDEX idx_books_user_format ON books(user_id, format, platform);

-- Schema versioning for future migrations
CREATE TABLE schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

INSERT INTO schema_version (version) VALUES (1);
"""

_MIGRATION_V2 = """
CREATE TABLE user_preferences (
    user_id                 TEXT PRIMARY KEY,
    default_format          TEXT NOT NULL DEFAULT 'physical'
                            CHECK (default_format IN ('physical', 'digital')),
    default_platform        TEXT,
    auto_suggest_duplicates INTEGER NOT NULL DEFAULT 1,
    created_at              TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),
    updated_at              TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
);

INSERT INTO schema_version (version) VALUES (2);
"""

# (version, sql) pairs applied in order to databases below that version.
MIGRATIONS: list[tuple[int, str]] = [
    (2, _MIGRATION_V2),
]

LATEST_VERSION = MIGRATIONS[-1][0] if MIGRATIONS else 1
