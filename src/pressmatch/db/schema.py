# ABOUTME: SQL DDL statements for the verified-release catalog database.
# ABOUTME: Defines the releases and corrections tables, indexes, and schema versioning.

SCHEMA_V1 = """
-- One row per verified release
CREATE TABLE releases (
    id               INTEGER PRIMARY KEY AUTOINCREMENT,
    release_id       INTEGER NOT NULL,
    artist           TEXT,
    title            TEXT,
    label            TEXT,
    catalog_number   TEXT,
    country          TEXT,
    year             INTEGER,
    format           TEXT,
    rights_societies TEXT,
    matrix           TEXT,
    date_verified    TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

CREATE UNIQUE INDEX idx_releases_release_id ON releases(release_id);
CREATE INDEX idx_releases_catalog_number ON releases(catalog_number)
    WHERE catalog_number IS NOT NULL;

-- Human corrections applied to the matrix before verification
CREATE TABLE corrections (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    release_pk  INTEGER NOT NULL REFERENCES releases(id) ON DELETE CASCADE,
    position    INTEGER NOT NULL,
    original    TEXT NOT NULL,
    corrected   TEXT NOT NULL
);

CREATE INDEX idx_corrections_release_pk ON corrections(release_pk);

-- Schema versioning for future migrations
CREATE TABLE schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

INSERT INTO schema_version (version) VALUES (1);
"""

# (version, sql) pairs applied in order to databases below that version.
MIGRATIONS: list[tuple[int, str]] = []
