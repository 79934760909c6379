# ABOUTME: Opens the verified-release catalog database and keeps its schema current.
# ABOUTME: Creates the file on first use, then applies numbered migrations past the stored version.

import logging
import sqlite3
from pathlib import Path

from pressmatch.db.schema import MIGRATIONS, SCHEMA_V1

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".pressmatch" / "releases.db"


def schema_version(conn: sqlite3.Connection) -> int:
    """Highest applied schema version; 0 for a database without the catalog schema."""
    has_table = conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = 'schema_version'"
    ).fetchone()
    if has_table is None:
        return 0
    row = conn.execute("SELECT MAX(version) FROM schema_version").fetchone()
    return row[0] or 0


def _upgrade(conn: sqlite3.Connection) -> None:
    version = schema_version(conn)
    if version == 0:
        conn.executescript(SCHEMA_V1)
        version = 1
        logger.info("Created release catalog schema v1")
    for target, sql in MIGRATIONS:
        if target > version:
            conn.executescript(sql)
            logger.info("Migrated release catalog to schema v%d", target)


def open_catalog(path: Path | None = None) -> sqlite3.Connection:
    """Open (creating if needed) the release catalog at path.

    The connection uses WAL journaling, enforces foreign keys so corrections
    follow their release, and returns sqlite3.Row rows.
    """
    db_path = path or DEFAULT_DB_PATH
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    _upgrade(conn)
    return conn
