# ABOUTME: CRUD operations for the verified-release catalog.
# ABOUTME: Implements the ReleaseStore collaborator used to reach the verified state.

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from pressmatch.db.connection import open_catalog
from pressmatch.db.mapping import ReleaseRecord, candidate_to_row, row_to_record
from pressmatch.errors import CollaboratorError
from pressmatch.matching.candidate import Candidate
from pressmatch.ocr.characters import Correction

logger = logging.getLogger(__name__)


class DuplicateReleaseError(Exception):
    """Raised when a release_id is already in the catalog."""


class ReleaseCatalog:
    """Wraps a sqlite3 connection and provides typed CRUD for verified releases."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def add_release(
        self,
        candidate: Candidate,
        matrix: str | None = None,
        corrections: list[Correction] | None = None,
    ) -> int:
        """Add a verified release and its corrections in one transaction.

        Returns:
            The row ID of the inserted release.

        Raises:
            DuplicateReleaseError: If the release_id is already cataloged.
        """
        row = candidate_to_row(candidate, matrix)
        columns = ", ".join(row.keys())
        placeholders = ", ".join("?" for _ in row)

        try:
            with self._conn:
                cursor = self._conn.execute(
                    f"INSERT INTO releases ({columns}) VALUES ({placeholders})",
                    list(row.values()),
                )
                release_pk = cursor.lastrowid
                self._conn.executemany(
                    "INSERT INTO corrections (release_pk, position, original, corrected) "
                    "VALUES (?, ?, ?, ?)",
                    [
                        (release_pk, c.position, c.original, c.corrected)
                        for c in corrections or []
                    ],
                )
        except sqlite3.IntegrityError as exc:
            if "UNIQUE constraint failed: releases.release_id" in str(exc):
                raise DuplicateReleaseError(
                    f"Release {candidate.release_id} is already in the catalog"
                ) from exc
            raise

        return release_pk  # type: ignore[return-value]

    def save_release(
        self,
        candidate: Candidate,
        matrix: str | None,
        corrections: list[Correction],
    ) -> int:
        """ReleaseStore entry point: add_release with failures as CollaboratorError."""
        try:
            return self.add_release(candidate, matrix, corrections)
        except (DuplicateReleaseError, sqlite3.Error) as exc:
            logger.warning("Could not save release %d: %s", candidate.release_id, exc)
            raise CollaboratorError(str(exc)) from exc

    def get_by_id(self, pk: int) -> ReleaseRecord | None:
        """Retrieve a release by its row ID."""
        cursor = self._conn.execute("SELECT * FROM releases WHERE id = ?", (pk,))
        row = cursor.fetchone()
        return row_to_record(row, self.corrections_for(row["id"])) if row else None

    def get_by_release_id(self, release_id: int) -> ReleaseRecord | None:
        """Retrieve a release by its catalog (Discogs) release id."""
        cursor = self._conn.execute(
            "SELECT * FROM releases WHERE release_id = ?", (release_id,)
        )
        row = cursor.fetchone()
        return row_to_record(row, self.corrections_for(row["id"])) if row else None

    def list_all(self) -> list[ReleaseRecord]:
        """Return all verified releases, ordered by artist then title."""
        cursor = self._conn.execute(
            "SELECT * FROM releases ORDER BY artist COLLATE NOCASE, title COLLATE NOCASE"
        )
        return [row_to_record(row) for row in cursor.fetchall()]

    def corrections_for(self, pk: int) -> list[Correction]:
        """Corrections recorded for a release row, in position order."""
        cursor = self._conn.execute(
            "SELECT position, original, corrected FROM corrections "
            "WHERE release_pk = ? ORDER BY position",
            (pk,),
        )
        return [
            Correction(position=r["position"], original=r["original"], corrected=r["corrected"])
            for r in cursor.fetchall()
        ]



@contextmanager
def catalog_at(path: Path | None = None) -> Iterator[ReleaseCatalog]:
    """A ReleaseCatalog over a connection that is closed on exit."""
    conn = open_catalog(path)
    try:
        yield ReleaseCatalog(conn)
    finally:
        conn.close()
