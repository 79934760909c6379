# ABOUTME: Converts between Candidate and SQLite rows for the verified-release catalog.
# ABOUTME: Rights societies are stored as a JSON array; corrections map to their own rows.

import json
from dataclasses import dataclass, field
from typing import Any

from pressmatch.matching.candidate import Candidate
from pressmatch.ocr.characters import Correction


@dataclass
class ReleaseRecord:
    """A verified release: the chosen candidate plus what was read from the media."""

    id: int
    candidate: Candidate
    matrix: str | None
    date_verified: str
    corrections: list[Correction] = field(default_factory=list)


def candidate_to_row(candidate: Candidate, matrix: str | None) -> dict[str, Any]:
    """Convert a chosen candidate to a dict suitable for INSERT.

    Identifier tuples and reason codes are not stored; they describe the
    search, not the item in the collection.
    """
    return {
        "release_id": candidate.release_id,
        "artist": candidate.artist,
        "title": candidate.title,
        "label": candidate.label,
        "catalog_number": candidate.catalog_number,
        "country": candidate.country,
        "year": candidate.year,
        "format": candidate.format,
        "rights_societies": json.dumps(sorted(candidate.rights_society_tags)),
        "matrix": matrix,
    }


def row_to_candidate(row: Any) -> Candidate:
    societies = row["rights_societies"]
    return Candidate(
        release_id=row["release_id"],
        title=row["title"],
        artist=row["artist"],
        label=row["label"],
        catalog_number=row["catalog_number"],
        country=row["country"],
        year=row["year"],
        format=row["format"],
        rights_society_tags=frozenset(json.loads(societies)) if societies else frozenset(),
    )


def row_to_record(row: Any, corrections: list[Correction] | None = None) -> ReleaseRecord:
    """Convert a full releases row to a ReleaseRecord."""
    return ReleaseRecord(
        id=row["id"],
        candidate=row_to_candidate(row),
        matrix=row["matrix"],
        date_verified=row["date_verified"],
        corrections=list(corrections or []),
    )
