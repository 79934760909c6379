# ABOUTME: Candidate is one canonical release returned by a catalog search.
# ABOUTME: Carries descriptive fields, catalog identifiers, and retrieval reason codes.

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Candidate:
    """A possible canonical release for the item being scanned.

    Only release_id is required. Identifier tuples hold the raw strings the
    catalog lists for the release (matrix/runout lines, barcodes, SID codes)
    so scoring can compare them against what was read from the media.
    search_score is the search service's own opaque score, if it gave one.
    """

    release_id: int
    title: str | None = None
    artist: str | None = None
    label: str | None = None
    catalog_number: str | None = None
    country: str | None = None
    year: int | None = None
    format: str | None = None
    reason_codes: tuple[str, ...] = field(default_factory=tuple)
    rights_society_tags: frozenset[str] = field(default_factory=frozenset)
    matrix_numbers: tuple[str, ...] = field(default_factory=tuple)
    barcodes: tuple[str, ...] = field(default_factory=tuple)
    sid_codes: tuple[str, ...] = field(default_factory=tuple)
    search_score: float | None = None

    def __post_init__(self) -> None:
        if self.search_score is not None and not 0.0 <= self.search_score <= 1.0:
            msg = f"search_score must be between 0.0 and 1.0, got {self.search_score}"
            raise ValueError(msg)

    @property
    def display_name(self) -> str:
        """'Artist - Title' for display, falling back to the release id."""
        if self.artist and self.title:
            return f"{self.artist} - {self.title}"
        return self.title or self.artist or f"Release {self.release_id}"

    @property
    def url(self) -> str:
        return f"https://www.discogs.com/release/{self.release_id}"
