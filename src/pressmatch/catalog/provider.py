# ABOUTME: Protocols for the external collaborators the scan workflow calls into.
# ABOUTME: Catalog search, marketplace pricing, and verified-release storage.

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from pressmatch.matching.candidate import Candidate
from pressmatch.matching.result import MatchStatus
from pressmatch.matching.signals import Signals
from pressmatch.ocr.characters import Correction
from pressmatch.types import MediaType


@dataclass(frozen=True)
class SearchRequest:
    """What the workflow sends to the search collaborator.

    photos are opaque references (paths or upload ids) for collaborators that
    analyse images themselves. manual marks a search built from typed fields.
    """

    signals: Signals
    media_type: MediaType = MediaType.VINYL
    photos: tuple[str, ...] = ()
    manual: bool = False


@dataclass
class SearchResponse:
    """Search collaborator output. top_score and match_status are optional hints."""

    candidates: list[Candidate] = field(default_factory=list)
    top_score: float | None = None
    match_status: MatchStatus | None = None


@dataclass(frozen=True)
class PriceSummary:
    """Marketplace price statistics for one release. Prices may be unknown."""

    lowest: float | None
    median: float | None
    highest: float | None
    num_for_sale: int = 0


@runtime_checkable
class CatalogSearch(Protocol):
    """Protocol for release search services.

    Implementations raise CollaboratorError when the service fails or times out.
    """

    @property
    def name(self) -> str: ...

    def search(self, request: SearchRequest) -> SearchResponse: ...


@runtime_checkable
class PricingSource(Protocol):
    """Protocol for marketplace pricing lookups. Raises CollaboratorError on failure."""

    def price(self, release_id: int) -> PriceSummary: ...


@runtime_checkable
class ReleaseStore(Protocol):
    """Protocol for persisting a verified release. Raises CollaboratorError on failure."""

    def save_release(
        self,
        candidate: Candidate,
        matrix: str | None,
        corrections: list[Correction],
    ) -> int: ...
