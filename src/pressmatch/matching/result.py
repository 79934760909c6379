# ABOUTME: Ranking output types: match status, scored candidates, and the match result.
# ABOUTME: MatchResult is what the workflow and presentation layer consume after ranking.

from dataclasses import dataclass, field
from enum import Enum

from pressmatch.errors import CoreError
from pressmatch.matching.candidate import Candidate


class MatchStatus(Enum):
    """Outcome classification of a ranking pass."""

    NO_MATCH = "no_match"
    SINGLE_MATCH = "single_match"
    MULTIPLE_CANDIDATES = "multiple_candidates"
    MANUAL_MATCH = "manual_match"


@dataclass(frozen=True)
class ScoredCandidate:
    """A candidate with its normalized score and the signal hits behind it."""

    candidate: Candidate
    score: float
    hits: tuple[str, ...] = ()

    @property
    def release_id(self) -> int:
        return self.candidate.release_id


@dataclass
class MatchResult:
    """Classified outcome of ranking candidates against signals.

    chosen_candidate is set for SINGLE_MATCH and MANUAL_MATCH; suggestions
    only for MULTIPLE_CANDIDATES. confidence_score is meaningful only for
    SINGLE_MATCH. scored holds the full ranking of retained candidates.
    """

    status: MatchStatus
    confidence_score: float = 0.0
    chosen_candidate: Candidate | None = None
    suggestions: list[Candidate] = field(default_factory=list)
    exclusions: list[str] = field(default_factory=list)
    scored: list[ScoredCandidate] = field(default_factory=list)
    warnings: list[CoreError] = field(default_factory=list)
    error: CoreError | None = None

    def score_for(self, release_id: int) -> float | None:
        """Ranking score of a retained candidate, or None if it was not ranked."""
        for entry in self.scored:
            if entry.release_id == release_id:
                return entry.score
        return None
