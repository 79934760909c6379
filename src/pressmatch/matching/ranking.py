# ABOUTME: Candidate ranking: veto, score, order deterministically, and classify the outcome.
# ABOUTME: Produces a MatchResult with single match, suggestions, or no match.

import logging

from pressmatch.config import DEFAULT_THRESHOLDS, DEFAULT_WEIGHTS, MatchThresholds, SignalWeights
from pressmatch.matching import rights
from pressmatch.matching.candidate import Candidate
from pressmatch.matching.result import MatchResult, MatchStatus, ScoredCandidate
from pressmatch.matching.scoring import score_candidate
from pressmatch.matching.signals import Signals

logger = logging.getLogger(__name__)


def _sort_key(entry: ScoredCandidate) -> tuple[float, int]:
    return (-entry.score, entry.release_id)


def order(scored: list[ScoredCandidate]) -> list[ScoredCandidate]:
    """Score descending, release_id ascending; one entry per release_id.

    When a release appears more than once the best-scoring entry is kept, so
    the outcome does not depend on input order.
    """
    best: dict[int, ScoredCandidate] = {}
    for entry in sorted(scored, key=_sort_key):
        best.setdefault(entry.release_id, entry)
    return sorted(best.values(), key=_sort_key)


def classify(
    ranked: list[ScoredCandidate],
    thresholds: MatchThresholds = DEFAULT_THRESHOLDS,
) -> MatchResult:
    """Classify an already-ordered ranking into a MatchResult.

    SINGLE_MATCH needs exactly one candidate at or above the high-confidence
    threshold with the runner-up more than the tie margin behind. Otherwise
    every candidate at or above the inclusion threshold (up to the suggestion
    limit) becomes a suggestion; with none, the result is NO_MATCH.
    """
    included = [e for e in ranked if e.score >= thresholds.inclusion]
    if not included:
        return MatchResult(status=MatchStatus.NO_MATCH, scored=list(ranked))

    top = included[0]
    confident = [e for e in included if e.score >= thresholds.high_confidence]
    runner_up = ranked[1].score if len(ranked) > 1 else None
    clear_lead = runner_up is None or round(top.score - runner_up, 6) > thresholds.tie_margin

    if len(confident) == 1 and clear_lead:
        return MatchResult(
            status=MatchStatus.SINGLE_MATCH,
            confidence_score=top.score,
            chosen_candidate=top.candidate,
            scored=list(ranked),
        )

    suggestions = [e.candidate for e in included[: thresholds.max_suggestions]]
    return MatchResult(
        status=MatchStatus.MULTIPLE_CANDIDATES,
        confidence_score=top.score,
        suggestions=suggestions,
        scored=list(ranked),
    )


def rank(
    candidates: list[Candidate],
    signals: Signals,
    *,
    thresholds: MatchThresholds = DEFAULT_THRESHOLDS,
    weights: SignalWeights = DEFAULT_WEIGHTS,
) -> MatchResult:
    """Rank search results against the signals read from the media.

    The rights-society veto runs first; vetoed candidates are never scored
    and only appear as exclusion explanations. The same candidates and
    signals always yield the same ordering and scores.
    """
    veto = rights.apply(candidates, signals.declared_rights_societies)
    scored = [score_candidate(c, signals, weights) for c in veto.retained]
    ranked = order(scored)

    result = classify(ranked, thresholds)
    result.exclusions = [e.reason for e in veto.excluded]
    result.warnings = list(veto.warnings)

    for entry in ranked:
        logger.debug(
            "Release %d scored %.3f (%s)",
            entry.release_id,
            entry.score,
            ", ".join(entry.hits) or "no hits",
        )
    logger.info(
        "Ranked %d candidates (%d excluded): %s",
        len(ranked),
        len(veto.excluded),
        result.status.value,
    )
    return result
