# ABOUTME: Matching package: release candidates, signals, rights veto, scoring, and ranking.
# ABOUTME: Exports the types and entry points used by the scan workflow.

from pressmatch.matching.candidate import Candidate
from pressmatch.matching.ranking import classify, rank
from pressmatch.matching.result import MatchResult, MatchStatus, ScoredCandidate
from pressmatch.matching.signals import Signals

__all__ = [
    "Candidate",
    "MatchResult",
    "MatchStatus",
    "ScoredCandidate",
    "Signals",
    "classify",
    "rank",
]
