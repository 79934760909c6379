# ABOUTME: Scan workflow state machine from first signals to a verified release.
# ABOUTME: Drives search, ranking, user selection or rejection, and the final save.

import logging
from dataclasses import dataclass, replace
from enum import Enum

from pressmatch.catalog.provider import (
    CatalogSearch,
    PriceSummary,
    PricingSource,
    ReleaseStore,
    SearchRequest,
    SearchResponse,
)
from pressmatch.config import DEFAULT_THRESHOLDS, DEFAULT_WEIGHTS, MatchThresholds, SignalWeights
from pressmatch.errors import (
    CollaboratorError,
    CoreError,
    collaborator_unavailable,
    invalid_state,
)
from pressmatch.matching import rights
from pressmatch.matching.candidate import Candidate
from pressmatch.matching.ranking import classify, order, rank
from pressmatch.matching.result import MatchResult, MatchStatus, ScoredCandidate
from pressmatch.ocr.patterns import read_runout
from pressmatch.ocr.session import VerificationSession

logger = logging.getLogger(__name__)


class ScanState(Enum):
    """Lifecycle of one scan."""

    IDLE = "idle"
    SEARCHING = "searching"
    SINGLE_MATCH = "single_match"
    MULTIPLE_CANDIDATES = "multiple_candidates"
    NO_MATCH = "no_match"
    MANUAL_MATCH = "manual_match"
    VERIFIED = "verified"


_STATE_FOR_STATUS = {
    MatchStatus.NO_MATCH: ScanState.NO_MATCH,
    MatchStatus.SINGLE_MATCH: ScanState.SINGLE_MATCH,
    MatchStatus.MULTIPLE_CANDIDATES: ScanState.MULTIPLE_CANDIDATES,
    MatchStatus.MANUAL_MATCH: ScanState.MANUAL_MATCH,
}

_CAN_SUBMIT = frozenset({ScanState.IDLE, ScanState.NO_MATCH, ScanState.MULTIPLE_CANDIDATES})
_HAS_CHOICE = frozenset({ScanState.SINGLE_MATCH, ScanState.MANUAL_MATCH})


@dataclass
class PriceOutcome:
    """Result of a pricing lookup: exactly one of summary or error is set."""

    summary: PriceSummary | None
    error: CoreError | None = None


class ScanWorkflow:
    """Match status state machine for one scan.

    idle -> searching -> {single_match, multiple_candidates, no_match}
    -> manual_match -> verified. no_match and multiple_candidates accept new
    signals; reject() returns a presented match to idle. verified is terminal:
    a new scan needs a new workflow.

    Every operation returns errors as values and leaves the state unchanged
    when it fails. The search collaborator is called once per submit; a
    failure is the outcome of that attempt and is never retried here.
    """

    def __init__(
        self,
        search: CatalogSearch,
        *,
        thresholds: MatchThresholds = DEFAULT_THRESHOLDS,
        weights: SignalWeights = DEFAULT_WEIGHTS,
        trust_collaborator_status: bool = False,
    ) -> None:
        self._search = search
        self._thresholds = thresholds
        self._weights = weights
        self._trust_status = trust_collaborator_status
        self._state = ScanState.IDLE
        self._result: MatchResult | None = None
        self._chosen: Candidate | None = None
        self._session: VerificationSession | None = None
        self._record_id: int | None = None

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def result(self) -> MatchResult | None:
        """Outcome of the latest ranking pass."""
        return self._result

    @property
    def chosen(self) -> Candidate | None:
        """The candidate currently presented as the match, if any."""
        return self._chosen

    @property
    def session(self) -> VerificationSession | None:
        return self._session

    @property
    def record_id(self) -> int | None:
        """Storage id returned by the save that verified this scan."""
        return self._record_id

    def attach_session(self, session: VerificationSession) -> CoreError | None:
        """Attach the matrix verification session for this scan."""
        if self._state is ScanState.VERIFIED:
            return invalid_state("scan is already verified")
        self._session = session
        return None

    def submit(self, request: SearchRequest) -> MatchResult:
        """Search the catalog with the given signals and classify the outcome.

        When a verification session is attached and the request carries no
        matrix number, the session's assembled string is used, and IFPI codes
        in the matrix text fill SID signals the request left empty. A manual
        search whose ranking yields a single match goes straight to
        manual_match.
        """
        if self._state not in _CAN_SUBMIT:
            error = invalid_state(f"cannot search while {self._state.value}")
            return MatchResult(status=MatchStatus.NO_MATCH, error=error)

        request = self._with_runout_signals(self._with_session_matrix(request))
        self._transition(ScanState.SEARCHING)
        self._chosen = None

        try:
            response = self._search.search(request)
        except CollaboratorError as exc:
            logger.warning("Search via %s failed: %s", self._search.name, exc)
            result = MatchResult(
                status=MatchStatus.NO_MATCH,
                error=collaborator_unavailable(str(exc)),
            )
            self._result = result
            self._transition(ScanState.NO_MATCH)
            return result

        if self._trust_status and response.match_status is not None:
            result = self._trusted_result(response, request)
        else:
            result = rank(
                response.candidates,
                request.signals,
                thresholds=self._thresholds,
                weights=self._weights,
            )

        if request.manual and result.status is MatchStatus.SINGLE_MATCH:
            result = replace(result, status=MatchStatus.MANUAL_MATCH)

        self._result = result
        self._chosen = result.chosen_candidate
        self._transition(_STATE_FOR_STATUS[result.status])
        return result

    def select(self, release_id: int) -> CoreError | None:
        """The user picks one presented candidate as the match."""
        if self._state is ScanState.MULTIPLE_CANDIDATES and self._result is not None:
            pool = self._result.suggestions
        elif self._state is ScanState.SINGLE_MATCH and self._chosen is not None:
            pool = [self._chosen]
        else:
            return invalid_state(f"nothing to select while {self._state.value}")

        for candidate in pool:
            if candidate.release_id == release_id:
                self._chosen = candidate
                self._transition(ScanState.MANUAL_MATCH)
                return None
        return invalid_state(f"release {release_id} was not offered")

    def reject(self) -> CoreError | None:
        """The user says the presented match is wrong: discard it and start over."""
        if self._state not in _HAS_CHOICE:
            return invalid_state(f"no match to reject while {self._state.value}")
        if self._chosen is not None:
            logger.info("Match %d rejected by user", self._chosen.release_id)
        self._chosen = None
        self._result = None
        self._transition(ScanState.IDLE)
        return None

    def save(self, store: ReleaseStore) -> CoreError | None:
        """Persist the chosen candidate; success makes the scan verified."""
        if self._state not in _HAS_CHOICE or self._chosen is None:
            return invalid_state(f"no chosen release to save while {self._state.value}")

        matrix = self._session.assembled_string() if self._session else None
        corrections = self._session.corrections if self._session else []
        try:
            self._record_id = store.save_release(self._chosen, matrix, corrections)
        except CollaboratorError as exc:
            logger.warning("Saving release %d failed: %s", self._chosen.release_id, exc)
            return collaborator_unavailable(str(exc))

        self._transition(ScanState.VERIFIED)
        return None

    def price(self, pricing: PricingSource) -> PriceOutcome:
        """Marketplace prices for the chosen release. Never changes state."""
        if self._chosen is None:
            return PriceOutcome(summary=None, error=invalid_state("no release chosen"))
        try:
            return PriceOutcome(summary=pricing.price(self._chosen.release_id))
        except CollaboratorError as exc:
            logger.warning("Pricing %d failed: %s", self._chosen.release_id, exc)
            return PriceOutcome(summary=None, error=collaborator_unavailable(str(exc)))

    def _with_session_matrix(self, request: SearchRequest) -> SearchRequest:
        if self._session is None or request.signals.matrix_number:
            return request
        matrix = self._session.assembled_string()
        signals = replace(request.signals, matrix_number=matrix)
        return replace(request, signals=signals)

    def _with_runout_signals(self, request: SearchRequest) -> SearchRequest:
        """Fill missing IFPI SID signals from codes found in the matrix text."""
        signals = request.signals
        if not signals.matrix_number or (signals.ifpi_mastering and signals.ifpi_mould):
            return request
        codes = read_runout(signals.matrix_number)
        mastering = signals.ifpi_mastering or (codes.ifpi_mastering or [None])[0]
        mould = signals.ifpi_mould or (codes.ifpi_mould or [None])[0]
        if (mastering, mould) == (signals.ifpi_mastering, signals.ifpi_mould):
            return request
        logger.debug("SID codes from matrix text: mastering=%s mould=%s", mastering, mould)
        signals = replace(signals, ifpi_mastering=mastering, ifpi_mould=mould)
        return replace(request, signals=signals)

    def _trusted_result(self, response: SearchResponse, request: SearchRequest) -> MatchResult:
        """Build a result from the collaborator's own classification.

        The rights-society veto still applies; ordering uses search scores.
        Once the veto removes anything, the collaborator's status and top score
        may describe an excluded release, so the survivors are classified
        locally on their own search scores.
        """
        veto = rights.apply(response.candidates, request.signals.declared_rights_societies)
        ranked = order(
            [ScoredCandidate(c, c.search_score or 0.0) for c in veto.retained]
        )
        if veto.excluded:
            result = classify(ranked, self._thresholds)
            result.exclusions = [e.reason for e in veto.excluded]
            result.warnings = list(veto.warnings)
            return result

        status = response.match_status or MatchStatus.NO_MATCH
        top = ranked[0] if ranked else None
        if top is None:
            status = MatchStatus.NO_MATCH

        result = MatchResult(
            status=status,
            confidence_score=response.top_score or (top.score if top else 0.0),
            scored=ranked,
            warnings=list(veto.warnings),
        )
        if status in (MatchStatus.SINGLE_MATCH, MatchStatus.MANUAL_MATCH) and top:
            result.chosen_candidate = top.candidate
        elif status is MatchStatus.MULTIPLE_CANDIDATES:
            result.suggestions = [
                e.candidate for e in ranked[: self._thresholds.max_suggestions]
            ]
        return result

    def _transition(self, new_state: ScanState) -> None:
        logger.debug("Scan state %s -> %s", self._state.value, new_state.value)
        self._state = new_state
