# ABOUTME: Confidence scoring of release candidates against signals read from the media.
# ABOUTME: Accrues weighted signal hits and normalizes by the weight of the supplied signals.

from difflib import SequenceMatcher

from pressmatch.config import DEFAULT_WEIGHTS, SignalWeights
from pressmatch.matching.candidate import Candidate
from pressmatch.matching.result import ScoredCandidate
from pressmatch.matching.signals import (
    Signals,
    clean_matrix,
    normalize_barcode,
    normalize_catalog_number,
    normalize_matrix,
    normalize_sid,
)
from pressmatch.ocr.confusables import confusable_equal

CATALOG_NUMBER_EXACT = "catalog-number-exact"
BARCODE_MATCH = "barcode-match"
MATRIX_EXACT = "matrix-exact"
MATRIX_CONFUSABLE = "matrix-confusable"
MATRIX_PREFIX = "matrix-prefix"
MATRIX_PARTIAL = "matrix-partial"
IFPI_MASTERING_MATCH = "ifpi-mastering-match"
IFPI_MOULD_MATCH = "ifpi-mould-match"

# Share of the matrix weight each kind of matrix hit earns, strongest first.
_MATRIX_HIT_FACTORS: dict[str, float] = {
    MATRIX_EXACT: 1.0,
    MATRIX_CONFUSABLE: 0.9,
    MATRIX_PREFIX: 0.8,
    MATRIX_PARTIAL: 0.5,
}

# Length of the leading matrix fragment checked for a prefix hit.
_MATRIX_PREFIX_LENGTH = 8

_SCORE_PRECISION = 6


def _string_similarity(a: str, b: str) -> float:
    """Case-insensitive string similarity using SequenceMatcher."""
    if not a or not b:
        return 0.0
    return SequenceMatcher(None, a.lower(), b.lower()).ratio()


def _matrix_hit(signal: str, listed: tuple[str, ...]) -> str | None:
    """Strongest matrix hit between the read matrix and the catalog's lines."""
    wanted = normalize_matrix(signal)
    if not wanted:
        return None
    words = [w.upper() for w in clean_matrix(signal).split(" ") if w]
    prefix = wanted[:_MATRIX_PREFIX_LENGTH]

    best: str | None = None
    for line in listed:
        normalized = normalize_matrix(line)
        if not normalized:
            continue
        if normalized == wanted:
            hit = MATRIX_EXACT
        elif confusable_equal(normalized, wanted):
            hit = MATRIX_CONFUSABLE
        elif prefix in normalized:
            hit = MATRIX_PREFIX
        elif len(words) >= 2 and sum(1 for w in words if w in line.upper()) >= 2:
            hit = MATRIX_PARTIAL
        else:
            continue
        if best is None or _MATRIX_HIT_FACTORS[hit] > _MATRIX_HIT_FACTORS[best]:
            best = hit
    return best


def signal_hits(candidate: Candidate, signals: Signals) -> set[str]:
    """Reason codes for every signal this candidate matches.

    Combines codes the search service attached with codes derived here by
    comparing the candidate's listed identifiers to the normalized signals.
    """
    hits = set(candidate.reason_codes)

    if signals.catalog_number and candidate.catalog_number:
        wanted = normalize_catalog_number(signals.catalog_number)
        if wanted and wanted == normalize_catalog_number(candidate.catalog_number):
            hits.add(CATALOG_NUMBER_EXACT)

    if signals.barcode:
        wanted = normalize_barcode(signals.barcode)
        if wanted and any(normalize_barcode(b) == wanted for b in candidate.barcodes):
            hits.add(BARCODE_MATCH)

    if signals.matrix_number:
        hit = _matrix_hit(signals.matrix_number, candidate.matrix_numbers)
        if hit:
            hits.add(hit)

    sids = [normalize_sid(code) for code in candidate.sid_codes]
    if signals.ifpi_mastering:
        wanted = normalize_sid(signals.ifpi_mastering)
        if wanted and any(wanted in sid for sid in sids):
            hits.add(IFPI_MASTERING_MATCH)
    if signals.ifpi_mould:
        wanted = normalize_sid(signals.ifpi_mould)
        if wanted and any(wanted in sid for sid in sids):
            hits.add(IFPI_MOULD_MATCH)

    return hits


def supplied_weight(signals: Signals, weights: SignalWeights = DEFAULT_WEIGHTS) -> float:
    """Total weight of the signals actually supplied: the normalization base."""
    total = 0.0
    if signals.catalog_number:
        total += weights.catalog_number
    if signals.barcode:
        total += weights.barcode
    if signals.matrix_number:
        total += weights.matrix
    if signals.ifpi_mastering:
        total += weights.ifpi_mastering
    if signals.ifpi_mould:
        total += weights.ifpi_mould
    if signals.artist:
        total += weights.artist
    if signals.title:
        total += weights.title
    return total


def score_candidate(
    candidate: Candidate,
    signals: Signals,
    weights: SignalWeights = DEFAULT_WEIGHTS,
) -> ScoredCandidate:
    """Score one candidate against the signals.

    Each matching signal contributes its weight (matrix hits a share of it,
    artist/title their similarity ratio). The sum is divided by the weight of
    the signals supplied, so a candidate matching everything that was read
    scores 1.0. With no scorable signal the search service's own score is
    used. Reason codes for signals that were not supplied earn nothing.
    """
    base = supplied_weight(signals, weights)
    hits = signal_hits(candidate, signals)

    if base <= 0.0:
        score = candidate.search_score or 0.0
        return ScoredCandidate(
            candidate=candidate,
            score=round(score, _SCORE_PRECISION),
            hits=tuple(sorted(hits)),
        )

    accrued = 0.0
    if signals.catalog_number and CATALOG_NUMBER_EXACT in hits:
        accrued += weights.catalog_number
    if signals.barcode and BARCODE_MATCH in hits:
        accrued += weights.barcode
    if signals.matrix_number:
        factor = max(
            (f for code, f in _MATRIX_HIT_FACTORS.items() if code in hits),
            default=0.0,
        )
        accrued += weights.matrix * factor
    if signals.ifpi_mastering and IFPI_MASTERING_MATCH in hits:
        accrued += weights.ifpi_mastering
    if signals.ifpi_mould and IFPI_MOULD_MATCH in hits:
        accrued += weights.ifpi_mould
    if signals.artist:
        accrued += weights.artist * _string_similarity(signals.artist, candidate.artist or "")
    if signals.title:
        accrued += weights.title * _string_similarity(signals.title, candidate.title or "")

    score = max(0.0, min(1.0, accrued / base))
    return ScoredCandidate(
        candidate=candidate,
        score=round(score, _SCORE_PRECISION),
        hits=tuple(sorted(hits)),
    )
