# ABOUTME: Tunable thresholds and weights for verification and candidate ranking.
# ABOUTME: Frozen dataclasses carry the defaults; callers and CLI options override per run.

from dataclasses import dataclass

DISCOGS_TOKEN_ENV = "DISCOGS_TOKEN"
CATALOG_DB_ENV = "PRESSMATCH_DB"


def _check_unit(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        msg = f"{name} must be between 0.0 and 1.0, got {value}"
        raise ValueError(msg)


@dataclass(frozen=True)
class SessionSettings:
    """Confidence settings for a character verification session.

    Attributes:
        default_confidence: Assigned to every character when the recognizer
            did not report per-character confidence.
        uncertain_below: Characters under this confidence need human review.
    """

    default_confidence: float = 0.85
    uncertain_below: float = 0.9

    def __post_init__(self) -> None:
        _check_unit("default_confidence", self.default_confidence)
        _check_unit("uncertain_below", self.uncertain_below)


@dataclass(frozen=True)
class MatchThresholds:
    """Classification thresholds applied to ranked candidate scores."""

    high_confidence: float = 0.85
    inclusion: float = 0.4
    tie_margin: float = 0.05
    max_suggestions: int = 5

    def __post_init__(self) -> None:
        _check_unit("high_confidence", self.high_confidence)
        _check_unit("inclusion", self.inclusion)
        _check_unit("tie_margin", self.tie_margin)
        if self.inclusion > self.high_confidence:
            msg = (
                f"inclusion ({self.inclusion}) must not exceed "
                f"high_confidence ({self.high_confidence})"
            )
            raise ValueError(msg)
        if self.max_suggestions < 1:
            msg = f"max_suggestions must be at least 1, got {self.max_suggestions}"
            raise ValueError(msg)


@dataclass(frozen=True)
class SignalWeights:
    """Point weight each deterministic signal contributes when it matches.

    Catalog numbers are printed and reliable, barcodes nearly so; matrix
    numbers are etched by hand and noisier. Scores are normalized by the
    total weight of the signals actually supplied.
    """

    catalog_number: float = 0.45
    barcode: float = 0.35
    matrix: float = 0.25
    ifpi_mastering: float = 0.10
    ifpi_mould: float = 0.10
    artist: float = 0.10
    title: float = 0.10

    def __post_init__(self) -> None:
        for name in (
            "catalog_number",
            "barcode",
            "matrix",
            "ifpi_mastering",
            "ifpi_mould",
            "artist",
            "title",
        ):
            if getattr(self, name) < 0.0:
                msg = f"{name} weight must not be negative"
                raise ValueError(msg)


DEFAULT_SESSION_SETTINGS = SessionSettings()
DEFAULT_THRESHOLDS = MatchThresholds()
DEFAULT_WEIGHTS = SignalWeights()
