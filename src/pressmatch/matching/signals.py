# ABOUTME: Deterministic signals read from the physical media, plus their normalizers.
# ABOUTME: Cleans matrix, catalog number, barcode, and SID strings before comparison or search.

import re
from dataclasses import dataclass, field

# Characters OCR tends to hallucinate around etched runout text.
_MATRIX_ARTIFACT_RE = re.compile(r"[#*~°]")
_WHITESPACE_RE = re.compile(r"\s+")
_TRAILING_NUMBER_RE = re.compile(r"\s+\d+$")
_CATNO_STRIP_RE = re.compile(r"[\s\-._/]")
_NON_DIGIT_RE = re.compile(r"\D")
_IFPI_PREFIX_RE = re.compile(r"^\s*IFPI\s*", re.IGNORECASE)


@dataclass(frozen=True)
class Signals:
    """What was read or typed about the item in hand.

    Every field is optional; declared_rights_societies empty means "unknown",
    never "none".
    """

    matrix_number: str | None = None
    catalog_number: str | None = None
    barcode: str | None = None
    declared_rights_societies: frozenset[str] = field(default_factory=frozenset)
    ifpi_mastering: str | None = None
    ifpi_mould: str | None = None
    artist: str | None = None
    title: str | None = None

    @property
    def is_empty(self) -> bool:
        """Whether no searchable signal at all was supplied."""
        return not any(
            (
                self.matrix_number,
                self.catalog_number,
                self.barcode,
                self.ifpi_mastering,
                self.ifpi_mould,
                self.artist,
                self.title,
            )
        )


def clean_matrix(matrix: str) -> str:
    """Remove common OCR artifacts and collapse whitespace, keeping structure."""
    cleaned = _MATRIX_ARTIFACT_RE.sub("", matrix)
    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def normalize_matrix(matrix: str) -> str:
    """Uppercase, artifact-free, separator-free form used for equality checks."""
    return _CATNO_STRIP_RE.sub("", clean_matrix(matrix)).upper()


def matrix_search_terms(matrix: str) -> list[str]:
    """Search queries derived from a matrix string, broadest-useful last.

    The full cleaned string, the first word, the first two words, and the
    string without a trailing side/stamper number. Duplicates removed.
    """
    clean = clean_matrix(matrix)
    if not clean:
        return []
    terms = [clean]
    parts = clean.split(" ")
    if len(parts) > 1:
        terms.append(parts[0])
        terms.append(" ".join(parts[:2]))
    without_suffix = _TRAILING_NUMBER_RE.sub("", clean)
    if without_suffix != clean:
        terms.append(without_suffix)

    unique: list[str] = []
    for term in terms:
        if term not in unique:
            unique.append(term)
    return unique


def normalize_catalog_number(catno: str) -> str:
    """Case-insensitive catalog number with spaces, hyphens, dots, slashes removed."""
    return _CATNO_STRIP_RE.sub("", catno).upper()


def normalize_barcode(barcode: str) -> str:
    """Digits only: barcodes are printed with arbitrary spacing."""
    return _NON_DIGIT_RE.sub("", barcode)


def normalize_sid(code: str) -> str:
    """SID code without the 'IFPI' prefix, uppercased and separator-free."""
    return _CATNO_STRIP_RE.sub("", _IFPI_PREFIX_RE.sub("", code)).upper()
