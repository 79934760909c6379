# ABOUTME: Combines several OCR readings of the same identifier into per-character confidence.
# ABOUTME: Weighted positional voting over readings of the dominant length.

import logging
from collections import defaultdict
from dataclasses import dataclass

from pressmatch.ocr.characters import CharacterConfidence
from pressmatch.ocr.confusables import merge_alternatives

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reading:
    """One OCR pass over an identifier, e.g. from a differently preprocessed photo."""

    text: str
    weight: float = 1.0
    source: str = ""

    def __post_init__(self) -> None:
        if self.weight <= 0.0:
            msg = f"weight must be positive, got {self.weight}"
            raise ValueError(msg)


def _normalize(text: str) -> str:
    """Collapse whitespace runs so spacing noise does not shift positions."""
    return " ".join(text.split()).upper()


def build_consensus(readings: list[Reading]) -> list[CharacterConfidence]:
    """Vote per position across readings and return confidence-scored characters.

    Only readings with the dominant (highest total weight) length vote; a
    different length means the recognizer dropped or split a character and
    positions no longer line up. Length ties go to the longer reading.
    Confidence is the winning symbol's share of the voting weight. Losing
    symbols become alternatives ahead of the built-in confusables.

    Returns:
        Characters in position order, or [] when no reading has text.
    """
    normalized = [(r, _normalize(r.text)) for r in readings]
    normalized = [(r, text) for r, text in normalized if text]
    if not normalized:
        return []

    weight_by_length: dict[int, float] = defaultdict(float)
    for reading, text in normalized:
        weight_by_length[len(text)] += reading.weight
    length = max(weight_by_length, key=lambda n: (weight_by_length[n], n))

    voters = [(r, text) for r, text in normalized if len(text) == length]
    for reading, text in normalized:
        if len(text) != length:
            logger.debug(
                "Reading %s dropped: %d characters, consensus length %d",
                reading.source or repr(reading.text),
                len(text),
                length,
            )
    total = sum(r.weight for r, _ in voters)

    characters: list[CharacterConfidence] = []
    for position in range(length):
        votes: dict[str, float] = defaultdict(float)
        for reading, text in voters:
            votes[text[position]] += reading.weight
        # Highest weight wins; ties broken by symbol for reproducibility.
        ranked = sorted(votes.items(), key=lambda item: (-item[1], item[0]))
        winner, winner_weight = ranked[0]
        losers = [symbol for symbol, _ in ranked[1:]]
        characters.append(
            CharacterConfidence(
                character=winner,
                confidence=round(winner_weight / total, 6),
                position=position,
                alternatives=tuple(_voted_first(winner, losers)),
            )
        )
    return characters


def _voted_first(character: str, voted: list[str]) -> list[str]:
    ordered = list(voted)
    for alt in merge_alternatives(character):
        if alt not in ordered:
            ordered.append(alt)
    return ordered
