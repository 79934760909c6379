# ABOUTME: CharacterConfidence holds one recognized symbol with its confidence and alternatives.
# ABOUTME: Entries are immutable; a correction replaces the whole entry.

from dataclasses import dataclass, field, replace

VERIFIED_CONFIDENCE = 1.0


@dataclass(frozen=True)
class CharacterConfidence:
    """One recognized character of an OCR'd identifier.

    Position is the zero-based index within the parent string. Alternatives
    are plausible OCR confusions for the character, most likely first.
    """

    character: str
    confidence: float
    position: int
    alternatives: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if len(self.character) != 1:
            msg = f"character must be a single symbol, got {self.character!r}"
            raise ValueError(msg)
        if not 0.0 <= self.confidence <= 1.0:
            msg = f"confidence must be between 0.0 and 1.0, got {self.confidence}"
            raise ValueError(msg)
        if self.position < 0:
            msg = f"position must not be negative, got {self.position}"
            raise ValueError(msg)
        # Accept lists from upstream payloads but store a tuple.
        if not isinstance(self.alternatives, tuple):
            object.__setattr__(self, "alternatives", tuple(self.alternatives))

    @property
    def is_verified(self) -> bool:
        """Whether a human has confirmed this character."""
        return self.confidence >= VERIFIED_CONFIDENCE

    def corrected(self, new_character: str) -> "CharacterConfidence":
        """Return a human-verified copy holding new_character."""
        return replace(self, character=new_character, confidence=VERIFIED_CONFIDENCE)


@dataclass(frozen=True)
class Correction:
    """A human correction of one character position."""

    position: int
    original: str
    corrected: str
