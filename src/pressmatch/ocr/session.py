# ABOUTME: Verification session holding per-character OCR state during human review.
# ABOUTME: Applies corrections, keeps a per-position correction log, and assembles the string.

import logging
from dataclasses import dataclass

from pressmatch.config import DEFAULT_SESSION_SETTINGS, SessionSettings
from pressmatch.errors import CoreError, invalid_input, out_of_range
from pressmatch.ocr.characters import CharacterConfidence, Correction
from pressmatch.ocr.confusables import lookup, merge_alternatives
from pressmatch.types import MediaType

logger = logging.getLogger(__name__)


@dataclass
class SessionOutcome:
    """Result of initializing a session: exactly one of session or error is set."""

    session: "VerificationSession | None"
    error: CoreError | None = None

    @property
    def ok(self) -> bool:
        return self.session is not None


class VerificationSession:
    """Per-character recognition state for one scanned identifier.

    A session is a plain value owned by whoever runs the scan. It performs no
    I/O; reads are idempotent and failed operations leave it unchanged.
    """

    def __init__(
        self,
        characters: list[CharacterConfidence],
        *,
        media_type: MediaType = MediaType.VINYL,
        settings: SessionSettings = DEFAULT_SESSION_SETTINGS,
    ) -> None:
        self._characters = list(characters)
        self._corrections: list[Correction] = []
        self._media_type = media_type
        self._settings = settings

    @classmethod
    def initialize(
        cls,
        raw: str,
        characters: list[CharacterConfidence] | None = None,
        *,
        media_type: MediaType = MediaType.VINYL,
        settings: SessionSettings = DEFAULT_SESSION_SETTINGS,
    ) -> SessionOutcome:
        """Build a session from a recognized string.

        When the recognizer supplied per-character confidences they are used
        as-is, ordered by position. Otherwise every character of raw gets the
        default confidence and alternatives from the confusable table.

        Returns:
            SessionOutcome with the session, or an INVALID_INPUT error.
        """
        if characters:
            ordered = sorted(characters, key=lambda c: c.position)
            positions = [c.position for c in ordered]
            if positions != list(range(len(ordered))):
                return SessionOutcome(
                    session=None,
                    error=invalid_input(
                        f"character positions must be contiguous from 0, got {positions}"
                    ),
                )
            return SessionOutcome(
                session=cls(ordered, media_type=media_type, settings=settings)
            )

        if not raw:
            return SessionOutcome(
                session=None,
                error=invalid_input("recognized string is empty and no characters supplied"),
            )

        try:
            built = [
                CharacterConfidence(
                    character=char,
                    confidence=settings.default_confidence,
                    position=index,
                    alternatives=tuple(lookup(char)),
                )
                for index, char in enumerate(raw)
            ]
        except ValueError as exc:
            return SessionOutcome(session=None, error=invalid_input(str(exc)))

        return SessionOutcome(session=cls(built, media_type=media_type, settings=settings))

    @property
    def characters(self) -> list[CharacterConfidence]:
        """Current characters in position order (a copy)."""
        return list(self._characters)

    @property
    def corrections(self) -> list[Correction]:
        """Correction log, one entry per corrected position (a copy)."""
        return list(self._corrections)

    @property
    def media_type(self) -> MediaType:
        return self._media_type

    def apply_correction(self, position: int, new_character: str) -> CoreError | None:
        """Replace the character at position with a human-verified one.

        The log keeps one entry per position: a repeat correction updates the
        corrected value but keeps the original from before any correction.

        Returns:
            None on success, or an OUT_OF_RANGE / INVALID_INPUT error.
        """
        if not 0 <= position < len(self._characters):
            return out_of_range(
                f"position {position} outside 0..{len(self._characters) - 1}"
            )
        if len(new_character) != 1:
            return invalid_input(
                f"correction must be a single symbol, got {new_character!r}"
            )

        current = self._characters[position]
        for index, entry in enumerate(self._corrections):
            if entry.position == position:
                self._corrections[index] = Correction(
                    position=position,
                    original=entry.original,
                    corrected=new_character,
                )
                break
        else:
            self._corrections.append(
                Correction(
                    position=position,
                    original=current.character,
                    corrected=new_character,
                )
            )

        self._characters[position] = current.corrected(new_character)
        logger.debug(
            "Corrected position %d: %r -> %r", position, current.character, new_character
        )
        return None

    def uncertain_count(self) -> int:
        """Number of characters below the uncertainty threshold."""
        return len(self.uncertain_positions())

    def uncertain_positions(self) -> list[int]:
        """Positions whose confidence is below the uncertainty threshold."""
        threshold = self._settings.uncertain_below
        return [c.position for c in self._characters if c.confidence < threshold]

    def is_resolved(self) -> bool:
        """Whether every character is confident enough to proceed."""
        return self.uncertain_count() == 0

    def assembled_string(self) -> str:
        """Current characters concatenated in position order."""
        return "".join(c.character for c in self._characters)

    def has_changes(self) -> bool:
        return bool(self._corrections)

    def get_alternatives(self, character: str) -> list[str]:
        """Confusable alternatives for a character.

        Merges the built-in table with alternatives the recognizer attached to
        any character in this session with the same symbol.
        """
        from_data: list[str] = []
        for entry in self._characters:
            if entry.character == character:
                from_data.extend(entry.alternatives)
                break
        return merge_alternatives(character, from_data)

    def guidance(self) -> str:
        """Short instruction for the reviewer, specific to the medium."""
        location = self._media_type.identifier_location
        return f"Check the code in the {location} and correct any uncertain characters."
