# ABOUTME: OCR verification package: confusable table, character model, and review session.
# ABOUTME: Exports session, consensus, and runout-pattern types for human-in-the-loop correction.

from pressmatch.ocr.characters import CharacterConfidence, Correction
from pressmatch.ocr.consensus import Reading, build_consensus
from pressmatch.ocr.confusables import lookup
from pressmatch.ocr.patterns import RunoutCodes, read_runout
from pressmatch.ocr.session import SessionOutcome, VerificationSession

__all__ = [
    "CharacterConfidence",
    "Correction",
    "Reading",
    "RunoutCodes",
    "SessionOutcome",
    "VerificationSession",
    "build_consensus",
    "lookup",
    "read_runout",
]
