# ABOUTME: Shared enumerations used across the OCR, matching, and workflow layers.
# ABOUTME: MediaType selects guidance text and catalog search format, never scoring.

from enum import Enum


class MediaType(Enum):
    """Physical media being scanned."""

    VINYL = "vinyl"
    CD = "cd"

    @property
    def catalog_format(self) -> str:
        """Format name used by the release catalog's search filter."""
        return "Vinyl" if self is MediaType.VINYL else "CD"

    @property
    def identifier_location(self) -> str:
        """Where the matrix identifier is found on this medium."""
        if self is MediaType.VINYL:
            return "runout groove"
        return "inner ring"
