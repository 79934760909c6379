# ABOUTME: Error taxonomy for the release-disambiguation core.
# ABOUTME: Core operations return CoreError values; collaborators raise CollaboratorError.

from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    """Categories of failure a caller may need to react to."""

    INVALID_INPUT = "invalid_input"
    OUT_OF_RANGE = "out_of_range"
    COLLABORATOR_UNAVAILABLE = "collaborator_unavailable"
    AMBIGUOUS_VETO = "ambiguous_veto"
    INVALID_STATE = "invalid_state"


@dataclass(frozen=True)
class CoreError:
    """A failure reported as a value rather than raised.

    The caller decides whether to retry, prompt the user, or abandon the scan.
    """

    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


class CollaboratorError(Exception):
    """Raised when an external collaborator (search, pricing, storage) fails."""


def invalid_input(message: str) -> CoreError:
    return CoreError(ErrorKind.INVALID_INPUT, message)


def out_of_range(message: str) -> CoreError:
    return CoreError(ErrorKind.OUT_OF_RANGE, message)


def collaborator_unavailable(message: str) -> CoreError:
    return CoreError(ErrorKind.COLLABORATOR_UNAVAILABLE, message)


def ambiguous_veto(message: str) -> CoreError:
    return CoreError(ErrorKind.AMBIGUOUS_VETO, message)


def invalid_state(message: str) -> CoreError:
    return CoreError(ErrorKind.INVALID_STATE, message)
