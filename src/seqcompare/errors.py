"""Error kinds and exceptions shared across the analysis modules."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .validation import ValidationResult


class ErrorKind(Enum):
    EMPTY_SEQUENCE = "EmptySequence"
    SEQUENCE_TOO_LONG = "SequenceTooLong"
    INVALID_CHARACTERS = "InvalidCharacters"
    INVALID_FRAME = "InvalidFrame"
    NO_SEQUENCES_PROVIDED = "NoSequencesProvided"
    INSUFFICIENT_SEQUENCES = "InsufficientSequences"
    INVALID_REFERENCE = "InvalidReference"


class SeqCompareError(Exception):
    """Base error; ``kind`` tells callers which failure occurred."""

    kind: ErrorKind | None = None


class InvalidFrameError(SeqCompareError, ValueError):
    kind = ErrorKind.INVALID_FRAME

    def __init__(self, frame: object) -> None:
        self.frame = frame
        super().__init__(f"Reading frame must be 0, 1 or 2 (got {frame!r}).")


class NoSequencesProvidedError(SeqCompareError):
    kind = ErrorKind.NO_SEQUENCES_PROVIDED


class InsufficientSequencesError(SeqCompareError):
    kind = ErrorKind.INSUFFICIENT_SEQUENCES


class InvalidReferenceError(SeqCompareError):
    kind = ErrorKind.INVALID_REFERENCE


class SequenceValidationError(SeqCompareError):
    """Raised by the orchestration layer when a participating sequence fails validation."""

    def __init__(self, result: "ValidationResult") -> None:
        self.result = result
        self.kind = result.error
        super().__init__(result.message)


class BlastSubmissionError(SeqCompareError):
    """NCBI BLAST did not return a request id."""


class ConfigurationError(SeqCompareError, ValueError):
    """A required configuration value is missing."""
