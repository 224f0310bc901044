"""Length and alphabet checks run before any comparison."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .errors import ErrorKind
from .utils_seq import SequenceType, alphabet_for, normalize_sequence

MAX_SEQUENCE_LENGTH = 10_000

_ALLOWED_HINT = {
    SequenceType.PROTEIN: "Only standard amino acids (ACDEFGHIKLMNPQRSTVWYBXZ*-) are allowed.",
    SequenceType.NUCLEOTIDE: "Only standard nucleotides (ACGTRYSWKMBDHVN-) are allowed.",
}


@dataclass(frozen=True, slots=True)
class ValidationResult:
    is_valid: bool
    message: str = ""
    error: ErrorKind | None = None
    invalid_characters: tuple[str, ...] = ()

    def __bool__(self) -> bool:
        return self.is_valid


def collect_invalid_characters(sequence: str, sequence_type: SequenceType) -> List[str]:
    """Distinct characters outside the alphabet, in first-seen order."""
    alphabet = alphabet_for(sequence_type)
    invalid: dict[str, None] = {}
    for char in sequence:
        if char not in alphabet:
            invalid.setdefault(char, None)
    return list(invalid)


def validate_sequence(
    sequence: str, name: str, sequence_type: SequenceType = SequenceType.PROTEIN
) -> ValidationResult:
    """Check a sequence and describe the first problem found; never raises."""
    normalized = normalize_sequence(sequence, sequence_type)
    if not normalized:
        return ValidationResult(
            is_valid=False,
            message=f"{name} sequence is empty.",
            error=ErrorKind.EMPTY_SEQUENCE,
        )

    if len(normalized) > MAX_SEQUENCE_LENGTH:
        return ValidationResult(
            is_valid=False,
            message=(
                f"{name} sequence is too long "
                f"({len(normalized)} > {MAX_SEQUENCE_LENGTH})."
            ),
            error=ErrorKind.SEQUENCE_TOO_LONG,
        )

    invalid = collect_invalid_characters(normalized, sequence_type)
    if invalid:
        return ValidationResult(
            is_valid=False,
            message=(
                f"{name} sequence contains invalid characters ({', '.join(invalid)}). "
                f"{_ALLOWED_HINT[sequence_type]}"
            ),
            error=ErrorKind.INVALID_CHARACTERS,
            invalid_characters=tuple(invalid),
        )

    return ValidationResult(is_valid=True)
