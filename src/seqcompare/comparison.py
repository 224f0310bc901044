"""Position-by-position diff of a variant against a reference."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

from .utils_seq import GAP, SequenceEntry, SequenceType, normalize_sequence


@dataclass(frozen=True, slots=True)
class ComparisonData:
    differences: Tuple[str, ...]
    residues: Tuple[int, ...]
    identity: float


@dataclass(frozen=True, slots=True)
class VariantComparison:
    header: str
    sequence: str
    differences: Tuple[str, ...]
    residues: Tuple[int, ...]
    identity: float


def padded_pairs(reference: str, variant: str) -> Iterable[tuple[int, str, str]]:
    """Yield ``(index, ref_char, var_char)``, reading past either end as a gap."""
    for idx in range(max(len(reference), len(variant))):
        ref_char = reference[idx] if idx < len(reference) else GAP
        var_char = variant[idx] if idx < len(variant) else GAP
        yield idx, ref_char, var_char


def compare_sequences(
    reference: str,
    variant: str,
    sequence_type: SequenceType = SequenceType.PROTEIN,
) -> ComparisonData:
    """Ungapped positional comparison.

    Differences are reported as ``<ref><1-based position><variant>`` tokens.
    An insertion in the variant shifts every downstream column, which is
    reported as a run of differences rather than realigned.
    """
    ref = normalize_sequence(reference, sequence_type)
    var = normalize_sequence(variant, sequence_type)
    differences: list[str] = []
    residues: list[int] = []
    matches = 0

    for idx, ref_char, var_char in padded_pairs(ref, var):
        if ref_char != var_char:
            differences.append(f"{ref_char}{idx + 1}{var_char}")
            residues.append(idx + 1)
        elif ref_char != GAP:
            matches += 1

    max_len = max(len(ref), len(var))
    identity = (matches / max_len * 100) if max_len else 0.0
    return ComparisonData(
        differences=tuple(differences),
        residues=tuple(residues),
        identity=identity,
    )


def compare_variants(
    reference: SequenceEntry,
    variants: Iterable[SequenceEntry],
    sequence_type: SequenceType = SequenceType.PROTEIN,
) -> Tuple[VariantComparison, ...]:
    results = []
    for variant in variants:
        data = compare_sequences(reference.sequence, variant.sequence, sequence_type)
        results.append(
            VariantComparison(
                header=variant.header,
                sequence=variant.sequence,
                differences=data.differences,
                residues=data.residues,
                identity=data.identity,
            )
        )
    return tuple(results)
