"""Base composition and substitution-class statistics for nucleotide sequences."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, List, Mapping

from .comparison import compare_sequences, padded_pairs
from .utils_seq import GAP, SequenceEntry, SequenceType, normalize_sequence

BASE_KEYS = ("A", "C", "G", "T", "N")
PURINES = frozenset("AG")
PYRIMIDINES = frozenset("CT")

TRANSITION = "transition"
TRANSVERSION = "transversion"
GAP_DIFFERENCE = "gap"
AMBIGUOUS = "ambiguous"


@dataclass(frozen=True, slots=True)
class NucleotideSequenceStats:
    header: str
    length: int
    gc_content: float
    at_content: float
    gc_skew: float
    n_count: int
    base_counts: Mapping[str, int]


@dataclass(frozen=True, slots=True)
class NucleotideComparisonStats:
    variant_header: str
    transitions: int
    transversions: int
    gaps: int
    ambiguous: int
    difference_count: int
    transition_transversion_ratio: float | None
    identity: float
    gc_delta: float


@dataclass(frozen=True, slots=True)
class NucleotideSummary:
    sequences: tuple[NucleotideSequenceStats, ...]
    comparisons: tuple[NucleotideComparisonStats, ...]


def calculate_nucleotide_sequence_stats(sequence: str, header: str) -> NucleotideSequenceStats:
    """Tally A/C/G/T/N (everything else lands in ``others``) and derive GC metrics."""
    normalized = normalize_sequence(sequence, SequenceType.NUCLEOTIDE)
    counts = {base: 0 for base in BASE_KEYS}
    counts["others"] = 0
    for base in normalized:
        if base in BASE_KEYS:
            counts[base] += 1
        else:
            counts["others"] += 1

    length = len(normalized)
    gc = counts["G"] + counts["C"]
    at = counts["A"] + counts["T"]
    # G+C == 0 gives a skew of 0 rather than a division error.
    gc_skew = (counts["G"] - counts["C"]) / (gc or 1)

    return NucleotideSequenceStats(
        header=header,
        length=length,
        gc_content=(gc / length * 100) if length else 0.0,
        at_content=(at / length * 100) if length else 0.0,
        gc_skew=gc_skew,
        n_count=counts["N"],
        base_counts=MappingProxyType(counts),
    )


def _is_informative(base: str) -> bool:
    return base in PURINES or base in PYRIMIDINES


def classify_difference(reference: str, variant: str) -> str:
    """Classify one mismatching column; gaps win over ambiguity codes."""
    if reference == GAP or variant == GAP:
        return GAP_DIFFERENCE
    if not _is_informative(reference) or not _is_informative(variant):
        return AMBIGUOUS
    same_class = (reference in PURINES and variant in PURINES) or (
        reference in PYRIMIDINES and variant in PYRIMIDINES
    )
    return TRANSITION if same_class else TRANSVERSION


def _compare_pair(
    reference: SequenceEntry,
    variant: SequenceEntry,
    reference_stats: NucleotideSequenceStats,
    variant_stats: NucleotideSequenceStats,
) -> NucleotideComparisonStats:
    ref_seq = normalize_sequence(reference.sequence, SequenceType.NUCLEOTIDE)
    var_seq = normalize_sequence(variant.sequence, SequenceType.NUCLEOTIDE)
    tally = {TRANSITION: 0, TRANSVERSION: 0, GAP_DIFFERENCE: 0, AMBIGUOUS: 0}
    for _, ref_base, var_base in padded_pairs(ref_seq, var_seq):
        if ref_base == var_base:
            continue
        tally[classify_difference(ref_base, var_base)] += 1

    transitions = tally[TRANSITION]
    transversions = tally[TRANSVERSION]
    identity = compare_sequences(ref_seq, var_seq, SequenceType.NUCLEOTIDE).identity
    return NucleotideComparisonStats(
        variant_header=variant.header,
        transitions=transitions,
        transversions=transversions,
        gaps=tally[GAP_DIFFERENCE],
        ambiguous=tally[AMBIGUOUS],
        difference_count=sum(tally.values()),
        transition_transversion_ratio=(
            transitions / transversions if transversions else None
        ),
        identity=identity,
        gc_delta=variant_stats.gc_content - reference_stats.gc_content,
    )


def summarize_nucleotide_alignment(
    reference: SequenceEntry | None,
    variants: Iterable[SequenceEntry],
) -> NucleotideSummary:
    """Per-sequence stats plus, when a reference is given, per-variant substitution classes."""
    variants = list(variants)
    sequences: List[NucleotideSequenceStats] = []
    reference_stats = None
    if reference is not None:
        reference_stats = calculate_nucleotide_sequence_stats(
            reference.sequence, reference.header
        )
        sequences.append(reference_stats)
    variant_stats = [
        calculate_nucleotide_sequence_stats(variant.sequence, variant.header)
        for variant in variants
    ]
    sequences.extend(variant_stats)

    comparisons: List[NucleotideComparisonStats] = []
    if reference is not None and reference_stats is not None:
        for variant, stats in zip(variants, variant_stats):
            comparisons.append(_compare_pair(reference, variant, reference_stats, stats))

    return NucleotideSummary(sequences=tuple(sequences), comparisons=tuple(comparisons))
