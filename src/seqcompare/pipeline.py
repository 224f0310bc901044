"""Orchestration of one analysis run: parse, validate, compare or align, summarize."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .comparison import VariantComparison, compare_variants
from .consensus import multi_sequence_alignment
from .errors import (
    InsufficientSequencesError,
    InvalidReferenceError,
    NoSequencesProvidedError,
    SequenceValidationError,
)
from .featurizer import NucleotideSummary, summarize_nucleotide_alignment
from .protein import (
    ProteinProperties,
    SecondaryStructure,
    calculate_protein_properties,
    predict_secondary_structure,
)
from .utils_seq import GAP, SequenceEntry, SequenceType, parse_fasta_entries, split_reference
from .validation import validate_sequence

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AnalysisConfig:
    sequence_type: SequenceType = SequenceType.PROTEIN
    no_reference_mode: bool = False
    reference_index: int = 0


@dataclass(frozen=True, slots=True)
class ComparisonResult:
    """Outcome of a run; reference mode fills ``variants``, otherwise ``multi_alignment``."""

    reference: SequenceEntry | None
    variants: Tuple[VariantComparison, ...]
    multi_alignment: Tuple[SequenceEntry, ...] | None
    no_reference_mode: bool
    sequence_type: SequenceType
    nucleotide_summary: NucleotideSummary | None = None

    def is_stale_for(self, sequence_type: SequenceType) -> bool:
        """A result computed under another sequence type no longer applies."""
        return self.sequence_type is not sequence_type

    def entries(self) -> List[SequenceEntry]:
        if self.no_reference_mode:
            return list(self.multi_alignment or ())
        entries = [self.reference] if self.reference is not None else []
        entries.extend(SequenceEntry(v.header, v.sequence) for v in self.variants)
        return entries


def collect_entries(
    reference_text: str, variant_text: str, sequence_type: SequenceType
) -> List[SequenceEntry]:
    return [
        *parse_fasta_entries(reference_text, sequence_type),
        *parse_fasta_entries(variant_text, sequence_type),
    ]


def _ensure_valid(sequence: str, name: str, sequence_type: SequenceType) -> None:
    result = validate_sequence(sequence, name, sequence_type)
    if not result.is_valid:
        LOGGER.debug("Validation failed: %s", result.message)
        raise SequenceValidationError(result)


def _run_multi_alignment(
    entries: Sequence[SequenceEntry], sequence_type: SequenceType
) -> ComparisonResult:
    if len(entries) < 2:
        raise InsufficientSequencesError(
            "Please provide at least 2 sequences for alignment."
        )
    for entry in entries:
        _ensure_valid(entry.sequence, entry.header, sequence_type)

    aligned = multi_sequence_alignment(entries, sequence_type)
    summary = None
    if sequence_type is SequenceType.NUCLEOTIDE:
        summary = summarize_nucleotide_alignment(
            None,
            [SequenceEntry(entry.header, entry.sequence.replace(GAP, "")) for entry in aligned],
        )
    LOGGER.info("Aligned %s sequences", len(aligned))
    return ComparisonResult(
        reference=None,
        variants=(),
        multi_alignment=tuple(aligned),
        no_reference_mode=True,
        sequence_type=sequence_type,
        nucleotide_summary=summary,
    )


def _run_reference_comparison(
    entries: Sequence[SequenceEntry], config: AnalysisConfig
) -> ComparisonResult:
    sequence_type = config.sequence_type
    if not entries:
        raise NoSequencesProvidedError("Please provide sequences.")
    try:
        reference, others = split_reference(entries, config.reference_index)
    except IndexError as exc:
        raise InvalidReferenceError(
            f"Invalid reference selection: {config.reference_index} "
            f"(have {len(entries)} sequences)."
        ) from exc

    _ensure_valid(reference.sequence, "Reference", sequence_type)
    if not others:
        raise InsufficientSequencesError(
            "Please provide at least one sequence to compare."
        )
    for entry in others:
        _ensure_valid(entry.sequence, entry.header, sequence_type)

    variants = compare_variants(reference, others, sequence_type)
    summary = None
    if sequence_type is SequenceType.NUCLEOTIDE:
        summary = summarize_nucleotide_alignment(reference, others)
    LOGGER.info("Compared %s sequence(s) against %s", len(variants), reference.header)
    return ComparisonResult(
        reference=reference,
        variants=variants,
        multi_alignment=None,
        no_reference_mode=False,
        sequence_type=sequence_type,
        nucleotide_summary=summary,
    )


def run_analysis(
    reference_text: str,
    variant_text: str = "",
    config: AnalysisConfig | None = None,
) -> ComparisonResult:
    """Run one full analysis; any validation failure aborts without a partial result."""
    config = config or AnalysisConfig()
    entries = collect_entries(reference_text, variant_text, config.sequence_type)
    LOGGER.info(
        "Parsed %s %s sequence(s)", len(entries), config.sequence_type.value
    )
    if config.no_reference_mode:
        return _run_multi_alignment(entries, config.sequence_type)
    return _run_reference_comparison(entries, config)


def protein_report(
    result: ComparisonResult,
) -> List[Tuple[SequenceEntry, ProteinProperties, SecondaryStructure]]:
    """Physicochemical estimates for every sequence of a protein run."""
    if result.sequence_type is not SequenceType.PROTEIN:
        return []
    return [
        (
            entry,
            calculate_protein_properties(entry.sequence),
            predict_secondary_structure(entry.sequence),
        )
        for entry in result.entries()
    ]
