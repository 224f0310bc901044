"""Length-equalizing multi-sequence alignment and column consensus."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Sequence

from .utils_seq import GAP, SequenceEntry, SequenceType, normalize_sequence

if TYPE_CHECKING:  # pragma: no cover
    from .pipeline import ComparisonResult


def multi_sequence_alignment(
    entries: Sequence[SequenceEntry],
    sequence_type: SequenceType = SequenceType.PROTEIN,
) -> List[SequenceEntry]:
    """Right-pad every normalized sequence with gaps to the longest length.

    No interior gaps are introduced; columns line up by position only.
    """
    if not entries:
        return []
    normalized = [
        SequenceEntry(entry.header, normalize_sequence(entry.sequence, sequence_type))
        for entry in entries
    ]
    max_len = max(len(entry.sequence) for entry in normalized)
    return [
        SequenceEntry(entry.header, entry.sequence.ljust(max_len, GAP))
        for entry in normalized
    ]


def _column_counts(aligned: Sequence[SequenceEntry]) -> List[dict[str, int]]:
    if not aligned:
        return []
    width = len(aligned[0].sequence)
    counts: List[dict[str, int]] = [{} for _ in range(width)]
    for entry in aligned:
        for idx, char in enumerate(entry.sequence[:width]):
            slot = counts[idx]
            slot[char] = slot.get(char, 0) + 1
    return counts


def _counts_to_sequence(counts: List[dict[str, int]]) -> tuple[str, List[float]]:
    # max() keeps the first of equal counts, i.e. the first character seen in the column.
    sequence_chars: List[str] = []
    support: List[float] = []
    for slot in counts:
        if not slot:
            sequence_chars.append(GAP)
            support.append(0.0)
            continue
        total = sum(slot.values())
        char, count = max(slot.items(), key=lambda item: item[1])
        sequence_chars.append(char)
        support.append(round(count / total, 5))
    return "".join(sequence_chars), support


def consensus_sequence(aligned: Sequence[SequenceEntry]) -> str:
    """Most frequent character per column; ties go to the first one counted."""
    consensus, _ = _counts_to_sequence(_column_counts(aligned))
    return consensus


def column_support(aligned: Sequence[SequenceEntry]) -> List[float]:
    """Fraction of rows agreeing with the consensus character, per column."""
    _, support = _counts_to_sequence(_column_counts(aligned))
    return support


def alignment_rows(result: "ComparisonResult") -> List[SequenceEntry]:
    """Rows for a column-aligned view of a comparison result.

    Reference mode puts the padded reference first; multi-alignment mode
    leads with a ``Consensus`` row.
    """
    if result.no_reference_mode:
        aligned = list(result.multi_alignment or ())
        if not aligned:
            return []
        return [SequenceEntry("Consensus", consensus_sequence(aligned)), *aligned]

    entries: List[SequenceEntry] = []
    if result.reference is not None:
        entries.append(result.reference)
    entries.extend(
        SequenceEntry(variant.header, variant.sequence) for variant in result.variants
    )
    return multi_sequence_alignment(entries, result.sequence_type)
