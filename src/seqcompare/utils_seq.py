"""Sequence normalization, FASTA parsing and small payload helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Sequence, Tuple

GAP = "-"

PROTEIN_ALPHABET = frozenset("ACDEFGHIKLMNPQRSTVWYBXZ*-")
NUCLEOTIDE_ALPHABET = frozenset("ACGTRYSWKMBDHVN-")

_NUCLEOTIDE_LIKE = frozenset("ACGTUN")
_LINE_BREAK = re.compile(r"\r?\n")


class SequenceType(str, Enum):
    PROTEIN = "protein"
    NUCLEOTIDE = "nucleotide"


@dataclass(frozen=True, slots=True)
class SequenceEntry:
    header: str
    sequence: str


def alphabet_for(sequence_type: SequenceType) -> frozenset[str]:
    if sequence_type is SequenceType.PROTEIN:
        return PROTEIN_ALPHABET
    return NUCLEOTIDE_ALPHABET


def normalize_sequence(text: str | None, sequence_type: SequenceType) -> str:
    """Drop whitespace, uppercase, and map U to T for nucleotides."""
    if not text:
        return ""
    normalized = "".join(text.split()).upper()
    if sequence_type is SequenceType.NUCLEOTIDE:
        normalized = normalized.replace("U", "T")
    return normalized


def parse_fasta_entries(
    text: str | None, sequence_type: SequenceType = SequenceType.PROTEIN
) -> List[SequenceEntry]:
    """Split FASTA text into entries; text without any header is one raw sequence.

    Headers without any sequence lines are dropped. Blank headers are
    replaced by ``Sequence <n>`` using the 1-based position of the entry.
    """
    if not text:
        return []

    entries: List[SequenceEntry] = []
    header: str | None = None
    seq_lines: list[str] = []

    def commit() -> None:
        if not seq_lines:
            return
        sequence = normalize_sequence("".join(seq_lines), sequence_type)
        seq_lines.clear()
        if not sequence:
            return
        name = header or f"Sequence {len(entries) + 1}"
        entries.append(SequenceEntry(header=name, sequence=sequence))

    # Only \n and \r\n end a line; other separators stay inside header text.
    for line in _LINE_BREAK.split(text):
        if line.startswith(">"):
            commit()
            header = line[1:].strip()
        elif line.strip():
            seq_lines.append(line.strip())
    commit()

    return entries


def load_fasta_entries(
    path: Path, sequence_type: SequenceType = SequenceType.PROTEIN
) -> List[SequenceEntry]:
    """Read a FASTA file from disk and parse it."""
    if not path.exists():
        raise FileNotFoundError(f"FASTA file not found: {path}")
    return parse_fasta_entries(path.read_text(encoding="utf-8"), sequence_type)


def infer_sequence_type(sequence: str) -> SequenceType:
    """Guess the sequence type: nucleotide when over 90% of characters look like bases."""
    cleaned = "".join(sequence.split()).upper().replace(GAP, "")
    if not cleaned:
        return SequenceType.PROTEIN
    base_count = sum(1 for char in cleaned if char in _NUCLEOTIDE_LIKE)
    if base_count / len(cleaned) > 0.9:
        return SequenceType.NUCLEOTIDE
    return SequenceType.PROTEIN


def split_reference(
    entries: Sequence[SequenceEntry], reference_index: int = 0
) -> Tuple[SequenceEntry, List[SequenceEntry]]:
    """Pick the reference entry and return it with the remaining entries."""
    if not 0 <= reference_index < len(entries):
        raise IndexError(f"Reference index {reference_index} out of range")
    others = [entry for idx, entry in enumerate(entries) if idx != reference_index]
    return entries[reference_index], others


def fasta_payload(entry: SequenceEntry) -> str:
    return f">{entry.header}\n{entry.sequence}\n"


def suggested_filename(entry: SequenceEntry) -> str:
    stem = (entry.header or "sequence").replace("/", "_").replace("\\", "_")
    return f"{stem}.fasta"
