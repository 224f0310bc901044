"""Nucleotide to protein translation with the standard genetic code."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping

from Bio.Data import CodonTable

from .errors import InvalidFrameError
from .utils_seq import GAP, SequenceType, normalize_sequence

VALID_FRAMES = (0, 1, 2)
UNKNOWN_RESIDUE = "X"
STOP_RESIDUE = "*"

_CANONICAL_BASES = frozenset("ACGTN")


def _build_codon_table() -> Mapping[str, str]:
    standard = CodonTable.unambiguous_dna_by_id[1]
    table: Dict[str, str] = dict(standard.forward_table)
    for codon in standard.stop_codons:
        table[codon] = STOP_RESIDUE
    return MappingProxyType(table)


CODON_TABLE = _build_codon_table()


def _prepare(sequence: str) -> str:
    normalized = normalize_sequence(sequence, SequenceType.NUCLEOTIDE).replace(GAP, "")
    return "".join(base if base in _CANONICAL_BASES else "N" for base in normalized)


def translate_nucleotide_sequence(sequence: str, frame: int = 0) -> str:
    """Translate non-overlapping codons starting at ``frame``.

    Gaps are removed first and ambiguity codes other than N collapse to N.
    Trailing bases that do not fill a codon are ignored; codons missing from
    the table, such as ``NNN``, become ``X``.
    """
    if not isinstance(frame, int) or isinstance(frame, bool) or frame not in VALID_FRAMES:
        raise InvalidFrameError(frame)
    bases = _prepare(sequence)
    residues = []
    for idx in range(frame, len(bases) - 2, 3):
        residues.append(CODON_TABLE.get(bases[idx : idx + 3], UNKNOWN_RESIDUE))
    return "".join(residues)


def translate_frames(sequence: str) -> Dict[int, str]:
    return {frame: translate_nucleotide_sequence(sequence, frame) for frame in VALID_FRAMES}
