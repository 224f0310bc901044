"""Per-position mutation frequencies and a PyMOL macro that colors them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from .comparison import VariantComparison
from .utils_seq import GAP, SequenceEntry


@dataclass(frozen=True, slots=True)
class MutationFrequency:
    position: int
    reference_residue: str
    variant_residues: tuple[str, ...]
    count: int
    frequency: float

    def as_row(self) -> dict:
        return {
            "position": self.position,
            "reference_residue": self.reference_residue,
            "variant_residues": ", ".join(self.variant_residues) or GAP,
            "count": self.count,
            "frequency": round(self.frequency, 5),
        }


def _residue_at(sequence: str, position: int) -> str:
    return sequence[position - 1] if 0 < position <= len(sequence) else GAP


def aggregate_mutations(
    reference: SequenceEntry | None,
    variants: Sequence[VariantComparison],
) -> List[MutationFrequency]:
    """Count, per 1-based position, how many variants differ from the reference."""
    if reference is None or not variants:
        return []

    totals: dict[int, tuple[int, dict[str, None]]] = {}
    for variant in variants:
        for position in variant.residues:
            count, residues = totals.get(position, (0, {}))
            residue = _residue_at(variant.sequence, position)
            if residue != GAP:
                residues.setdefault(residue, None)
            totals[position] = (count + 1, residues)

    return [
        MutationFrequency(
            position=position,
            reference_residue=_residue_at(reference.sequence, position),
            variant_residues=tuple(residues),
            count=count,
            frequency=count / len(variants),
        )
        for position, (count, residues) in sorted(totals.items())
    ]


def build_pymol_script(mutations: Sequence[MutationFrequency]) -> str:
    if not mutations:
        return "# No mutation sites detected across samples"

    selection = "+".join(str(item.position) for item in mutations)
    lines = [
        "# Color mutation frequency with a green-to-red ramp",
        "alter all, b=0",
        *(f"alter (resi {item.position}), b={item.frequency:.2f}" for item in mutations),
        f"spectrum b, green_red, resi {selection}",
        f"show sticks, resi {selection}",
        f"select mutation_sites, resi {selection}",
    ]
    return "\n".join(lines)
