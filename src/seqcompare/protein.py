"""Approximate physicochemical properties and secondary-structure estimates.

The isoelectric point, instability index and structure percentages are
coarse counting heuristics, not the textbook calculations.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from .utils_seq import GAP

WATER_MASS = 18.015
DEFAULT_PH = 7.0

# Average residue masses (Da) of the free amino acids.
MOLECULAR_WEIGHTS = MappingProxyType({
    "A": 89.09, "C": 121.15, "D": 133.10, "E": 147.13, "F": 165.19,
    "G": 75.07, "H": 155.16, "I": 131.17, "K": 146.19, "L": 131.17,
    "M": 149.21, "N": 132.12, "P": 115.13, "Q": 146.15, "R": 174.20,
    "S": 105.09, "T": 119.12, "V": 117.15, "W": 204.23, "Y": 181.19,
})

# Kyte-Doolittle hydropathy.
HYDROPATHY = MappingProxyType({
    "A": 1.8, "C": 2.5, "D": -3.5, "E": -3.5, "F": 2.8,
    "G": -0.4, "H": -3.2, "I": 4.5, "K": -3.9, "L": 3.8,
    "M": 1.9, "N": -3.5, "P": -1.6, "Q": -3.5, "R": -4.5,
    "S": -0.8, "T": -0.7, "V": 4.2, "W": -0.9, "Y": -1.3,
})

# Chou-Fasman propensities.
HELIX_PROPENSITY = MappingProxyType({
    "A": 1.42, "C": 0.70, "D": 1.01, "E": 1.51, "F": 1.13,
    "G": 0.57, "H": 1.00, "I": 1.08, "K": 1.16, "L": 1.21,
    "M": 1.45, "N": 0.67, "P": 0.57, "Q": 1.11, "R": 0.98,
    "S": 0.77, "T": 0.83, "V": 1.06, "W": 1.08, "Y": 0.69,
})

SHEET_PROPENSITY = MappingProxyType({
    "A": 0.83, "C": 1.19, "D": 0.54, "E": 0.37, "F": 1.38,
    "G": 0.75, "H": 0.87, "I": 1.60, "K": 0.74, "L": 1.30,
    "M": 1.05, "N": 0.89, "P": 0.55, "Q": 1.10, "R": 0.93,
    "S": 0.75, "T": 1.19, "V": 1.70, "W": 1.37, "Y": 1.47,
})

POSITIVE_RESIDUES = frozenset("KRH")
NEGATIVE_RESIDUES = frozenset("DE")
UNSTABLE_RESIDUES = frozenset("PG")


@dataclass(frozen=True, slots=True)
class ProteinProperties:
    molecular_weight: float
    isoelectric_point: float
    gravy: float
    instability_index: float
    net_charge: float


@dataclass(frozen=True, slots=True)
class SecondaryStructure:
    helix: float
    sheet: float
    coil: float


def _strip_gaps(sequence: str) -> str:
    return sequence.replace(GAP, "")


def calculate_isoelectric_point(sequence: str) -> float:
    positive = sum(1 for residue in sequence if residue in POSITIVE_RESIDUES)
    negative = sum(1 for residue in sequence if residue in NEGATIVE_RESIDUES)
    ratio = positive / (negative + 1)
    return 6.5 + (ratio - 1) * 2


def calculate_instability_index(sequence: str) -> float:
    if not sequence:
        return 0.0
    score = sum(10 for residue in sequence if residue in UNSTABLE_RESIDUES)
    return score / len(sequence) * 100


def calculate_net_charge(sequence: str, ph: float = DEFAULT_PH) -> float:
    """Count-based net charge.

    Histidine only contributes below pH 6.5, so at the default pH 7 it is
    never counted.
    """
    charge = 0.0
    for residue in sequence:
        if residue in ("K", "R"):
            charge += 1
        elif residue in NEGATIVE_RESIDUES:
            charge -= 1
        elif residue == "H" and ph < 6.5:
            charge += 0.5
    return charge


def calculate_protein_properties(sequence: str) -> ProteinProperties:
    clean = _strip_gaps(sequence)
    if not clean:
        return ProteinProperties(0.0, 0.0, 0.0, 0.0, 0.0)

    molecular_weight = sum(MOLECULAR_WEIGHTS.get(residue, 0.0) for residue in clean)
    molecular_weight -= (len(clean) - 1) * WATER_MASS
    gravy = sum(HYDROPATHY.get(residue, 0.0) for residue in clean) / len(clean)

    return ProteinProperties(
        molecular_weight=molecular_weight,
        isoelectric_point=calculate_isoelectric_point(clean),
        gravy=gravy,
        instability_index=calculate_instability_index(clean),
        net_charge=calculate_net_charge(clean, DEFAULT_PH),
    )


def predict_secondary_structure(sequence: str) -> SecondaryStructure:
    """Helix/sheet/coil percentages from mean single-residue propensities."""
    clean = _strip_gaps(sequence)
    if not clean:
        return SecondaryStructure(helix=0.0, sheet=0.0, coil=100.0)

    helix_avg = sum(HELIX_PROPENSITY.get(residue, 1.0) for residue in clean) / len(clean)
    sheet_avg = sum(SHEET_PROPENSITY.get(residue, 1.0) for residue in clean) / len(clean)

    helix = max(0.0, (helix_avg - 0.9) * 60)
    sheet = max(0.0, (sheet_avg - 0.9) * 50)
    coil = 100 - helix - sheet

    if coil < 0:
        total = helix + sheet
        helix, sheet = helix / total * 80, sheet / total * 80
        coil = 20.0

    return SecondaryStructure(
        helix=round(helix, 1),
        sheet=round(sheet, 1),
        coil=round(coil, 1),
    )
