"""
Tests for mutation frequency aggregation and the PyMOL macro.
"""

import pytest

from seqcompare.comparison import compare_variants
from seqcompare.mutations import aggregate_mutations, build_pymol_script
from seqcompare.utils_seq import SequenceEntry, SequenceType

REFERENCE = SequenceEntry("ref", "MKVL")


def _variants():
    return compare_variants(
        REFERENCE,
        [SequenceEntry("v1", "MKIL"), SequenceEntry("v2", "MRIA"), SequenceEntry("v3", "MK")],
        SequenceType.PROTEIN,
    )


class TestAggregateMutations:
    """Tests for aggregate_mutations."""

    def test_counts_and_frequencies(self):
        """Positions are sorted with counts, residues and frequencies."""
        mutations = aggregate_mutations(REFERENCE, _variants())
        assert [item.position for item in mutations] == [2, 3, 4]

        pos2, pos3, pos4 = mutations
        assert pos2.count == 1
        assert pos2.variant_residues == ("R",)
        assert pos2.reference_residue == "K"
        assert pos2.frequency == pytest.approx(1 / 3)

        assert pos3.count == 3
        assert pos3.variant_residues == ("I",)
        assert pos3.frequency == pytest.approx(1.0)

        assert pos4.count == 2
        assert pos4.variant_residues == ("A",)
        assert pos4.reference_residue == "L"

    def test_gap_only_position(self):
        """A position mutated only to gaps lists no residues."""
        variants = compare_variants(REFERENCE, [SequenceEntry("v", "MKV")], SequenceType.PROTEIN)
        (item,) = aggregate_mutations(REFERENCE, variants)
        assert item.variant_residues == ()
        assert item.as_row()["variant_residues"] == "-"

    def test_no_reference_or_variants(self):
        """Nothing to aggregate without a reference or variants."""
        assert aggregate_mutations(None, _variants()) == []
        assert aggregate_mutations(REFERENCE, ()) == []


class TestPymolScript:
    """Tests for build_pymol_script."""

    def test_script_lines(self):
        """The macro sets b-factors and selects the mutated residues."""
        script = build_pymol_script(aggregate_mutations(REFERENCE, _variants()))
        lines = script.splitlines()
        assert lines[1] == "alter all, b=0"
        assert "alter (resi 2), b=0.33" in lines
        assert "alter (resi 3), b=1.00" in lines
        assert lines[-1] == "select mutation_sites, resi 2+3+4"

    def test_no_mutations(self):
        """An empty input produces a comment only."""
        assert build_pymol_script([]) == "# No mutation sites detected across samples"
