"""
Tests for nucleotide composition and substitution classification.
"""

import pytest

from seqcompare.featurizer import (
    AMBIGUOUS,
    GAP_DIFFERENCE,
    TRANSITION,
    TRANSVERSION,
    calculate_nucleotide_sequence_stats,
    classify_difference,
    summarize_nucleotide_alignment,
)
from seqcompare.utils_seq import SequenceEntry


class TestSequenceStats:
    """Tests for calculate_nucleotide_sequence_stats."""

    def test_base_counts(self):
        """A/C/G/T/N are tallied; everything else goes to others."""
        stats = calculate_nucleotide_sequence_stats("acgtnRu-", "s1")
        assert stats.header == "s1"
        assert stats.length == 8
        assert dict(stats.base_counts) == {"A": 1, "C": 1, "G": 1, "T": 2, "N": 1, "others": 2}
        assert stats.n_count == 1
        with pytest.raises(TypeError):
            stats.base_counts["A"] = 5
        assert stats.gc_content == pytest.approx(25.0)
        assert stats.at_content == pytest.approx(37.5)

    @pytest.mark.parametrize("sequence", ["ACGTNRYKM-", "GGGG", "ATATNNN", "SWACGT"])
    def test_composition_adds_up(self, sequence):
        """GC + AT + N/others percentages sum to 100."""
        stats = calculate_nucleotide_sequence_stats(sequence, "s")
        rest = (stats.n_count + stats.base_counts["others"]) / stats.length * 100
        assert stats.gc_content + stats.at_content + rest == pytest.approx(100)

    def test_gc_skew(self):
        """Skew is (G - C) / (G + C)."""
        assert calculate_nucleotide_sequence_stats("GGGC", "s").gc_skew == pytest.approx(0.5)
        assert calculate_nucleotide_sequence_stats("CC", "s").gc_skew == pytest.approx(-1.0)

    def test_gc_skew_without_gc(self):
        """No G or C gives a skew of zero."""
        assert calculate_nucleotide_sequence_stats("ATAT", "s").gc_skew == 0

    def test_empty_sequence(self):
        """Empty input yields zero percentages."""
        stats = calculate_nucleotide_sequence_stats("", "s")
        assert stats.length == 0
        assert stats.gc_content == 0
        assert stats.at_content == 0


class TestClassifyDifference:
    """Tests for classify_difference."""

    def test_transitions(self):
        """Purine-purine and pyrimidine-pyrimidine swaps are transitions."""
        assert classify_difference("A", "G") == TRANSITION
        assert classify_difference("C", "T") == TRANSITION

    def test_transversions(self):
        """Purine-pyrimidine swaps are transversions."""
        assert classify_difference("A", "C") == TRANSVERSION
        assert classify_difference("T", "G") == TRANSVERSION

    def test_gaps_take_precedence(self):
        """A gap on either side is a gap, even against an ambiguity code."""
        assert classify_difference("-", "A") == GAP_DIFFERENCE
        assert classify_difference("N", "-") == GAP_DIFFERENCE

    def test_ambiguous(self):
        """Non-canonical bases are ambiguous."""
        assert classify_difference("A", "N") == AMBIGUOUS
        assert classify_difference("R", "Y") == AMBIGUOUS


class TestSummarizeNucleotideAlignment:
    """Tests for summarize_nucleotide_alignment."""

    def test_classification_counts(self):
        """Mismatches are bucketed and matches skipped."""
        reference = SequenceEntry("ref", "ACGTAC")
        variant = SequenceEntry("var", "GCATNC")
        summary = summarize_nucleotide_alignment(reference, [variant])
        comparison = summary.comparisons[0]
        assert comparison.variant_header == "var"
        assert comparison.transitions == 2
        assert comparison.transversions == 0
        assert comparison.ambiguous == 1
        assert comparison.gaps == 0
        assert comparison.difference_count == 3
        assert comparison.transition_transversion_ratio is None

    def test_gap_padding_and_ratio(self):
        """Length differences count as gaps; ratio uses transitions / transversions."""
        reference = SequenceEntry("ref", "ACGT")
        variant = SequenceEntry("var", "CCGTA")
        comparison = summarize_nucleotide_alignment(reference, [variant]).comparisons[0]
        assert comparison.transversions == 1
        assert comparison.gaps == 1
        assert comparison.transition_transversion_ratio == 0.0
        assert comparison.identity == pytest.approx(60.0)
        assert comparison.gc_delta == pytest.approx(10.0)

    def test_ratio_with_both_classes(self):
        """Two transitions against one transversion gives a ratio of 2."""
        comparison = summarize_nucleotide_alignment(
            SequenceEntry("ref", "AAC"), [SequenceEntry("var", "GGA")]
        ).comparisons[0]
        assert comparison.transition_transversion_ratio == pytest.approx(2.0)

    def test_sequence_stats_order(self):
        """Stats list the reference first, then each variant."""
        summary = summarize_nucleotide_alignment(
            SequenceEntry("ref", "ACGT"),
            [SequenceEntry("v1", "ACGT"), SequenceEntry("v2", "AGGT")],
        )
        assert [stats.header for stats in summary.sequences] == ["ref", "v1", "v2"]
        assert len(summary.comparisons) == 2

    def test_without_reference(self):
        """No reference means per-sequence stats only."""
        summary = summarize_nucleotide_alignment(
            None, [SequenceEntry("a", "ACGT"), SequenceEntry("b", "GGCC")]
        )
        assert [stats.header for stats in summary.sequences] == ["a", "b"]
        assert summary.comparisons == ()
