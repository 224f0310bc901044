"""
Tests for padding alignment and consensus.
"""

from seqcompare.consensus import (
    alignment_rows,
    column_support,
    consensus_sequence,
    multi_sequence_alignment,
)
from seqcompare.pipeline import AnalysisConfig, run_analysis
from seqcompare.utils_seq import SequenceEntry, SequenceType, parse_fasta_entries


class TestMultiSequenceAlignment:
    """Tests for multi_sequence_alignment."""

    def test_pads_to_longest(self):
        """Every sequence is right-padded with gaps to the same length."""
        entries = [SequenceEntry("a", "MK"), SequenceEntry("b", "mkvl"), SequenceEntry("c", "M")]
        aligned = multi_sequence_alignment(entries, SequenceType.PROTEIN)
        assert [entry.sequence for entry in aligned] == ["MK--", "MKVL", "M---"]
        assert [entry.header for entry in aligned] == ["a", "b", "c"]

    def test_originals_are_prefixes(self):
        """Each normalized original is a prefix of its padded row."""
        entries = [SequenceEntry("a", "ACGU"), SequenceEntry("b", "AC")]
        aligned = multi_sequence_alignment(entries, SequenceType.NUCLEOTIDE)
        assert len({len(entry.sequence) for entry in aligned}) == 1
        assert aligned[0].sequence.startswith("ACGT")
        assert aligned[1].sequence.startswith("AC")

    def test_empty_input(self):
        """No entries in, no entries out."""
        assert multi_sequence_alignment([], SequenceType.PROTEIN) == []


class TestConsensus:
    """Tests for consensus derivation."""

    def test_majority_with_first_seen_tie_break(self):
        """Ties go to the character counted first."""
        entries = parse_fasta_entries(">s1\nMKV\n>s2\nMKL", SequenceType.PROTEIN)
        aligned = multi_sequence_alignment(entries, SequenceType.PROTEIN)
        assert [len(entry.sequence) for entry in aligned] == [3, 3]
        assert consensus_sequence(aligned) == "MKV"
        assert column_support(aligned) == [1.0, 1.0, 0.5]

    def test_majority_wins(self):
        """The most frequent character is chosen."""
        aligned = [SequenceEntry("a", "AC"), SequenceEntry("b", "GT"), SequenceEntry("c", "GT")]
        assert consensus_sequence(aligned) == "GT"

    def test_gap_columns_count(self):
        """Padding gaps take part in the count."""
        aligned = multi_sequence_alignment(
            [SequenceEntry("a", "MK"), SequenceEntry("b", "M"), SequenceEntry("c", "M")],
            SequenceType.PROTEIN,
        )
        assert consensus_sequence(aligned) == "M-"

    def test_empty_alignment(self):
        """An empty alignment has an empty consensus."""
        assert consensus_sequence([]) == ""


class TestAlignmentRows:
    """Tests for alignment_rows."""

    def test_multi_alignment_leads_with_consensus(self):
        """No-reference results start with a Consensus row."""
        result = run_analysis(
            ">a\nMKV\n>b\nMKL\n>c\nMRL",
            config=AnalysisConfig(SequenceType.PROTEIN, no_reference_mode=True),
        )
        rows = alignment_rows(result)
        assert rows[0] == SequenceEntry("Consensus", "MKL")
        assert [row.header for row in rows[1:]] == ["a", "b", "c"]

    def test_reference_mode_pads_reference_first(self):
        """Reference results list the padded reference first."""
        result = run_analysis(">ref\nMKVL", ">v\nMK", AnalysisConfig(SequenceType.PROTEIN))
        rows = alignment_rows(result)
        assert rows == [SequenceEntry("ref", "MKVL"), SequenceEntry("v", "MK--")]
