"""
Tests for the sequence validator.
"""

from seqcompare.errors import ErrorKind
from seqcompare.utils_seq import SequenceType
from seqcompare.validation import MAX_SEQUENCE_LENGTH, validate_sequence


class TestValidateSequence:
    """Tests for validate_sequence."""

    def test_valid_protein(self):
        """A standard protein sequence passes."""
        result = validate_sequence("MKVL*-BXZ", "Query", SequenceType.PROTEIN)
        assert result.is_valid
        assert result.error is None
        assert result.message == ""

    def test_empty_sequence(self):
        """Empty input fails with EMPTY_SEQUENCE."""
        result = validate_sequence("", "Reference", SequenceType.PROTEIN)
        assert not result.is_valid
        assert result.error is ErrorKind.EMPTY_SEQUENCE
        assert result.message == "Reference sequence is empty."

    def test_whitespace_only_is_empty(self):
        """Whitespace normalizes away and counts as empty."""
        result = validate_sequence("  \n ", "Reference", SequenceType.NUCLEOTIDE)
        assert result.error is ErrorKind.EMPTY_SEQUENCE

    def test_length_boundary(self):
        """Exactly the ceiling passes; one more fails."""
        assert validate_sequence("A" * MAX_SEQUENCE_LENGTH, "s", SequenceType.PROTEIN).is_valid

        result = validate_sequence("A" * (MAX_SEQUENCE_LENGTH + 1), "s", SequenceType.PROTEIN)
        assert not result.is_valid
        assert result.error is ErrorKind.SEQUENCE_TOO_LONG
        assert "10001 > 10000" in result.message

    def test_invalid_characters_deduplicated_in_order(self):
        """Offending characters are listed once each, first-seen order."""
        result = validate_sequence("MKJOJ1O", "Variant", SequenceType.PROTEIN)
        assert result.error is ErrorKind.INVALID_CHARACTERS
        assert result.invalid_characters == ("J", "O", "1")
        assert "(J, O, 1)" in result.message
        assert "Only standard amino acids" in result.message

    def test_nucleotide_alphabet(self):
        """RNA input is valid nucleotide input; protein letters are not."""
        assert validate_sequence("ACGURYN-", "s", SequenceType.NUCLEOTIDE).is_valid

        result = validate_sequence("ACGE", "s", SequenceType.NUCLEOTIDE)
        assert result.invalid_characters == ("E",)
        assert "Only standard nucleotides" in result.message

    def test_result_is_falsy_when_invalid(self):
        """ValidationResult can be used in boolean context."""
        assert not validate_sequence("", "s")
        assert validate_sequence("MK", "s")
