# ABOUTME: Unit tests for multi-reading OCR consensus.
# ABOUTME: Tests per-position voting, confidence shares, length selection, and alternatives.

import pytest

from pressmatch.ocr.consensus import Reading, build_consensus


class TestBuildConsensus:
    """Tests for build_consensus()."""

    def test_unanimous_readings_are_certain(self) -> None:
        """Identical readings give confidence 1.0 everywhere."""
        result = build_consensus([Reading("ABC"), Reading("abc")])
        assert "".join(c.character for c in result) == "ABC"
        assert all(c.confidence == 1.0 for c in result)

    def test_majority_wins_with_share_as_confidence(self) -> None:
        """Two of three passes reading '1' give confidence 2/3."""
        result = build_consensus([Reading("A1"), Reading("A1"), Reading("A7")])
        assert result[1].character == "1"
        assert result[1].confidence == pytest.approx(0.666667)
        assert result[1].alternatives[0] == "7"

    def test_weights_can_override_majority(self) -> None:
        """A heavily weighted pass outvotes two light ones."""
        result = build_consensus(
            [Reading("A1", weight=0.5), Reading("A1", weight=0.5), Reading("A7", weight=2.0)]
        )
        assert result[1].character == "7"
        assert result[1].confidence == 0.666667

    def test_only_dominant_length_votes(self) -> None:
        """A reading that dropped a character does not shift positions."""
        result = build_consensus([Reading("AB12"), Reading("AB12"), Reading("AB1")])
        assert "".join(c.character for c in result) == "AB12"
        assert result[3].confidence == 1.0

    def test_whitespace_collapsed(self) -> None:
        result = build_consensus([Reading("DGC   24425"), Reading(" DGC 24425 ")])
        assert "".join(c.character for c in result) == "DGC 24425"

    def test_tie_broken_by_symbol(self) -> None:
        """Equal votes pick the lower symbol so the outcome is reproducible."""
        result = build_consensus([Reading("O"), Reading("0")])
        assert result[0].character == "0"
        assert result[0].confidence == 0.5
        assert result[0].alternatives[0] == "O"

    def test_builtin_alternatives_follow_voted_ones(self) -> None:
        result = build_consensus([Reading("5"), Reading("5"), Reading("$")])
        assert result[0].alternatives == ("$", "S", "6")

    def test_no_text_returns_empty(self) -> None:
        assert build_consensus([]) == []
        assert build_consensus([Reading("   ")]) == []

    def test_positions_are_contiguous(self) -> None:
        result = build_consensus([Reading("XYZ")])
        assert [c.position for c in result] == [0, 1, 2]

    def test_rejects_non_positive_weight(self) -> None:
        with pytest.raises(ValueError, match="weight"):
            Reading("A", weight=0.0)
