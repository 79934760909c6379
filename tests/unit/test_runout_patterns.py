# ABOUTME: Unit tests for pattern-aware runout reading.
# ABOUTME: Tests IFPI mark repair, SID code extraction, catalog-number digits, and plant names.

from pressmatch.ocr.patterns import PatternFix, read_runout, repair_runout


class TestRepairRunout:
    """Tests for repair_runout()."""

    def test_ifpi_variants_repaired(self) -> None:
        """'1FP1' and a lowercase 'lFPl' both read as IFPI."""
        text, fixes = repair_runout("1FP1 L042 lFPl 0110")
        assert text == "IFPI L042 IFPI 0110"
        assert [f.original for f in fixes] == ["1FP1", "LFPL"]

    def test_correct_ifpi_left_alone(self) -> None:
        text, fixes = repair_runout("IFPI L042")
        assert text == "IFPI L042"
        assert fixes == []

    def test_letters_inside_catalog_digits(self) -> None:
        """An O between the prefix and the digits is a zero."""
        text, fixes = repair_runout("DGC O4425 A1")
        assert text == "DGC-04425 A1"
        assert fixes == [PatternFix("DGC O4425", "DGC-04425", "catalog number digits")]

    def test_plant_names_repaired(self) -> None:
        text, _ = repair_runout("made by 50N0PRE55 and PH1LIPS")
        assert "SONOPRESS" in text
        assert "PHILIPS" in text

    def test_plain_matrix_unchanged(self) -> None:
        text, fixes = repair_runout("dgc-24425-a1")
        assert text == "DGC-24425-A1"
        assert fixes == []


class TestReadRunout:
    """Tests for read_runout()."""

    def test_mastering_and_mould_codes(self) -> None:
        """L-codes are mastering SIDs; other IFPI codes are mould SIDs."""
        codes = read_runout("1FP1 L042  IFPI 0110  DGC-24425-A1")
        assert codes.ifpi_mastering == ["IFPI L042"]
        assert codes.ifpi_mould == ["IFPI 0110"]

    def test_catalog_number_found(self) -> None:
        codes = read_runout("DGC-24425-A1")
        assert codes.catalog_numbers == ["DGC-24425"]
        assert codes.ifpi_mastering == []

    def test_ifpi_code_is_not_a_catalog_number(self) -> None:
        assert read_runout("IFPI 0110").catalog_numbers == []

    def test_plants_deduplicated(self) -> None:
        codes = read_runout("PDO DE 123 PD0")
        assert codes.plants == ["PDO"]

    def test_nothing_found(self) -> None:
        codes = read_runout("A1")
        assert codes.is_empty
        assert codes.text == "A1"
