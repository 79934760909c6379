# ABOUTME: Unit tests for Discogs response parsing.
# ABOUTME: Tests search results, full releases, identifiers, and marketplace payloads.

from pressmatch.catalog.discogs_parser import (
    parse_marketplace_stats,
    parse_price_suggestions,
    parse_release,
    parse_search_results,
)
from tests.fixtures.discogs_responses import (
    MARKETPLACE_STATS,
    MARKETPLACE_STATS_EMPTY,
    PRICE_SUGGESTIONS,
    RELEASE_RESPONSE_CD,
    RELEASE_RESPONSE_GERMANY,
    SEARCH_RESPONSE,
    SEARCH_RESPONSE_EMPTY,
)


class TestParseSearchResults:
    """Tests for parse_search_results()."""

    def test_parses_results(self) -> None:
        candidates = parse_search_results(SEARCH_RESPONSE, "catno-search")
        assert [c.release_id for c in candidates] == [1893471, 367084]
        first = candidates[0]
        assert first.artist == "Nirvana"
        assert first.title == "Nevermind"
        assert first.label == "DGC"
        assert first.catalog_number == "DGC-24425"
        assert first.country == "Germany"
        assert first.year == 1991
        assert first.format == "Vinyl"
        assert first.reason_codes == ("catno-search",)
        assert "0720642442517" in first.barcodes

    def test_empty_results(self) -> None:
        assert parse_search_results(SEARCH_RESPONSE_EMPTY, "x") == []
        assert parse_search_results({}, "x") == []

    def test_result_without_id_skipped(self) -> None:
        data = {"results": [{"title": "No Id"}, {"id": 5, "title": "Untitled"}]}
        candidates = parse_search_results(data, "text-search")
        assert [c.release_id for c in candidates] == [5]
        assert candidates[0].artist is None
        assert candidates[0].title == "Untitled"

    def test_null_title_and_fields(self) -> None:
        """Discogs may send null for any field; the result is still usable."""
        data = {"results": [{"id": 7, "title": None, "label": None, "format": None}]}
        candidates = parse_search_results(data, "text-search")
        assert [c.release_id for c in candidates] == [7]
        assert candidates[0].title is None
        assert candidates[0].artist is None
        assert parse_search_results({"results": None}, "x") == []


class TestParseRelease:
    """Tests for parse_release()."""

    def test_identifiers_sorted_into_fields(self) -> None:
        release = parse_release(RELEASE_RESPONSE_GERMANY, reason_codes=("barcode-search",))
        assert release.release_id == 1893471
        assert release.artist == "Nirvana"
        assert release.matrix_numbers == ("DGC-24425-A1", "DGC-24425-B1")
        assert release.barcodes == ("0720642442517",)
        assert release.rights_society_tags == frozenset({"GEMA", "BIEM"})
        assert release.reason_codes == ("barcode-search",)
        assert release.format == "Vinyl"

    def test_cd_release(self) -> None:
        """SID codes are collected, 'none' catno and year 0 become None."""
        release = parse_release(RELEASE_RESPONSE_CD)
        assert release.sid_codes == ("IFPI L042", "IFPI 0110")
        assert release.catalog_number is None
        assert release.year is None
        assert release.matrix_numbers == ()
        assert release.rights_society_tags == frozenset({"BUMA/STEMRA"})

    def test_minimal_release(self) -> None:
        release = parse_release({"id": 9})
        assert release.release_id == 9
        assert release.artist is None
        assert release.label is None


class TestParseMarketplace:
    """Tests for marketplace parsing."""

    def test_stats(self) -> None:
        assert parse_marketplace_stats(MARKETPLACE_STATS) == (18.5, 42)

    def test_stats_without_listings(self) -> None:
        assert parse_marketplace_stats(MARKETPLACE_STATS_EMPTY) == (None, 0)

    def test_price_suggestions(self) -> None:
        assert sorted(parse_price_suggestions(PRICE_SUGGESTIONS)) == [20.0, 30.0, 45.0, 60.0]

    def test_malformed_suggestions_ignored(self) -> None:
        assert parse_price_suggestions({"Mint (M)": {"value": "n/a"}, "x": 3}) == []
