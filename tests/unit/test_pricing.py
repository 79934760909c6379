# ABOUTME: Unit tests for marketplace price summarization.
# ABOUTME: Tests lowest/median/highest over deduplicated positive prices.

from pressmatch.catalog.pricing import summarize_prices


class TestSummarizePrices:
    """Tests for summarize_prices()."""

    def test_odd_count(self) -> None:
        summary = summarize_prices([30.0, 10.0, 20.0])
        assert (summary.lowest, summary.median, summary.highest) == (10.0, 20.0, 30.0)
        assert summary.num_for_sale == 3

    def test_even_count_median_is_mean_of_middle(self) -> None:
        summary = summarize_prices([10.0, 20.0, 25.0, 60.0])
        assert summary.median == 22.5

    def test_duplicates_and_non_positive_dropped(self) -> None:
        summary = summarize_prices([0.0, -5.0, 12.0, 12.0, 18.0])
        assert summary.lowest == 12.0
        assert summary.median == 15.0

    def test_reported_count_wins(self) -> None:
        assert summarize_prices([5.0], num_for_sale=42).num_for_sale == 42

    def test_no_prices(self) -> None:
        summary = summarize_prices([])
        assert summary.lowest is None
        assert summary.median is None
        assert summary.highest is None
        assert summary.num_for_sale == 0
