# ABOUTME: Unit tests for the ls and price CLI commands.
# ABOUTME: Tests catalog listing output and marketplace price display.

from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from pressmatch.catalog.discogs import DiscogsProvider
from pressmatch.cli import cli
from pressmatch.db.catalog import ReleaseCatalog, catalog_at
from pressmatch.db.connection import open_catalog
from pressmatch.errors import CollaboratorError
from pressmatch.matching.candidate import Candidate
from tests.fixtures.discogs_responses import (
    MARKETPLACE_STATS,
    MARKETPLACE_STATS_EMPTY,
    PRICE_SUGGESTIONS,
)
from tests.fixtures.fakes import FakeHttpClient

_PROVIDER = "pressmatch.cli.commands.price_cmd._create_provider"


class TestLsCommand:
    """Tests for pressmatch ls."""

    def test_empty_catalog(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(cli, ["ls", "--db", str(tmp_path / "r.db")])
        assert result.exit_code == 0
        assert "No releases in the catalog" in result.output

    def test_lists_releases(self, tmp_path: Path, german_pressing: Candidate) -> None:
        db = tmp_path / "r.db"
        conn = open_catalog(db)
        ReleaseCatalog(conn).add_release(german_pressing, "DGC-24425-A1")
        conn.close()

        result = CliRunner().invoke(cli, ["ls", "--db", str(db)], env={"COLUMNS": "200"})

        assert result.exit_code == 0
        assert "Nevermind" in result.output
        assert "1893471" in result.output
        assert "DGC-24425-A1" in result.output
        assert "1 release(s)" in result.output

    def test_catalog_path_from_environment(
        self, tmp_path: Path, german_pressing: Candidate
    ) -> None:
        """Without --db the PRESSMATCH_DB variable names the catalog."""
        db = tmp_path / "env.db"
        with catalog_at(db) as catalog:
            catalog.add_release(german_pressing)

        result = CliRunner().invoke(cli, ["ls"], env={"PRESSMATCH_DB": str(db)})

        assert result.exit_code == 0
        assert "1 release(s)" in result.output


class TestPriceCommand:
    """Tests for pressmatch price."""

    def test_price_table(self) -> None:
        client = FakeHttpClient(
            {
                "/marketplace/stats/": MARKETPLACE_STATS,
                "/marketplace/price_suggestions/": PRICE_SUGGESTIONS,
            }
        )
        with patch(_PROVIDER, return_value=DiscogsProvider(http_client=client)):
            result = CliRunner().invoke(cli, ["price", "1893471"], env={"COLUMNS": "200"})
        assert result.exit_code == 0, result.output
        assert "18.50" in result.output
        assert "37.50" in result.output
        assert "42" in result.output
        assert client.urls[0].endswith("/marketplace/stats/1893471")

    def test_no_marketplace_data(self) -> None:
        client = FakeHttpClient(
            {
                "/marketplace/stats/": MARKETPLACE_STATS_EMPTY,
                "/marketplace/price_suggestions/": {},
            }
        )
        with patch(_PROVIDER, return_value=DiscogsProvider(http_client=client)):
            result = CliRunner().invoke(cli, ["price", "5"])
        assert result.exit_code == 0
        assert "No marketplace data" in result.output

    def test_pricing_failure(self) -> None:
        client = FakeHttpClient({"/marketplace/stats/": CollaboratorError("HTTP 500")})
        with patch(_PROVIDER, return_value=DiscogsProvider(http_client=client)):
            result = CliRunner().invoke(cli, ["price", "5"])
        assert result.exit_code == 1
        assert "Prices unavailable" in result.output

    def test_release_id_must_be_integer(self) -> None:
        result = CliRunner().invoke(cli, ["price", "abc"])
        assert result.exit_code != 0
