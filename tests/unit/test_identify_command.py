# ABOUTME: Unit tests for the pressmatch identify command.
# ABOUTME: Tests option handling, quiet auto-accept, interactive review, rejection, and failures.

from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from pressmatch.catalog.discogs import DiscogsProvider
from pressmatch.cli import cli
from pressmatch.db.catalog import ReleaseCatalog
from pressmatch.db.connection import open_catalog
from pressmatch.errors import CollaboratorError
from pressmatch.matching.candidate import Candidate
from tests.fixtures.discogs_responses import (
    MARKETPLACE_STATS,
    PRICE_SUGGESTIONS,
    RELEASE_RESPONSE_GERMANY,
    RELEASE_RESPONSE_US,
    SEARCH_RESPONSE,
)
from tests.fixtures.fakes import FakeHttpClient, FakeSearch

_PROVIDER = "pressmatch.cli.commands.identify_cmd._create_provider"
_PROMPT = "pressmatch.cli.review.click.prompt"


def _provider(**overrides) -> DiscogsProvider:
    responses = {
        "/database/search": SEARCH_RESPONSE,
        "/releases/1893471": RELEASE_RESPONSE_GERMANY,
        "/releases/367084": RELEASE_RESPONSE_US,
        "/marketplace/stats/": MARKETPLACE_STATS,
        "/marketplace/price_suggestions/": PRICE_SUGGESTIONS,
    }
    responses.update(overrides)
    return DiscogsProvider(http_client=FakeHttpClient(responses))


def _saved(db: Path) -> list[int]:
    conn = open_catalog(db)
    try:
        return [r.candidate.release_id for r in ReleaseCatalog(conn).list_all()]
    finally:
        conn.close()


class TestIdentifyCommand:
    """Tests for the pressmatch identify CLI command."""

    def test_identify_help(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["identify", "--help"])
        assert result.exit_code == 0
        assert "--matrix" in result.output
        assert "--society" in result.output

    def test_nothing_to_search(self, tmp_path: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["identify", "--db", str(tmp_path / "r.db")])
        assert result.exit_code == 1
        assert "Nothing to search" in result.output

    def test_quiet_single_match_is_saved(self, tmp_path: Path) -> None:
        """The GEMA mark vetoes the US pressing, leaving one clear match."""
        db = tmp_path / "releases.db"
        with patch(_PROVIDER, return_value=_provider()):
            result = CliRunner().invoke(
                cli,
                ["identify", "--catno", "DGC-24425", "--society", "GEMA", "-q", "--db", str(db)],
            )
        assert result.exit_code == 0, result.output
        assert "Verified: Nirvana - Nevermind (release 1893471)" in result.output
        assert _saved(db) == [1893471]

    def test_quiet_ambiguous_result_is_skipped(self, tmp_path: Path) -> None:
        db = tmp_path / "releases.db"
        with patch(_PROVIDER, return_value=_provider()):
            result = CliRunner().invoke(
                cli, ["identify", "--catno", "DGC-24425", "-q", "--db", str(db)]
            )
        assert result.exit_code == 0
        assert "Skipped" in result.output
        assert _saved(db) == []

    def test_user_picks_a_suggestion(self, tmp_path: Path) -> None:
        """Suggestions are ordered by release id on a tie; '1' picks the lowest."""
        db = tmp_path / "releases.db"
        with patch(_PROVIDER, return_value=_provider()), patch(_PROMPT, return_value="1"):
            result = CliRunner().invoke(
                cli, ["identify", "--catno", "DGC-24425", "--db", str(db)]
            )
        assert result.exit_code == 0, result.output
        assert _saved(db) == [367084]

    def test_rejected_match_then_stop(self, tmp_path: Path) -> None:
        db = tmp_path / "releases.db"
        with (
            patch(_PROVIDER, return_value=_provider()),
            patch(_PROMPT, side_effect=["r", "", ""]),
        ):
            result = CliRunner().invoke(
                cli,
                ["identify", "--catno", "DGC-24425", "--society", "GEMA", "--db", str(db)],
            )
        assert result.exit_code == 0
        assert "Match rejected" in result.output
        assert _saved(db) == []

    def test_lone_suggestion_cannot_be_rejected(self, tmp_path: Path) -> None:
        """'r' is ignored for a weak lone suggestion; nothing claims a rejection."""
        db = tmp_path / "releases.db"
        search = FakeSearch([Candidate(4, title="Lone Star")])
        with patch(_PROVIDER, return_value=search), patch(_PROMPT, side_effect=["r", "s"]):
            result = CliRunner().invoke(cli, ["identify", "--title", "Lone", "--db", str(db)])
        assert result.exit_code == 0, result.output
        assert "Match rejected" not in result.output
        assert "Skipped" in result.output
        assert _saved(db) == []

    def test_rejected_match_then_manual_search(self, tmp_path: Path) -> None:
        """After 'this is wrong' a typed artist/title search can still verify."""
        db = tmp_path / "releases.db"
        with (
            patch(_PROVIDER, return_value=_provider()),
            patch(_PROMPT, side_effect=["r", "Nirvana", "Nevermind", "1"]),
        ):
            result = CliRunner().invoke(
                cli,
                ["identify", "--catno", "DGC-24425", "--society", "GEMA", "--db", str(db)],
            )
        assert result.exit_code == 0, result.output
        assert _saved(db) == [1893471]

    def test_matrix_correction_is_stored(self, tmp_path: Path) -> None:
        """A misread 'S' corrected to '5' is searched and saved with its log."""
        db = tmp_path / "releases.db"
        with (
            patch(_PROVIDER, return_value=_provider()),
            patch(_PROMPT, side_effect=["9", "5", "d", "1"]),
        ):
            result = CliRunner().invoke(
                cli,
                ["identify", "--matrix", "DGC-2442S-A1", "--society", "GEMA", "--db", str(db)],
            )
        assert result.exit_code == 0, result.output

        conn = open_catalog(db)
        record = ReleaseCatalog(conn).get_by_release_id(1893471)
        conn.close()
        assert record is not None
        assert record.matrix == "DGC-24425-A1"
        assert [(c.position, c.original, c.corrected) for c in record.corrections] == [
            (8, "S", "5")
        ]

    def test_several_matrix_readings_are_merged(self, tmp_path: Path) -> None:
        """Two of three passes read '5': the vote fixes the misread without a prompt."""
        db = tmp_path / "releases.db"
        args = [
            "identify",
            "--matrix", "DGC-24425-A1",
            "--matrix", "DGC-24425-A1",
            "--matrix", "DGC-2442S-A1",
            "--society", "GEMA",
            "-q",
            "--db", str(db),
        ]
        with patch(_PROVIDER, return_value=_provider()):
            result = CliRunner().invoke(cli, args)
        assert result.exit_code == 0, result.output

        conn = open_catalog(db)
        record = ReleaseCatalog(conn).get_by_release_id(1893471)
        conn.close()
        assert record is not None
        assert record.matrix == "DGC-24425-A1"
        assert record.corrections == []

    def test_runout_codes_shown_after_review(self, tmp_path: Path) -> None:
        with (
            patch(_PROVIDER, return_value=_provider()),
            patch(_PROMPT, side_effect=["d", "s"]),
        ):
            result = CliRunner().invoke(
                cli,
                ["identify", "--matrix", "DGC-24425-A1", "--db", str(tmp_path / "r.db")],
            )
        assert result.exit_code == 0, result.output
        assert "DGC-24425 (catalog number)" in result.output

    def test_search_failure_exits_with_error(self, tmp_path: Path) -> None:
        provider = _provider(**{"/database/search": CollaboratorError("HTTP 503")})
        with patch(_PROVIDER, return_value=provider):
            result = CliRunner().invoke(
                cli,
                ["identify", "--barcode", "0720642442517", "-q", "--db", str(tmp_path / "r.db")],
            )
        assert result.exit_code == 1
        assert "Search failed" in result.output
        assert "HTTP 503" in result.output

    def test_duplicate_save_reported(self, tmp_path: Path) -> None:
        db = tmp_path / "releases.db"
        args = ["identify", "--catno", "DGC-24425", "--society", "GEMA", "-q", "--db", str(db)]
        with patch(_PROVIDER, return_value=_provider()):
            CliRunner().invoke(cli, args)
        with patch(_PROVIDER, return_value=_provider()):
            result = CliRunner().invoke(cli, args)
        assert result.exit_code == 1
        assert "Could not save" in result.output

    def test_price_after_verify(self, tmp_path: Path) -> None:
        db = tmp_path / "releases.db"
        with patch(_PROVIDER, return_value=_provider()):
            result = CliRunner().invoke(
                cli,
                [
                    "identify",
                    "--catno",
                    "DGC-24425",
                    "--society",
                    "GEMA",
                    "-q",
                    "--price",
                    "--db",
                    str(db),
                ],
                env={"COLUMNS": "200"},
            )
        assert result.exit_code == 0, result.output
        assert "18.50" in result.output
        assert "60.00" in result.output
