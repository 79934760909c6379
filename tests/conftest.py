# ABOUTME: Shared pytest fixtures for pressmatch tests.
# ABOUTME: Provides sample candidates, signals, and a temporary release catalog.

import sqlite3
from collections.abc import Iterator
from pathlib import Path

import pytest

from pressmatch.db.connection import open_catalog
from pressmatch.matching.candidate import Candidate


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "releases.db"


@pytest.fixture
def catalog_conn(db_path: Path) -> Iterator[sqlite3.Connection]:
    """An opened, schema-initialized catalog database."""
    conn = open_catalog(db_path)
    yield conn
    conn.close()


@pytest.fixture
def german_pressing() -> Candidate:
    """A fully identified German vinyl pressing."""
    return Candidate(
        release_id=1893471,
        title="Nevermind",
        artist="Nirvana",
        label="DGC",
        catalog_number="DGC-24425",
        country="Germany",
        year=1991,
        format="Vinyl",
        rights_society_tags=frozenset({"GEMA", "BIEM"}),
        matrix_numbers=("DGC-24425-A1", "DGC-24425-B1"),
        barcodes=("0720642442517",),
    )


@pytest.fixture
def dutch_pressing() -> Candidate:
    """The same album pressed in the Netherlands under BUMA/STEMRA."""
    return Candidate(
        release_id=2010300,
        title="Nevermind",
        artist="Nirvana",
        label="DGC",
        catalog_number="DGC-24425",
        country="Netherlands",
        year=1991,
        format="Vinyl",
        rights_society_tags=frozenset({"BUMA/STEMRA"}),
        matrix_numbers=("DGC 24425 A2",),
        barcodes=("0720642442517",),
    )


@pytest.fixture
def french_pressing() -> Candidate:
    return Candidate(
        release_id=3300001,
        title="Nevermind",
        artist="Nirvana",
        label="DGC",
        catalog_number="DGC-24425",
        country="France",
        year=1991,
        format="Vinyl",
        rights_society_tags=frozenset({"SACEM"}),
    )
