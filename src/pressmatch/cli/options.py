# ABOUTME: Click options shared by the pressmatch commands that touch the release catalog.
# ABOUTME: --db picks the catalog file, falling back to $PRESSMATCH_DB and then the home default.

from pathlib import Path

import click

from pressmatch.config import CATALOG_DB_ENV
from pressmatch.db.connection import DEFAULT_DB_PATH

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar=CATALOG_DB_ENV,
    show_envvar=True,
    help=f"Release catalog file [default: {DEFAULT_DB_PATH}]",
)
