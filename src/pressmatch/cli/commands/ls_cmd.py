# ABOUTME: The `pressmatch ls` command for listing verified releases.
# ABOUTME: Displays a Rich table of every release saved to the catalog.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from pressmatch.cli.options import db_option
from pressmatch.db.catalog import catalog_at


@click.command("ls")
@db_option
def ls(db_path: Path | None) -> None:
    """List all verified releases in the catalog."""
    console = Console()
    with catalog_at(db_path) as catalog:
        records = catalog.list_all()

    if not records:
        console.print("[yellow]No releases in the catalog.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim", width=4)
    table.add_column("Artist")
    table.add_column("Title", style="bold")
    table.add_column("Cat#")
    table.add_column("Year", justify="right")
    table.add_column("Release", style="dim")
    table.add_column("Matrix")

    for record in records:
        release = record.candidate
        table.add_row(
            str(record.id),
            release.artist or "[dim]unknown[/dim]",
            release.title or "?",
            release.catalog_number or "",
            str(release.year) if release.year else "",
            str(release.release_id),
            record.matrix or "",
        )

    console.print(table)
    console.print(f"\n[dim]{len(records)} release(s)[/dim]")
