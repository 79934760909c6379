# ABOUTME: The `pressmatch price` command for marketplace prices of a release.
# ABOUTME: Shows lowest, median, and highest prices and the number of copies for sale.

import click
from rich.console import Console
from rich.table import Table

from pressmatch.catalog.discogs import DiscogsProvider, create_discogs_provider
from pressmatch.catalog.provider import PriceSummary
from pressmatch.errors import CollaboratorError


def _create_provider() -> DiscogsProvider:
    """Create the default pricing source (Discogs)."""
    return create_discogs_provider()


def _money(value: float | None) -> str:
    return f"{value:.2f}" if value is not None else "—"


def price_table(summary: PriceSummary) -> Table:
    """Render a price summary as a two-column table."""
    table = Table(title="Marketplace", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Lowest", _money(summary.lowest))
    table.add_row("Median", _money(summary.median))
    table.add_row("Highest", _money(summary.highest))
    table.add_row("For sale", str(summary.num_for_sale))
    return table


@click.command("price")
@click.argument("release_id", type=int)
def price(release_id: int) -> None:
    """Show marketplace prices for a Discogs release."""
    console = Console()
    provider = _create_provider()

    try:
        summary = provider.price(release_id)
    except CollaboratorError as exc:
        console.print(f"[red]Prices unavailable:[/red] {exc}")
        raise SystemExit(1) from exc

    if summary.lowest is None and summary.median is None:
        console.print(f"[yellow]No marketplace data for release {release_id}.[/yellow]")
        return

    console.print(price_table(summary))
