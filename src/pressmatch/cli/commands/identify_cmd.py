# ABOUTME: The `pressmatch identify` command: find the exact release for a scanned item.
# ABOUTME: Reviews the matrix reading, searches Discogs, ranks, and saves the verified release.

import logging
from dataclasses import replace
from pathlib import Path

import click
from rich.console import Console

from pressmatch.catalog.discogs import DiscogsProvider, create_discogs_provider
from pressmatch.catalog.provider import SearchRequest
from pressmatch.cli.commands.price_cmd import price_table
from pressmatch.cli.correction import CorrectionPrompt
from pressmatch.cli.options import db_option
from pressmatch.cli.review import ReviewAction, ReviewSession
from pressmatch.core.workflow import ScanState, ScanWorkflow
from pressmatch.db.catalog import catalog_at
from pressmatch.matching.result import MatchStatus
from pressmatch.matching.signals import Signals
from pressmatch.ocr.consensus import Reading, build_consensus
from pressmatch.ocr.patterns import RunoutCodes, read_runout
from pressmatch.ocr.session import SessionOutcome, VerificationSession
from pressmatch.types import MediaType

logger = logging.getLogger(__name__)


def _create_provider() -> DiscogsProvider:
    """Create the default catalog provider (Discogs)."""
    return create_discogs_provider()


def _manual_request(signals: Signals, media_type: MediaType) -> SearchRequest | None:
    """Ask for artist and title to search by hand; None when the user stops."""
    artist = click.prompt("Artist (blank to stop)", default="", show_default=False).strip()
    title = click.prompt("Title (blank to stop)", default="", show_default=False).strip()
    if not artist and not title:
        return None
    manual_signals = replace(signals, artist=artist or None, title=title or None)
    return SearchRequest(signals=manual_signals, media_type=media_type, manual=True)


@click.command()
@click.option(
    "--matrix",
    "matrices",
    multiple=True,
    help="Matrix / runout (or inner ring) text as read. Repeat for several OCR passes.",
)
@click.option("--catno", default=None, help="Catalog number from the label or spine.")
@click.option("--barcode", default=None, help="Barcode digits.")
@click.option("--artist", default=None, help="Artist name.")
@click.option("--title", default=None, help="Release title.")
@click.option(
    "--society",
    "societies",
    multiple=True,
    help="Rights society printed on the media (repeatable), e.g. GEMA, JASRAC.",
)
@click.option("--ifpi-mastering", default=None, help="IFPI mastering SID code (CD).")
@click.option("--ifpi-mould", default=None, help="IFPI mould SID code (CD).")
@click.option(
    "--media-type",
    type=click.Choice([m.value for m in MediaType]),
    default=MediaType.VINYL.value,
    show_default=True,
    help="Kind of media being identified.",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    default=False,
    help="Auto-accept a single match without prompting.",
)
@click.option(
    "--manual",
    is_flag=True,
    default=False,
    help="Treat the given fields as a manual search.",
)
@click.option(
    "--price/--no-price",
    "show_price",
    default=False,
    help="Show marketplace prices after verifying.",
)
@db_option
def identify(
    matrices: tuple[str, ...],
    catno: str | None,
    barcode: str | None,
    artist: str | None,
    title: str | None,
    societies: tuple[str, ...],
    ifpi_mastering: str | None,
    ifpi_mould: str | None,
    media_type: str,
    quiet: bool,
    manual: bool,
    show_price: bool,
    db_path: Path | None,
) -> None:
    """Identify the exact release of a record or CD from what is printed on it."""
    console = Console()
    media = MediaType(media_type)

    signals = Signals(
        catalog_number=catno,
        barcode=barcode,
        declared_rights_societies=frozenset(s.strip().upper() for s in societies if s.strip()),
        ifpi_mastering=ifpi_mastering,
        ifpi_mould=ifpi_mould,
        artist=artist,
        title=title,
    )
    matrices = tuple(m for m in matrices if m.strip())
    if signals.is_empty and not matrices:
        console.print("[red]Nothing to search with.[/red] Give a matrix, catalog number, "
                      "barcode, or artist/title.")
        raise SystemExit(1)

    provider = _create_provider()
    workflow = ScanWorkflow(provider)

    # The matrix reaches the search through the verification session
    if matrices:
        outcome = _matrix_session(matrices, media)
        if outcome.session is None:
            console.print(f"[red]Invalid matrix:[/red] {outcome.error}")
            raise SystemExit(1)
        if not quiet:
            assembled = CorrectionPrompt(console=console).review(outcome.session)
            _show_runout_codes(console, read_runout(assembled))
        workflow.attach_session(outcome.session)

    review = ReviewSession(console=console, quiet=quiet)
    request: SearchRequest | None = SearchRequest(signals=signals, media_type=media, manual=manual)

    while request is not None:
        result = workflow.submit(request)
        if result.error is not None:
            console.print(f"[red]Search failed:[/red] {result.error.message}")
            raise SystemExit(1)

        if result.status is MatchStatus.NO_MATCH:
            review.show_notes(result)
            console.print("[yellow]No match found.[/yellow]")
        else:
            choice = review.review(result)
            if choice.action is ReviewAction.ACCEPT:
                _verify(console, workflow, choice.release_id, db_path)
                if show_price:
                    _show_price(console, workflow, provider)
                return
            if choice.action is ReviewAction.SKIP:
                console.print("[yellow]Skipped.[/yellow]")
                return
            error = workflow.reject()
            if error is not None:
                console.print(f"[red]{error.message}[/red]")
                raise SystemExit(1)
            console.print("[yellow]Match rejected.[/yellow]")

        if quiet:
            return
        request = _manual_request(signals, media)


def _matrix_session(matrices: tuple[str, ...], media_type: MediaType) -> SessionOutcome:
    """One reading is taken as-is; several are merged by per-character vote."""
    if len(matrices) == 1:
        return VerificationSession.initialize(matrices[0], media_type=media_type)
    readings = [Reading(text, source=f"pass {i}") for i, text in enumerate(matrices, start=1)]
    characters = build_consensus(readings)
    raw = "".join(c.character for c in characters)
    return VerificationSession.initialize(raw, characters, media_type=media_type)


def _show_runout_codes(console: Console, codes: RunoutCodes) -> None:
    if codes.is_empty:
        return
    for fix in codes.fixes:
        console.print(f"  [dim]Read {fix.original} as {fix.corrected} ({fix.reason})[/dim]")
    found = [
        *(f"{sid} (mastering)" for sid in codes.ifpi_mastering),
        *(f"{sid} (mould)" for sid in codes.ifpi_mould),
        *(f"{catno} (catalog number)" for catno in codes.catalog_numbers),
        *(f"{plant} (plant)" for plant in codes.plants),
    ]
    console.print(f"Runout codes: {', '.join(found)}")


def _verify(
    console: Console,
    workflow: ScanWorkflow,
    release_id: int | None,
    db_path: Path | None,
) -> None:
    if workflow.state is ScanState.MULTIPLE_CANDIDATES and release_id is not None:
        error = workflow.select(release_id)
        if error is not None:
            console.print(f"[red]{error.message}[/red]")
            raise SystemExit(1)

    with catalog_at(db_path) as catalog:
        error = workflow.save(catalog)

    if error is not None:
        console.print(f"[red]Could not save:[/red] {error.message}")
        raise SystemExit(1)

    chosen = workflow.chosen
    assert chosen is not None
    console.print(f"[green]Verified:[/green] {chosen.display_name} (release {chosen.release_id})")
    console.print(f"  [dim]{chosen.url}[/dim]")


def _show_price(console: Console, workflow: ScanWorkflow, provider: DiscogsProvider) -> None:
    outcome = workflow.price(provider)
    if outcome.summary is None:
        console.print(f"[yellow]Prices unavailable:[/yellow] {outcome.error}")
        return
    console.print(price_table(outcome.summary))
