# ABOUTME: Interactive review of ranked release candidates.
# ABOUTME: Displays candidates in a Rich table and prompts the user to accept, reject, or skip.

from dataclasses import dataclass
from enum import Enum

import click
from rich.console import Console
from rich.table import Table

from pressmatch.matching.candidate import Candidate
from pressmatch.matching.result import MatchResult, MatchStatus, ScoredCandidate


class ReviewAction(Enum):
    ACCEPT = "accept"
    REJECT = "reject"
    SKIP = "skip"


@dataclass(frozen=True)
class ReviewChoice:
    """What the user decided; release_id is set only for ACCEPT."""

    action: ReviewAction
    release_id: int | None = None


_SKIP = ReviewChoice(ReviewAction.SKIP)


def _presented(result: MatchResult) -> list[Candidate]:
    if result.status in (MatchStatus.SINGLE_MATCH, MatchStatus.MANUAL_MATCH):
        return [result.chosen_candidate] if result.chosen_candidate else []
    if result.status is MatchStatus.MULTIPLE_CANDIDATES:
        return list(result.suggestions)
    return []


def _scored_entry(result: MatchResult, release_id: int) -> ScoredCandidate | None:
    for entry in result.scored:
        if entry.release_id == release_id:
            return entry
    return None


class ReviewSession:
    """Interactive review for a match result.

    Shows the presented candidates with their scores and the signal hits
    behind them, then prompts the user to accept one, reject the match as
    wrong, or skip the scan.
    """

    def __init__(self, *, console: Console | None = None, quiet: bool = False) -> None:
        self._console = console or Console()
        self._quiet = quiet

    def review(self, result: MatchResult) -> ReviewChoice:
        """Present the result and return the user's decision."""
        candidates = _presented(result)
        if not candidates:
            return _SKIP

        # Quiet mode: only an unambiguous match is accepted
        if self._quiet:
            if result.status in (MatchStatus.SINGLE_MATCH, MatchStatus.MANUAL_MATCH):
                return ReviewChoice(ReviewAction.ACCEPT, candidates[0].release_id)
            return _SKIP

        self.show_notes(result)
        self._show_table(result, candidates)

        rejectable = result.status in (MatchStatus.SINGLE_MATCH, MatchStatus.MANUAL_MATCH)
        reject_part = "  [r] Wrong match" if rejectable else ""
        prompt_parts = f"[1-N] Accept  [v1-vN] View details{reject_part}  [s] Skip"

        while True:
            choice = click.prompt(prompt_parts, type=str, default="s").strip().lower()

            if choice == "s":
                return _SKIP
            if choice == "r" and reject_part:
                return ReviewChoice(ReviewAction.REJECT)

            # Detail view: v<N>
            if choice.startswith("v"):
                try:
                    idx = int(choice[1:]) - 1
                except ValueError:
                    continue
                if 0 <= idx < len(candidates):
                    accepted = self._detail_prompt(result, candidates[idx])
                    if accepted:
                        return ReviewChoice(ReviewAction.ACCEPT, candidates[idx].release_id)
                continue

            # Direct selection: <N>
            try:
                idx = int(choice) - 1
            except ValueError:
                continue
            if 0 <= idx < len(candidates):
                return ReviewChoice(ReviewAction.ACCEPT, candidates[idx].release_id)

    def show_notes(self, result: MatchResult) -> None:
        """Print rights-society exclusions and warnings for a result."""
        for reason in result.exclusions:
            self._console.print(f"  [dim]{reason}[/dim]")
        for warning in result.warnings:
            self._console.print(f"  [yellow]Warning:[/yellow] {warning.message}")

    def _show_table(self, result: MatchResult, candidates: list[Candidate]) -> None:
        title = "Match" if len(candidates) == 1 else "Candidates"
        table = Table(title=title)
        table.add_column("#", style="bold", width=3)
        table.add_column("Artist")
        table.add_column("Title")
        table.add_column("Label")
        table.add_column("Cat#")
        table.add_column("Country")
        table.add_column("Year", justify="right")
        table.add_column("Release", style="dim")
        table.add_column("Score", justify="right")
        table.add_column("Hits", style="dim")

        for i, candidate in enumerate(candidates, start=1):
            entry = _scored_entry(result, candidate.release_id)
            table.add_row(
                str(i),
                candidate.artist or "—",
                candidate.title or "—",
                candidate.label or "—",
                candidate.catalog_number or "—",
                candidate.country or "—",
                str(candidate.year) if candidate.year else "—",
                str(candidate.release_id),
                f"{entry.score:.0%}" if entry else "—",
                ", ".join(entry.hits) if entry else "",
            )

        self._console.print(table)

    def _show_detail(self, result: MatchResult, candidate: Candidate) -> None:
        detail = Table(title=candidate.display_name, show_header=False)
        detail.add_column("Field", style="bold")
        detail.add_column("Value")

        score = result.score_for(candidate.release_id)
        fields = [
            ("Release", str(candidate.release_id)),
            ("Label", candidate.label),
            ("Cat#", candidate.catalog_number),
            ("Country", candidate.country),
            ("Year", str(candidate.year) if candidate.year else None),
            ("Format", candidate.format),
            ("Matrix", "\n".join(candidate.matrix_numbers)),
            ("Barcode", ", ".join(candidate.barcodes)),
            ("SID", ", ".join(candidate.sid_codes)),
            ("Rights", ", ".join(sorted(candidate.rights_society_tags))),
            ("Score", f"{score:.0%}" if score is not None else None),
            ("URL", candidate.url),
        ]
        for label, value in fields:
            detail.add_row(label, value or "—")

        self._console.print(detail)

    def _detail_prompt(self, result: MatchResult, candidate: Candidate) -> bool:
        """Show the detail view; True when the user accepts this candidate."""
        self._show_detail(result, candidate)
        detail_choice = click.prompt("[a] Accept  [b] Back to list", type=str, default="b")
        return detail_choice.lower() == "a"
