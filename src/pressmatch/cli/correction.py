# ABOUTME: Interactive character-level review of an OCR'd matrix number.
# ABOUTME: Highlights uncertain characters and offers confusable alternatives as corrections.

import click
from rich.console import Console
from rich.text import Text

from pressmatch.ocr.session import VerificationSession


def _confidence_style(confidence: float) -> str:
    if confidence >= 0.9:
        return "green"
    if confidence >= 0.7:
        return "yellow"
    if confidence >= 0.5:
        return "dark_orange"
    return "bold red"


class CorrectionPrompt:
    """Walks the user through uncertain characters of a verification session.

    Characters are numbered from 1 on screen. The user enters a number to
    correct that character or 'd' when done.
    """

    def __init__(self, *, console: Console | None = None) -> None:
        self._console = console or Console()

    def render(self, session: VerificationSession) -> None:
        """Print the current string with per-character confidence colouring."""
        line = Text()
        numbers = Text()
        for entry in session.characters:
            line.append(f" {entry.character} ", style=_confidence_style(entry.confidence))
            numbers.append(f"{entry.position + 1:^3}", style="dim")
        self._console.print(line)
        self._console.print(numbers)

        uncertain = session.uncertain_count()
        if uncertain:
            self._console.print(f"[yellow]{uncertain} uncertain character(s)[/yellow]")
        else:
            self._console.print("[green]All characters confirmed.[/green]")

    def review(self, session: VerificationSession) -> str:
        """Run the correction loop and return the assembled string."""
        self._console.print(f"\n[bold]Matrix:[/bold] {session.guidance()}")

        while True:
            self.render(session)
            choice = click.prompt("[1-N] Correct character  [d] Done", type=str, default="d")
            if choice.lower() == "d":
                return session.assembled_string()

            try:
                index = int(choice) - 1
            except ValueError:
                continue
            if not 0 <= index < len(session.characters):
                self._console.print("[red]No character at that position.[/red]")
                continue

            self._correct(session, index)

    def _correct(self, session: VerificationSession, index: int) -> None:
        current = session.characters[index]
        alternatives = session.get_alternatives(current.character)
        if alternatives:
            self._console.print(f"  Alternatives: {'  '.join(alternatives)}")

        replacement = click.prompt(
            f"  Character {index + 1} ('{current.character}')",
            type=str,
            default=current.character,
        )
        # A prompt answer may carry stray whitespace; a space itself is valid.
        symbol = replacement if len(replacement) == 1 else replacement.strip()
        error = session.apply_correction(index, symbol)
        if error is not None:
            self._console.print(f"[red]{error.message}[/red]")
