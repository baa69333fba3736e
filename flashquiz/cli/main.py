"""
CLI entry point for flashquiz.
"""

# Standard library imports
from pathlib import Path
from typing import Optional

# Third-party imports
import typer
from rich.console import Console

# Local application imports
from flashquiz.card_store import CardStore
from flashquiz.cli.session_ui import FlashcardSession, SessionConsole
from flashquiz.quiz import QuizEngine
from flashquiz.transcript import Transcript


console = Console()

app = typer.Typer(
    name="flashquiz",
    help="Flashquiz: create flashcards and quiz yourself on them.",
    add_completion=False,
    rich_markup_mode="markdown",
)


# Single-dash names (`-import cards.txt`) are accepted next to the double-dash
# ones.
_import_option = typer.Option(  # noqa: B008
    None,
    "--import",
    "-import",
    help="Card file to load before the session starts. "
    "Falls back to FLASHQUIZ_IMPORT env var.",
    envvar="FLASHQUIZ_IMPORT",
    dir_okay=False,
)

_export_option = typer.Option(  # noqa: B008
    None,
    "--export",
    "-export",
    help="Card file to save the cards to on exit. "
    "Falls back to FLASHQUIZ_EXPORT env var.",
    envvar="FLASHQUIZ_EXPORT",
    dir_okay=False,
)


def build_session(
    export_path: Optional[Path] = None,
    session_console: Optional[SessionConsole] = None,
) -> FlashcardSession:
    """
    Assemble a session with a fresh store, quiz engine and transcript.

    Parameters:
        export_path (Optional[Path]): File the cards are saved to on exit, if any.
        session_console (Optional[SessionConsole]): Console wrapper to use; a new one recording into a new Transcript is created when omitted.
    """
    io = session_console or SessionConsole(transcript=Transcript())
    return FlashcardSession(
        io=io,
        store=CardStore(),
        engine=QuizEngine(),
        export_path=export_path,
    )


@app.command()
def run(
    import_path: Optional[Path] = _import_option,
    export_path: Optional[Path] = _export_option,
):
    """
    Start an interactive flashcard session.

    Actions: add, remove, import, export, ask, exit, log, hardest card,
    reset stats.
    """
    session = build_session(export_path=export_path)
    if import_path is not None:
        session.load_initial_cards(import_path)
    session.run()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main():
    """
    Run the CLI application.

    If an unexpected exception occurs, print a bold red error message to the console and exit the process with status code 1.
    """
    try:
        app()
    except Exception as e:
        console.print(f"[bold red]UNEXPECTED ERROR: {e}[/bold red]")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
