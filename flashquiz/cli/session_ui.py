"""
The interactive command loop: reads actions from the user, applies them to a
CardStore and a QuizEngine, and mirrors all console traffic into a Transcript.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, Optional

from rich.console import Console

from flashquiz.card_store import CardStore
from flashquiz.exceptions import (
    CardFileError,
    CardNotFoundError,
    DuplicateDefinitionError,
    DuplicateTermError,
    TranscriptWriteError,
)
from flashquiz.models import RoundOutcome, Verdict
from flashquiz.quiz import QuizEngine
from flashquiz.transcript import Transcript

logger = logging.getLogger(__name__)

ACTION_PROMPT = (
    "Input the action (add, remove, import, export, ask, exit, log, "
    "hardest card, reset stats):"
)


class SessionConsole:
    """
    A rich Console wrapper that records every printed and read line.

    Markup, emoji and highlighting are disabled because user text (terms,
    definitions, file names) is printed verbatim.
    """

    def __init__(
        self,
        transcript: Optional[Transcript] = None,
        console: Optional[Console] = None,
    ):
        self.transcript = transcript if transcript is not None else Transcript()
        self.console = console or Console(
            markup=False, emoji=False, highlight=False, soft_wrap=True
        )

    def say(self, text: str = "", style: Optional[str] = None) -> None:
        self.console.print(text, style=style)
        self.transcript.append(text)

    def read(self) -> str:
        """
        Read one line of user input and record it.

        Raises:
            EOFError: When input is exhausted.
        """
        line = self.console.input()
        self.transcript.append(line)
        return line


def describe_outcome(outcome: RoundOutcome) -> str:
    """Build the message shown after an answer is scored."""
    if outcome.verdict is Verdict.Correct:
        return "Correct!"
    if outcome.verdict is Verdict.WrongButMatchesOtherTerm:
        return (
            f'Wrong. The right answer is "{outcome.correct_definition}", '
            f'but your definition is correct for "{outcome.matched_term}".'
        )
    return f'Wrong. The right answer is "{outcome.correct_definition}".'


def _parse_round_count(raw: str) -> Optional[int]:
    try:
        count = int(raw.strip())
    except ValueError:
        return None
    return count if count > 0 else None


class FlashcardSession:
    """
    Runs one interactive session over a card store.

    Args:
        io: Console wrapper used for all prompts and messages.
        store: The cards managed in this session.
        engine: Quiz engine used by the `ask` action.
        export_path: When set, the store is saved there on `exit`.
    """

    def __init__(
        self,
        io: SessionConsole,
        store: Optional[CardStore] = None,
        engine: Optional[QuizEngine] = None,
        export_path: Optional[Path] = None,
    ):
        self.io = io
        self.store = store if store is not None else CardStore()
        self.engine = engine or QuizEngine()
        self.export_path = export_path
        self._actions: Dict[str, Callable[[], None]] = {
            "add": self.add_card,
            "remove": self.remove_card,
            "import": self.import_cards,
            "export": self.export_cards,
            "ask": self.ask,
            "log": self.save_log,
            "hardest card": self.show_hardest_cards,
            "reset stats": self.reset_stats,
        }

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    def load_initial_cards(self, path: Path) -> None:
        """Import `path` before the loop starts, followed by a blank line."""
        self._import_from(path)
        self.io.say()

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    def run(self) -> None:
        """
        Prompt for actions until `exit` or end of input.
        """
        logger.info("Session started")
        while True:
            self.io.say(ACTION_PROMPT)
            try:
                action = self.io.read().strip().lower()
                if action == "exit":
                    break
                handler = self._actions.get(action)
                if handler is None:
                    logger.debug(f"Ignoring unknown action {action!r}")
                else:
                    handler()
            except EOFError:
                logger.info("Input closed, ending session")
                break
            self.io.say()
        self.finish()

    def finish(self) -> None:
        """Say goodbye and save the cards when an export path was given."""
        self.io.say("Bye bye!")
        if self.export_path is not None:
            self._export_to(self.export_path)
        logger.info("Session finished")

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def add_card(self) -> None:
        self.io.say("The Card:")
        term = self.io.read()
        if term in self.store:
            self.io.say(str(DuplicateTermError(term)), style="red")
            return

        self.io.say("The definition of the card:")
        definition = self.io.read()
        try:
            self.store.add(term, definition)
        except (DuplicateTermError, DuplicateDefinitionError) as e:
            self.io.say(str(e), style="red")
            return
        self.io.say(
            f'The pair ("{term}":"{definition}") has been added.',
            style="green",
        )

    def remove_card(self) -> None:
        self.io.say("Which card?")
        term = self.io.read()
        try:
            self.store.remove(term)
        except CardNotFoundError:
            self.io.say(
                f'Can\'t remove "{term}": there is no such card.', style="red"
            )
            return
        self.io.say("The card has been removed.", style="green")

    def import_cards(self) -> None:
        self.io.say("File name:")
        self._import_from(Path(self.io.read()))

    def export_cards(self) -> None:
        self.io.say("File name:")
        self._export_to(Path(self.io.read()))

    def ask(self) -> None:
        self.io.say("How many times to ask?")
        round_count = _parse_round_count(self.io.read())
        if round_count is None:
            self.io.say("Please enter a positive whole number.", style="red")
            return
        if not len(self.store):
            self.io.say("There are no cards to ask about.", style="yellow")
            return

        for outcome in self.engine.iter_rounds(
            self.store, round_count, self._read_answer
        ):
            self.io.say(
                describe_outcome(outcome),
                style="green" if outcome.is_correct else "red",
            )

    def save_log(self) -> None:
        self.io.say("File name:")
        path = Path(self.io.read())
        try:
            self.io.transcript.flush(path)
        except TranscriptWriteError as e:
            self.io.say(f'Cannot save the log to "{path}": {e}', style="red")
            return
        self.io.say("The log has been saved.")

    def show_hardest_cards(self) -> None:
        hardest = self.store.hardest_cards()
        if not hardest:
            self.io.say("There are no cards with errors.")
        elif len(hardest) == 1:
            card = hardest[0]
            self.io.say(
                f'The hardest card is "{card.term}". '
                f"You have {card.mistakes} errors answering it."
            )
        else:
            terms = ", ".join(f'"{card.term}"' for card in hardest)
            self.io.say(
                f"The hardest cards are {terms}. "
                f"You have {hardest[0].mistakes} errors answering them."
            )

    def reset_stats(self) -> None:
        self.store.reset_stats()
        self.io.say("Card statistics have been reset.")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _read_answer(self, term: str) -> str:
        self.io.say(f'Print the definition of "{term}":')
        return self.io.read()

    def _import_from(self, path: Path) -> None:
        try:
            count = self.store.import_from(path)
        except CardFileError as e:
            self.io.say(f'Cannot import "{path}": {e}', style="red")
            return
        if count:
            self.io.say(f"{count} cards have been loaded.")
        else:
            self.io.say("File not found.", style="yellow")

    def _export_to(self, path: Path) -> None:
        try:
            count = self.store.export_to(path)
        except CardFileError as e:
            self.io.say(f'Cannot export to "{path}": {e}', style="red")
            return
        self.io.say(f"{count} cards have been saved.")
