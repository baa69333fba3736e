"""
Quiz rounds: pick a random card, collect an answer, score it and count the
mistake against the card when the answer is wrong.
"""

import logging
import random
from typing import Callable, Iterator, List, Optional

from .card_store import CardStore
from .exceptions import EmptyCardStoreError
from .models import Card, RoundOutcome, Verdict

logger = logging.getLogger(__name__)

AnswerSource = Callable[[str], str]
IndexPicker = Callable[[int], int]


def score_answer(store: CardStore, card: Card, answer: str) -> RoundOutcome:
    """
    Score `answer` for `card` and record a mistake on the card if it is wrong.

    A wrong answer that exactly matches another card's definition is reported
    together with that card's term.
    """
    if answer == card.definition:
        return RoundOutcome(
            term=card.term,
            answer=answer,
            verdict=Verdict.Correct,
            correct_definition=card.definition,
        )

    card.record_mistake()
    other = store.find_by_definition(answer, exclude_term=card.term)
    if other is not None:
        return RoundOutcome(
            term=card.term,
            answer=answer,
            verdict=Verdict.WrongButMatchesOtherTerm,
            correct_definition=card.definition,
            matched_term=other.term,
        )
    return RoundOutcome(
        term=card.term,
        answer=answer,
        verdict=Verdict.WrongNoMatch,
        correct_definition=card.definition,
    )


class QuizEngine:
    """
    Runs question rounds against a CardStore.

    Card selection goes through `pick_index`, which receives the store size
    and must return an index in ``range(size)``. It defaults to a uniform
    random choice; tests pass a deterministic picker.
    """

    def __init__(self, pick_index: Optional[IndexPicker] = None):
        self.pick_index: IndexPicker = pick_index or random.randrange

    def pick_card(self, store: CardStore) -> Card:
        cards = store.cards
        if not cards:
            raise EmptyCardStoreError("Cannot pick a card from an empty store.")
        index = self.pick_index(len(cards))
        if not 0 <= index < len(cards):
            raise IndexError(
                f"Picked index {index} is outside 0..{len(cards) - 1}."
            )
        return cards[index]

    def iter_rounds(
        self,
        store: CardStore,
        round_count: int,
        answer_source: AnswerSource,
    ) -> Iterator[RoundOutcome]:
        """
        Lazily run `round_count` rounds, yielding each outcome as it is scored.

        Every round samples the store as it is at that moment and asks
        `answer_source` for exactly one answer, passing the card's term.

        Raises:
            EmptyCardStoreError: If the store is empty when a round starts.
        """
        for round_number in range(1, round_count + 1):
            card = self.pick_card(store)
            answer = answer_source(card.term)
            outcome = score_answer(store, card, answer)
            logger.debug(
                f"Round {round_number}/{round_count}: '{card.term}' -> {outcome.verdict.value}"
            )
            yield outcome

    def ask(
        self,
        store: CardStore,
        round_count: int,
        answer_source: AnswerSource,
    ) -> List[RoundOutcome]:
        """Run all rounds and return their outcomes in order."""
        outcomes = list(self.iter_rounds(store, round_count, answer_source))
        wrong = sum(1 for outcome in outcomes if not outcome.is_correct)
        logger.info(
            f"Quiz finished: {len(outcomes) - wrong} correct, {wrong} wrong"
        )
        return outcomes
