"""
This module defines the CardStore class, the in-memory set of flashcards for a
session. It enforces term and definition uniqueness on insertion and handles
merging cards from, and saving cards to, card files.
"""

import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from .codec import read_cards, write_cards
from .exceptions import (
    CardNotFoundError,
    DuplicateDefinitionError,
    DuplicateTermError,
)
from .models import Card

logger = logging.getLogger(__name__)


class CardStore:
    """
    An insertion-ordered collection of cards keyed by term.

    Invariants:
    - No two cards share a term.
    - `add` refuses a definition that another card already has. Imports
      bypass this check so previously saved state is restored as-is.
    """

    def __init__(self) -> None:
        self._cards: Dict[str, Card] = {}

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(list(self._cards.values()))

    def __contains__(self, term: object) -> bool:
        return term in self._cards

    @property
    def cards(self) -> List[Card]:
        """A snapshot of the cards in insertion order."""
        return list(self._cards.values())

    def get(self, term: str) -> Optional[Card]:
        return self._cards.get(term)

    def find_by_definition(
        self, definition: str, exclude_term: Optional[str] = None
    ) -> Optional[Card]:
        """
        Return the first card whose definition equals `definition`.

        Parameters:
            definition (str): Exact definition to look for.
            exclude_term (Optional[str]): Term of a card to skip, typically the card being quizzed.
        """
        for card in self._cards.values():
            if card.term == exclude_term:
                continue
            if card.definition == definition:
                return card
        return None

    def add(self, term: str, definition: str) -> Card:
        """
        Insert a new card with no mistakes.

        Raises:
            DuplicateTermError: If a card with `term` exists.
            DuplicateDefinitionError: If another card already has `definition`.
        """
        if term in self._cards:
            raise DuplicateTermError(term)
        if self.find_by_definition(definition) is not None:
            raise DuplicateDefinitionError(definition)

        card = Card(term=term, definition=definition)
        self._cards[term] = card
        logger.info(f"Added card '{term}'")
        return card

    def remove(self, term: str) -> Card:
        """
        Delete the card with `term` and return it.

        Raises:
            CardNotFoundError: If no card has that term.
        """
        try:
            card = self._cards.pop(term)
        except KeyError:
            raise CardNotFoundError(term) from None
        logger.info(f"Removed card '{term}'")
        return card

    def reset_stats(self) -> None:
        """Set every card's mistake counter back to zero."""
        for card in self._cards.values():
            card.mistakes = 0
        logger.info(f"Reset mistake counters for {len(self._cards)} cards")

    def hardest_cards(self) -> List[Card]:
        """
        Return every card tied for the highest mistake count.

        The list is empty when the store is empty or no card has a mistake.
        Ties keep insertion order.
        """
        max_mistakes = max(
            (card.mistakes for card in self._cards.values()), default=0
        )
        if max_mistakes == 0:
            return []
        return [
            card
            for card in self._cards.values()
            if card.mistakes == max_mistakes
        ]

    def merge(self, card: Card) -> None:
        """
        Insert `card`, replacing any card with the same term in place.

        No definition check is made.
        """
        if card.term in self._cards:
            logger.debug(f"Overwriting card '{card.term}' from import")
        self._cards[card.term] = card

    def import_from(self, path: Union[str, Path]) -> int:
        """
        Merge the cards stored in a card file into this store.

        The whole file is decoded before any card is merged, so a malformed
        file leaves the store untouched.

        Returns:
            int: Number of records read, or 0 if the file does not exist.

        Raises:
            MalformedRecordError: If a line in the file cannot be decoded.
            CardFileReadError: If the file exists but cannot be read.
        """
        cards = read_cards(path)
        if cards is None:
            logger.warning(f"Import skipped: {path} not found")
            return 0

        for card in cards:
            self.merge(card)
        logger.info(f"Imported {len(cards)} cards from {path}")
        return len(cards)

    def export_to(self, path: Union[str, Path]) -> int:
        """
        Save every card to a card file, overwriting it.

        Returns:
            int: Number of cards in the store.

        Raises:
            CardFileWriteError: If the file cannot be written.
        """
        return write_cards(path, self._cards.values())
