"""
Pydantic models for flashcards and quiz round results.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Verdict(str, Enum):
    """
    The result of scoring a single answer against a card.
    """

    Correct = "correct"
    WrongButMatchesOtherTerm = "wrong_but_matches_other_term"
    WrongNoMatch = "wrong_no_match"


class Card(BaseModel):
    """
    A term/definition pair with the number of times it was answered wrong.

    The term identifies the card inside a store. Only `mistakes` is expected
    to change after the card is created.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    term: str = Field(..., description="The prompt shown during a quiz.")
    definition: str = Field(
        ..., description="The answer expected for the term."
    )
    mistakes: int = Field(
        default=0,
        ge=0,
        description="Wrong answers given for this card since the last reset.",
    )

    def record_mistake(self) -> None:
        """Increment the mistake counter by one."""
        self.mistakes += 1


class RoundOutcome(BaseModel):
    """
    What happened in one quiz round.

    `matched_term` names the other card whose definition the answer matched
    and is only set for `Verdict.WrongButMatchesOtherTerm`.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    term: str
    answer: str
    verdict: Verdict
    correct_definition: str
    matched_term: Optional[str] = None

    @model_validator(mode="after")
    def check_matched_term(self) -> RoundOutcome:
        """Ensures matched_term is present exactly for the matching verdict."""
        expects_match = self.verdict is Verdict.WrongButMatchesOtherTerm
        if expects_match and self.matched_term is None:
            raise ValueError(
                "matched_term is required for a wrong_but_matches_other_term verdict."
            )
        if not expects_match and self.matched_term is not None:
            raise ValueError(
                f"matched_term must be empty for a {self.verdict.value} verdict."
            )
        return self

    @property
    def is_correct(self) -> bool:
        return self.verdict is Verdict.Correct
