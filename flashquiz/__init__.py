"""Flashquiz - A command-line flashcard manager and self-quiz tool."""

from .models import Card, RoundOutcome, Verdict
from .card_store import CardStore
from .quiz import QuizEngine, score_answer
from .transcript import Transcript
from .codec import decode_line, encode_card, read_cards, write_cards

__all__ = [
    "Card",
    "RoundOutcome",
    "Verdict",
    "CardStore",
    "QuizEngine",
    "score_answer",
    "Transcript",
    "decode_line",
    "encode_card",
    "read_cards",
    "write_cards",
]
