"""
Line-based persistence for card sets.

Each card is stored on its own line as ``term:definition:mistakes``. There is
no escaping, so a colon inside a term or definition cannot be represented:
such a card is written as-is and fails to decode when read back.
"""

import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .exceptions import (
    CardFileReadError,
    CardFileWriteError,
    MalformedRecordError,
)
from .models import Card

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = ":"
FIELD_COUNT = 3

_MISTAKES_PATTERN = re.compile(r"[0-9]+")


def encode_card(card: Card) -> str:
    """Render a card as a single record line (without the newline)."""
    return FIELD_SEPARATOR.join(
        (card.term, card.definition, str(card.mistakes))
    )


def decode_line(line: str, line_number: Optional[int] = None) -> Card:
    """
    Parse one record line into a Card.

    Parameters:
        line (str): The record, without its line terminator.
        line_number (Optional[int]): 1-based position in the source file, used in error messages.

    Returns:
        Card: The decoded card.

    Raises:
        MalformedRecordError: If the line does not have exactly three fields or the mistake count is not a non-negative base-10 integer.
    """
    fields = line.split(FIELD_SEPARATOR)
    if len(fields) != FIELD_COUNT:
        raise MalformedRecordError(
            line,
            f"expected {FIELD_COUNT} fields, found {len(fields)}",
            line_number,
        )

    term, definition, mistakes = fields
    if not _MISTAKES_PATTERN.fullmatch(mistakes):
        raise MalformedRecordError(
            line,
            f"mistake count {mistakes!r} is not a non-negative integer",
            line_number,
        )
    return Card(term=term, definition=definition, mistakes=int(mistakes))


def read_cards(path: Union[str, Path]) -> Optional[List[Card]]:
    """
    Decode every record in a card file.

    Returns None when the file does not exist, which callers treat as "no
    records" rather than an error. Decoding stops at the first malformed line.

    Raises:
        MalformedRecordError: If any line cannot be decoded.
        CardFileReadError: If the file exists but cannot be read as UTF-8 text.
    """
    file_path = Path(path)
    try:
        content = file_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.info(f"Card file {file_path} does not exist.")
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Could not read card file {file_path}: {e}")
        raise CardFileReadError(
            f"Could not read card file {file_path}: {e}", e
        ) from e

    # Only "\n" separates records; read_text already folds "\r\n" and "\r".
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    cards = [
        decode_line(line, line_number)
        for line_number, line in enumerate(lines, start=1)
    ]
    logger.debug(f"Decoded {len(cards)} records from {file_path}")
    return cards


def write_cards(path: Union[str, Path], cards: Iterable[Card]) -> int:
    """
    Write cards to a file, one record per line, replacing any existing content.

    Returns:
        int: Number of records written.

    Raises:
        CardFileWriteError: If the file cannot be written.
    """
    file_path = Path(path)
    lines = [encode_card(card) for card in cards]
    try:
        with open(file_path, "w", encoding="utf-8") as f:
            for line in lines:
                f.write(f"{line}\n")
    except OSError as e:
        logger.error(f"Could not write card file {file_path}: {e}")
        raise CardFileWriteError(
            f"Could not write card file {file_path}: {e}", e
        ) from e

    logger.info(f"Wrote {len(lines)} cards to {file_path}")
    return len(lines)
