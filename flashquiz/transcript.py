"""
The session transcript: every line shown to or typed by the user, in order.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Tuple, Union

from .exceptions import TranscriptWriteError

logger = logging.getLogger(__name__)


class Transcript:
    """Append-only record of a session's console input and output."""

    def __init__(self) -> None:
        self._lines: List[str] = []

    def __len__(self) -> int:
        return len(self._lines)

    @property
    def lines(self) -> Tuple[str, ...]:
        return tuple(self._lines)

    def append(self, line: str) -> None:
        self._lines.append(line)

    def extend(self, lines: Iterable[str]) -> None:
        self._lines.extend(lines)

    def flush(self, path: Union[str, Path]) -> Path:
        """
        Write the transcript to `path`, one line per entry, overwriting the file.

        The transcript itself is kept; later flushes write the full history again.

        Raises:
            TranscriptWriteError: If the file cannot be written.
        """
        file_path = Path(path)
        try:
            with open(file_path, "w", encoding="utf-8") as f:
                for line in self._lines:
                    f.write(f"{line}\n")
        except OSError as e:
            logger.error(f"Could not write transcript to {file_path}: {e}")
            raise TranscriptWriteError(
                f"Could not write transcript to {file_path}: {e}", e
            ) from e
        logger.info(f"Saved {len(self._lines)} transcript lines to {file_path}")
        return file_path
