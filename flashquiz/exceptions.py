from typing import Optional


class FlashquizError(Exception):
    """Base exception for flashquiz errors."""

    def __init__(
        self, message: str, original_exception: Optional[Exception] = None
    ):
        super().__init__(message)
        self.original_exception = original_exception


class CardStoreError(FlashquizError):
    """Raised when a card store operation violates one of its rules."""

    pass


class DuplicateTermError(CardStoreError):
    """Raised when adding a card whose term is already in the store."""

    def __init__(self, term: str):
        super().__init__(f'The card "{term}" already exists.')
        self.term = term


class DuplicateDefinitionError(CardStoreError):
    """Raised when adding a card whose definition is already in the store."""

    def __init__(self, definition: str):
        super().__init__(f'The definition "{definition}" already exists.')
        self.definition = definition


class CardNotFoundError(CardStoreError):
    """Raised when a term is not present in the store."""

    def __init__(self, term: str):
        super().__init__(f'There is no card "{term}".')
        self.term = term


class EmptyCardStoreError(CardStoreError, ValueError):
    """Raised when a quiz round starts against an empty store."""

    pass


class CardFileError(FlashquizError):
    """Base exception for reading or writing card files."""

    pass


class MalformedRecordError(CardFileError):
    """Indicates a persisted line that cannot be decoded into a card."""

    def __init__(
        self,
        line: str,
        reason: str,
        line_number: Optional[int] = None,
    ):
        location = f"line {line_number}" if line_number is not None else "line"
        super().__init__(f"Malformed record on {location} ({reason}): {line!r}")
        self.line = line
        self.reason = reason
        self.line_number = line_number


class CardFileWriteError(CardFileError):
    """Raised when a card file cannot be written."""

    pass


class CardFileReadError(CardFileError):
    """Raised when an existing card file cannot be read or decoded."""

    pass


class TranscriptWriteError(FlashquizError):
    """Raised when the session transcript cannot be written."""

    pass
