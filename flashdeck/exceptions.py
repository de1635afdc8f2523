from typing import Optional


class FlashcardStoreError(Exception):
    """Base exception for flashcard data source errors."""

    def __init__(
        self, message: str, original_exception: Optional[Exception] = None
    ):
        super().__init__(message)
        self.original_exception = original_exception


class CardNotFoundError(FlashcardStoreError):
    """Raised when an operation targets a card id that is not stored."""

    def __init__(self, card_id: int):
        super().__init__(f"No flashcard with id {card_id} in the data source.")
        self.card_id = card_id


class InvariantViolationError(FlashcardStoreError):
    """Raised when a write would leave sort orders negative or duplicated.

    The data source is rolled back to its state before the write and nothing
    is published.
    """

    pass


class InternalInvariantError(InvariantViolationError):
    """Indicates the data source's own bookkeeping is inconsistent (stale
    sort order bounds or a card stored under the wrong id)."""

    pass


class ReentrantWriteError(FlashcardStoreError):
    """Raised when a write is started while another write is still
    publishing its result."""

    pass
