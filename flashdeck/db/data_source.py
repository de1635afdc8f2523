"""
In-memory flashcard storage for flashdeck.
Implements the InMemoryDataSource class, which owns every card, allocates ids,
keeps sort orders unique and non-negative, and publishes changes to subjects.
"""

import logging
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

from ..config import DataSourceConfig
from ..constants import (
    DEFAULT_CARDS,
    EMPTY_MAX_SORT_ORDER,
    EMPTY_MIN_SORT_ORDER,
)
from ..exceptions import (
    CardNotFoundError,
    InvariantViolationError,
    ReentrantWriteError,
)
from ..models import Flashcard
from ..subject import Subject
from .invariants import check_sort_order_constraints, compute_sort_order_bounds

# --- Logging Setup ---
logger = logging.getLogger(__name__)


class InMemoryDataSource:
    """
    Authoritative store for an ordered collection of flashcards.

    Every mutating call either completes fully (state updated, subjects
    notified) or raises without changing state or notifying anyone. The one
    exception is an error raised by an observer: by then the write is
    committed, every subject still receives its new value, and the first
    observer error is re-raised to the writer.

    Writes are expected to come from a single caller at a time. Observers are
    notified synchronously on the writer's stack; with the default config a
    write attempted from inside an observer raises ReentrantWriteError.
    """

    def __init__(self, config: Optional[DataSourceConfig] = None):
        """
        Create an empty data source.

        Args:
            config (DataSourceConfig, optional): Behavioural switches. Defaults
                to ``DataSourceConfig()``.
        """
        self.config = config or DataSourceConfig()
        self._next_id = 0
        self._min_sort_order: Union[int, float] = EMPTY_MIN_SORT_ORDER
        self._max_sort_order: Union[int, float] = EMPTY_MAX_SORT_ORDER

        self._flashcards: Dict[int, Flashcard] = {}
        self._flashcard_subjects: Dict[int, Subject[Optional[Flashcard]]] = {}
        self._all_flashcards_subject: Subject[List[Flashcard]] = Subject()
        self._writing = False
        logger.debug(f"InMemoryDataSource created with {self.config!r}")

    @classmethod
    def from_default(
        cls, config: Optional[DataSourceConfig] = None
    ) -> "InMemoryDataSource":
        """Create a data source seeded with ``DEFAULT_CARDS``."""
        data = cls(config)
        data.put_flashcards(DEFAULT_CARDS)
        logger.info(f"Seeded data source with {len(DEFAULT_CARDS)} default cards.")
        return data

    # --- Reads ---

    def get_flashcard(self, card_id: int) -> Optional[Flashcard]:
        return self._flashcards.get(card_id)

    def get_flashcards(self) -> List[Flashcard]:
        """
        Return a snapshot of all stored cards in ascending sort order.

        The returned list is a new object; changing it does not affect the
        data source.
        """
        return sorted(self._flashcards.values(), key=lambda c: c.sort_order)

    def get_flashcard_subject(
        self, card_id: int
    ) -> Subject[Optional[Flashcard]]:
        """
        Return the subject tracking the card with ``card_id``.

        The subject is created on first request and seeded with the card's
        current value, or None if no such card is stored. It stays registered
        for the lifetime of the data source and receives None when the card
        is removed.
        """
        subject = self._flashcard_subjects.get(card_id)
        if subject is None:
            subject = Subject()
            subject.set_value(self.get_flashcard(card_id))
            self._flashcard_subjects[card_id] = subject
        return subject

    def get_all_flashcards_subject(self) -> Subject[List[Flashcard]]:
        return self._all_flashcards_subject

    @property
    def min_sort_order(self) -> Union[int, float]:
        """Smallest stored sort order, or ``inf`` when empty."""
        return self._min_sort_order

    @property
    def max_sort_order(self) -> Union[int, float]:
        """Largest stored sort order, or ``-inf`` when empty."""
        return self._max_sort_order

    @property
    def next_id(self) -> int:
        return self._next_id

    def __len__(self) -> int:
        return len(self._flashcards)

    def __contains__(self, card_id: object) -> bool:
        return card_id in self._flashcards

    # --- Writes ---

    def put_flashcard(self, card: Flashcard) -> None:
        """Insert or fully replace a single card. See ``put_flashcards``."""
        self.put_flashcards([card])

    def put_flashcards(self, cards: Sequence[Flashcard]) -> None:
        """
        Insert or fully replace a batch of cards in one atomic write.

        Cards without an id are given the next free id. A card with an
        explicit id replaces any stored card with that id, sort order
        included. The caller must supply a batch that, once applied, leaves
        sort orders unique and non-negative across the whole store; the data
        source validates but does not rearrange.

        Parameters:
            cards (Sequence[Flashcard]): Cards to store; an empty sequence is
                a no-op.

        Raises:
            InvariantViolationError: If the batch repeats an id or would break
                sort order uniqueness or non-negativity. Nothing is stored.
            ReentrantWriteError: If called while another write is publishing.
        """
        with self._write_guard():
            if not cards:
                logger.debug("put_flashcards called with an empty batch.")
                return
            self._commit(cards)

    def remove_flashcard(self, card_id: int) -> None:
        """
        Remove a card and close the gap it leaves in the sort orders.

        Every card sorted after the removed one moves down by one. The
        removed card's subject, if any, receives None.

        Raises:
            CardNotFoundError: If no card with ``card_id`` is stored.
            ReentrantWriteError: If called while another write is publishing.
        """
        with self._write_guard():
            card = self._flashcards.get(card_id)
            if card is None:
                raise CardNotFoundError(card_id)

            shifted = [
                other.with_sort_order(other.sort_order - 1)
                for other in self._flashcards.values()
                if other.sort_order > card.sort_order
            ]
            self._commit(shifted, removed_id=card_id)
            logger.info(
                f"Removed flashcard {card_id} (sort order {card.sort_order}); "
                f"shifted {len(shifted)} cards down."
            )

    def shift_sort_orders(self, from_: int, to: int, by: int) -> None:
        """
        Add ``by`` to the sort order of every card within ``[from_, to]``.

        Typically used to open a slot before an insertion. The caller must
        pick a range and offset that do not collide with cards outside the
        range.

        Raises:
            InvariantViolationError: If the shift would produce duplicate or
                negative sort orders. Nothing is changed.
            ReentrantWriteError: If called while another write is publishing.
        """
        with self._write_guard():
            shifted = [
                card.with_sort_order(card.sort_order + by)
                for card in self._flashcards.values()
                if from_ <= card.sort_order <= to
            ]
            if not shifted:
                logger.debug(f"No sort orders within [{from_}, {to}] to shift.")
                return
            logger.debug(
                f"Shifting {len(shifted)} sort orders in [{from_}, {to}] by {by}."
            )
            self._commit(shifted)

    # --- Internals ---

    @contextmanager
    def _write_guard(self) -> Iterator[None]:
        if self._writing and self.config.guard_reentrant_writes:
            raise ReentrantWriteError(
                "A write was started while another write was still "
                "publishing its result."
            )
        previous = self._writing
        self._writing = True
        try:
            yield
        finally:
            self._writing = previous

    def _assign_id(self, card: Flashcard) -> Flashcard:
        """Give ``card`` an id if it has none and keep ``next_id`` ahead of
        every id seen so far."""
        if card.id is None:
            card = card.with_id(self._next_id)
            self._next_id += 1
        elif card.id >= self._next_id:
            self._next_id = card.id + 1
        return card

    def _commit(
        self, cards: Sequence[Flashcard], removed_id: Optional[int] = None
    ) -> None:
        """
        Apply a batch (and optional removal), validate, then publish.

        If anything fails before publishing, the previous cards, bounds and
        id counter are restored before the error propagates.
        """
        saved_state = (
            dict(self._flashcards),
            self._next_id,
            self._min_sort_order,
            self._max_sort_order,
        )
        try:
            fixed_cards = [self._assign_id(card) for card in cards]
            batch_ids = [card.id for card in fixed_cards]
            if len(set(batch_ids)) != len(batch_ids):
                raise InvariantViolationError(
                    f"Batch contains the same flashcard id more than once: "
                    f"{sorted(batch_ids)}."
                )

            if removed_id is not None:
                del self._flashcards[removed_id]
            for card in fixed_cards:
                self._flashcards[card.id] = card

            self._min_sort_order, self._max_sort_order = (
                compute_sort_order_bounds(self._flashcards.values())
            )
            if self.config.check_invariants:
                check_sort_order_constraints(
                    self._flashcards, self._min_sort_order, self._max_sort_order
                )
        except Exception as e:
            (
                self._flashcards,
                self._next_id,
                self._min_sort_order,
                self._max_sort_order,
            ) = saved_state
            logger.error(f"Rejected write of {len(cards)} cards: {e}")
            raise

        logger.debug(
            f"Stored {len(fixed_cards)} cards; sort orders now span "
            f"[{self._min_sort_order}, {self._max_sort_order}]."
        )
        self._publish(fixed_cards, removed_id)

    def _publish(
        self, cards: Sequence[Flashcard], removed_id: Optional[int]
    ) -> None:
        """
        Push committed values to every affected subject.

        An observer error does not stop the remaining subjects from receiving
        their value; the first such error is re-raised once all subjects are
        up to date.
        """
        updates: List[Tuple[Subject, Optional[object]]] = []
        for card in cards:
            subject = self._flashcard_subjects.get(card.id)
            if subject is not None:
                updates.append((subject, card))
        if removed_id is not None and removed_id in self._flashcard_subjects:
            updates.append((self._flashcard_subjects[removed_id], None))
        updates.append((self._all_flashcards_subject, self.get_flashcards()))

        first_error: Optional[Exception] = None
        for subject, value in updates:
            try:
                subject.set_value(value)
            except Exception as e:
                logger.error(f"Observer failed while publishing a write: {e}")
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error
