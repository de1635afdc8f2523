"""
This module defines FlashcardRepository, the entry point the application layer
uses to read and rearrange flashcards. It turns intents such as "append" or
"prepend" into InMemoryDataSource calls with the right sort orders.
"""

import logging
import random
from typing import List, Optional, Sequence

from . import ordering
from .db.data_source import InMemoryDataSource
from .models import Flashcard
from .subject import Subject

logger = logging.getLogger(__name__)


class FlashcardRepository:
    """
    Facade over an InMemoryDataSource.

    The data source is passed in explicitly so that several repositories (or
    view models) can share one store for the lifetime of an app session.
    """

    def __init__(self, data_source: InMemoryDataSource):
        self.data_source = data_source

    def find(self, card_id: int) -> Subject[Optional[Flashcard]]:
        return self.data_source.get_flashcard_subject(card_id)

    def find_all(self) -> Subject[List[Flashcard]]:
        return self.data_source.get_all_flashcards_subject()

    def save(self, card: Flashcard) -> None:
        self.data_source.put_flashcard(card)

    def save_all(self, cards: Sequence[Flashcard]) -> None:
        self.data_source.put_flashcards(cards)

    def append(self, card: Flashcard) -> None:
        """Store ``card`` after every existing card."""
        if len(self.data_source) == 0:
            sort_order = 0
        else:
            sort_order = int(self.data_source.max_sort_order) + 1
        self.data_source.put_flashcard(card.with_sort_order(sort_order))

    def prepend(self, card: Flashcard) -> None:
        """
        Store ``card`` before every existing card.

        Existing sort orders are shifted up by one first, then the card takes
        the slot just below the new minimum. This is two writes, so observers
        see the shifted collection before the new card arrives.
        """
        if len(self.data_source) == 0:
            self.data_source.put_flashcard(card.with_sort_order(0))
            return
        self.data_source.shift_sort_orders(
            0, int(self.data_source.max_sort_order), 1
        )
        self.data_source.put_flashcard(
            card.with_sort_order(int(self.data_source.min_sort_order) - 1)
        )

    def remove(self, card_id: int) -> None:
        self.data_source.remove_flashcard(card_id)

    def rotate(self, k: int) -> None:
        """Rotate the display order by ``k`` positions and save the result."""
        cards = ordering.rotate(self.data_source.get_flashcards(), k)
        self.data_source.put_flashcards(cards)
        logger.info(f"Rotated {len(cards)} flashcards by {k}.")

    def shuffle(self, rng: Optional[random.Random] = None) -> None:
        """Randomly reorder all cards and save the result."""
        cards = ordering.shuffle(self.data_source.get_flashcards(), rng)
        self.data_source.put_flashcards(cards)
        logger.info(f"Shuffled {len(cards)} flashcards.")
