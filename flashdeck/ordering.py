"""
Reordering algorithms over a list of flashcards.

Both functions return new cards whose sort orders are a permutation of the
input's sort orders; ids and text are left untouched. The result is meant to
be written back to a data source as a single batch.

Pass cards sorted by sort order (as ``InMemoryDataSource.get_flashcards``
returns them) so that positions match display order.
"""

import logging
import random
from typing import List, Optional, Sequence

from .models import Flashcard

logger = logging.getLogger(__name__)


def rotate(cards: Sequence[Flashcard], k: int) -> List[Flashcard]:
    """
    Rotate cards by ``k`` positions relative to their sort orders.

    The card at position ``i`` takes the sort order currently held by the
    card at position ``(i + k) mod N``. Negative ``k`` wraps around.

    Args:
        cards: Cards in display order.
        k: Number of positions to rotate by.

    Returns:
        List[Flashcard]: New cards with redistributed sort orders.
    """
    size = len(cards)
    if size == 0:
        return []
    rotated = [
        card.with_sort_order(cards[(i + k) % size].sort_order)
        for i, card in enumerate(cards)
    ]
    logger.debug(f"Rotated {size} cards by {k}.")
    return rotated


def shuffle(
    cards: Sequence[Flashcard], rng: Optional[random.Random] = None
) -> List[Flashcard]:
    """
    Randomly redistribute the existing sort orders among ``cards``.

    Uses ``random.Random.shuffle`` (Fisher-Yates), so every permutation is
    equally likely. Pass a seeded ``rng`` for reproducible output.
    """
    sort_orders = [card.sort_order for card in cards]
    (rng or random).shuffle(sort_orders)
    logger.debug(f"Shuffled sort orders of {len(sort_orders)} cards.")
    return [
        card.with_sort_order(sort_order)
        for card, sort_order in zip(cards, sort_orders)
    ]
