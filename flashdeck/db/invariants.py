"""
Sort order bookkeeping and constraint checks for the in-memory data source.
Kept apart from InMemoryDataSource so the rules can be tested on plain dicts.
"""

from collections import Counter
from typing import Iterable, Mapping, Tuple, Union

from ..constants import EMPTY_MAX_SORT_ORDER, EMPTY_MIN_SORT_ORDER
from ..exceptions import InternalInvariantError, InvariantViolationError
from ..models import Flashcard

Bound = Union[int, float]


def compute_sort_order_bounds(
    cards: Iterable[Flashcard],
) -> Tuple[Bound, Bound]:
    """
    Return the (min, max) sort order over ``cards``.

    Returns:
        Tuple[Bound, Bound]: ``(inf, -inf)`` when ``cards`` is empty.
    """
    sort_orders = [card.sort_order for card in cards]
    if not sort_orders:
        return EMPTY_MIN_SORT_ORDER, EMPTY_MAX_SORT_ORDER
    return min(sort_orders), max(sort_orders)


def check_sort_order_constraints(
    flashcards: Mapping[int, Flashcard],
    min_sort_order: Bound,
    max_sort_order: Bound,
) -> None:
    """
    Verify the data source invariants over the full set of stored cards.

    Parameters:
        flashcards (Mapping[int, Flashcard]): Stored cards keyed by id.
        min_sort_order (Bound): Cached minimum sort order.
        max_sort_order (Bound): Cached maximum sort order.

    Raises:
        InvariantViolationError: If any sort order is negative or shared by
            more than one card.
        InternalInvariantError: If a card is keyed under a different id or
            the cached bounds differ from the true min/max.
    """
    for key, card in flashcards.items():
        if card.id != key:
            raise InternalInvariantError(
                f"Flashcard with id {card.id} is stored under key {key}."
            )

    negative = sorted(
        card.sort_order for card in flashcards.values() if card.sort_order < 0
    )
    if negative:
        raise InvariantViolationError(
            f"Sort orders must be non-negative, found {negative}."
        )

    counts = Counter(card.sort_order for card in flashcards.values())
    duplicates = sorted(order for order, count in counts.items() if count > 1)
    if duplicates:
        raise InvariantViolationError(
            f"Sort orders must be unique, found duplicates {duplicates}."
        )

    expected = compute_sort_order_bounds(flashcards.values())
    if (min_sort_order, max_sort_order) != expected:
        raise InternalInvariantError(
            f"Cached sort order bounds ({min_sort_order}, {max_sort_order}) "
            f"do not match stored cards {expected}."
        )
