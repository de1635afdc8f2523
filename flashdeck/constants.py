"""
Seed data for a freshly created data source.

The six cards below are a fixed contract: ids 0-5, sort orders 0-5, in this
order. Tests and callers compare against them verbatim.
"""
from typing import Tuple

from .models import Flashcard

DEFAULT_CARDS: Tuple[Flashcard, ...] = (
    Flashcard(id=0, front="SRP", back="Single Responsibility Principle", sort_order=0),
    Flashcard(id=1, front="OCP", back="Open-Closed Principle", sort_order=1),
    Flashcard(id=2, front="LSP", back="Liskov Substitution Principle", sort_order=2),
    Flashcard(id=3, front="ISP", back="Interface Segregation Principle", sort_order=3),
    Flashcard(id=4, front="DIP", back="Dependency Inversion Principle", sort_order=4),
    Flashcard(id=5, front="LKP", back="Least Knowledge Principle (Law of Demeter)", sort_order=5),
)

# Bounds reported by an empty data source.
EMPTY_MIN_SORT_ORDER: float = float("inf")
EMPTY_MAX_SORT_ORDER: float = float("-inf")
