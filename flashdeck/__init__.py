"""Flashdeck - an in-memory, observable store for ordered flashcards."""

from .models import Flashcard
from .constants import DEFAULT_CARDS
from .config import DataSourceConfig
from .db import InMemoryDataSource
from .repository import FlashcardRepository
from .subject import Subject
from .ordering import rotate, shuffle

__all__ = [
    "Flashcard",
    "DEFAULT_CARDS",
    "DataSourceConfig",
    "InMemoryDataSource",
    "FlashcardRepository",
    "Subject",
    "rotate",
    "shuffle",
]
