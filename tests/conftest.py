import pytest

from flashdeck.db import InMemoryDataSource
from flashdeck.models import Flashcard
from flashdeck.repository import FlashcardRepository


# --- Data Source Fixtures ---
@pytest.fixture
def empty_data_source() -> InMemoryDataSource:
    return InMemoryDataSource()


@pytest.fixture
def data_source() -> InMemoryDataSource:
    """
    Provide a data source seeded with the six default cards.

    Returns:
        InMemoryDataSource: ids 0-5 at sort orders 0-5.
    """
    return InMemoryDataSource.from_default()


@pytest.fixture
def repository(data_source: InMemoryDataSource) -> FlashcardRepository:
    return FlashcardRepository(data_source)


@pytest.fixture
def new_card() -> Flashcard:
    """
    Create a card that has never been stored.

    Returns:
        Flashcard: No id, front "YAGNI", back "You Aren't Gonna Need It",
        sort order 0 (callers normally overwrite it).
    """
    return Flashcard(front="YAGNI", back="You Aren't Gonna Need It", sort_order=0)

