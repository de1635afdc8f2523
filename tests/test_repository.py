import random
from unittest.mock import MagicMock

import pytest

from flashdeck.constants import DEFAULT_CARDS
from flashdeck.db import InMemoryDataSource
from flashdeck.exceptions import CardNotFoundError
from flashdeck.models import Flashcard
from flashdeck.repository import FlashcardRepository


def _ids_in_display_order(repository: FlashcardRepository) -> list:
    return [card.id for card in repository.find_all().get_value()]


class TestFlashcardRepository:
    def test_find_returns_card_subject(self, repository):
        observer = MagicMock()
        repository.find(2).subscribe(observer)
        observer.assert_called_once_with(DEFAULT_CARDS[2])

    def test_find_all_replays_collection(self, repository):
        assert repository.find_all().get_value() == list(DEFAULT_CARDS)

    def test_save_replaces_card(self, repository):
        repository.save(DEFAULT_CARDS[4].with_front("DIP!"))
        assert repository.find(4).get_value().front == "DIP!"

    def test_save_all(self, repository):
        repository.save_all([
            DEFAULT_CARDS[0].with_sort_order(1),
            DEFAULT_CARDS[1].with_sort_order(0),
        ])
        assert _ids_in_display_order(repository) == [1, 0, 2, 3, 4, 5]

    def test_append(self, repository, data_source, new_card):
        repository.append(new_card)

        appended = data_source.get_flashcard(6)
        assert appended.sort_order == 6
        assert appended.front == "YAGNI"
        assert data_source.max_sort_order == 6

    def test_prepend(self, repository, data_source, new_card):
        repository.prepend(new_card.with_sort_order(99))

        assert {c.id: c.sort_order for c in DEFAULT_CARDS} == {
            i: data_source.get_flashcard(i).sort_order - 1 for i in range(6)
        }
        assert data_source.get_flashcard(6).sort_order == 0
        assert _ids_in_display_order(repository) == [6, 0, 1, 2, 3, 4, 5]

    def test_append_then_prepend(self, repository, data_source, new_card):
        repository.append(new_card.with_front("last"))
        repository.prepend(new_card.with_front("first"))

        cards = data_source.get_flashcards()
        assert [c.front for c in (cards[0], cards[-1])] == ["first", "last"]
        assert [c.sort_order for c in cards] == list(range(8))

    def test_append_to_empty_store(self, new_card):
        repository = FlashcardRepository(InMemoryDataSource())
        repository.append(new_card.with_sort_order(50))
        assert repository.find(0).get_value().sort_order == 0

    def test_prepend_to_empty_store(self, new_card):
        repository = FlashcardRepository(InMemoryDataSource())
        repository.prepend(new_card.with_sort_order(50))
        assert repository.find(0).get_value().sort_order == 0

    def test_remove(self, repository, data_source):
        repository.remove(2)
        assert [c.sort_order for c in data_source.get_flashcards()] == [0, 1, 2, 3, 4]
        assert repository.find(2).get_value() is None

    def test_remove_unknown(self, repository):
        with pytest.raises(CardNotFoundError):
            repository.remove(100)

    @pytest.mark.parametrize("k, expected_ids", [
        (0, [0, 1, 2, 3, 4, 5]),
        (1, [5, 0, 1, 2, 3, 4]),
        (-1, [1, 2, 3, 4, 5, 0]),
        (6, [0, 1, 2, 3, 4, 5]),
    ])
    def test_rotate(self, repository, k, expected_ids):
        repository.rotate(k)
        assert _ids_in_display_order(repository) == expected_ids

    def test_rotate_twice_is_cumulative(self, repository):
        repository.rotate(1)
        repository.rotate(1)
        assert _ids_in_display_order(repository) == [4, 5, 0, 1, 2, 3]

    def test_shuffle(self, repository, data_source):
        repository.shuffle(random.Random(3))

        cards = data_source.get_flashcards()
        assert sorted(c.id for c in cards) == list(range(6))
        assert [c.sort_order for c in cards] == list(range(6))

    def test_rotate_empty_store(self):
        repository = FlashcardRepository(InMemoryDataSource())
        repository.rotate(3)
        assert not repository.find_all().has_value

    def test_repositories_share_data_source(self, data_source, new_card):
        first = FlashcardRepository(data_source)
        second = FlashcardRepository(data_source)
        first.append(new_card)
        assert second.find(6).get_value().front == "YAGNI"


def test_prepend_publishes_shift_then_insert(repository):
    """prepend is two writes, so the collection is published twice."""
    observer = MagicMock()
    repository.find_all().subscribe(observer)
    observer.reset_mock()

    repository.prepend(Flashcard(front="Q", back="A", sort_order=0))

    assert observer.call_count == 2
    shifted, final = (c.args[0] for c in observer.call_args_list)
    assert [c.sort_order for c in shifted] == [1, 2, 3, 4, 5, 6]
    assert [c.sort_order for c in final] == [0, 1, 2, 3, 4, 5, 6]
