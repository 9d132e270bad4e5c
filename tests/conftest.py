import random

import pytest

from deckpractice.adapters.local_deck_store import LocalDeckStore
from deckpractice.domain.services.practice_engine import PracticeEngine
from deckpractice.domain.services.practice_sync import PracticeSync

DECK_ID = "deck_fr"


def _seed():
    return {
        "decks": [
            {"id": DECK_ID, "name": "French", "card_ids": ["c1", "c2", "c3"]},
            {"id": "deck_es", "name": "Spanish", "card_ids": ["c4"], "pinned": True},
            {"id": "deck_empty", "name": "Empty", "card_ids": []},
        ],
        "cards": [
            {"id": "c1", "front": "bonjour", "back": "hello"},
            {"id": "c2", "front": "merci", "back": "thank you"},
            {"id": "c3", "front": "au revoir", "back": "goodbye"},
            {"id": "c4", "front": "hola", "back": "hello"},
        ],
    }


@pytest.fixture
def store():
    return LocalDeckStore(data=_seed())


@pytest.fixture
def engine(store):
    return PracticeEngine(store, shuffle=False, rng=random.Random(7))


@pytest.fixture
def sync(store, engine):
    practice_sync = PracticeSync(store, engine)
    practice_sync.attach()
    yield practice_sync
    practice_sync.detach()


@pytest.fixture
def answers(store):
    """Map card id -> back text, for answering correctly."""

    def _answer(card_id):
        return store.get_card(card_id).back

    return _answer
