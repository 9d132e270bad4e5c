"""
Composition Root.

Centralized dependency wiring for the application.
All factory functions that instantiate adapters belong here to maintain
hexagonal architecture (domain NEVER imports from adapters).
"""

from deckpractice.adapters.local_deck_store import LocalDeckStore
from deckpractice.config import (
    get_deck_data_path,
    get_feedback_delay_seconds,
    get_practice_shuffle,
    get_skip_debounce_seconds,
)
from deckpractice.controllers.feedback_timer import FeedbackTimer
from deckpractice.controllers.practice_controller import PracticeController
from deckpractice.domain.services.practice_engine import PracticeEngine
from deckpractice.domain.services.practice_sync import PracticeSync


def create_deck_store() -> LocalDeckStore:
    """Create the deck store from the configured seed document."""
    return LocalDeckStore(data_path=get_deck_data_path())


def create_practice_engine(card_store: LocalDeckStore) -> PracticeEngine:
    """Create PracticeEngine reading cards from the store.

    Returns:
        PracticeEngine using the configured shuffle default
    """
    return PracticeEngine(card_store, shuffle=get_practice_shuffle())


def create_practice_sync(card_store: LocalDeckStore, engine: PracticeEngine) -> PracticeSync:
    """Create PracticeSync already listening to store changes."""
    sync = PracticeSync(card_store, engine)
    sync.attach()
    return sync


def create_feedback_timer() -> FeedbackTimer:
    """Create FeedbackTimer with configured delay and debounce."""
    return FeedbackTimer(
        delay_seconds=get_feedback_delay_seconds(),
        debounce_seconds=get_skip_debounce_seconds(),
    )


def create_practice_controller(engine: PracticeEngine, deck_id: str) -> PracticeController:
    """Create PracticeController for one deck's practice screen."""
    return PracticeController(engine, deck_id, timer=create_feedback_timer())
