"""Keeps live practice sessions consistent with card store edits."""

import logging
from collections.abc import Callable

from deckpractice.domain.services.practice_engine import PracticeEngine
from deckpractice.ports.card_repository import ObservableCardStore

logger = logging.getLogger(__name__)


class PracticeSync:
    """Rehydrates a deck's session whenever its cards change in the store.

    When rehydration exhausts the current round (for example the last
    unanswered card was deleted) the round completion check runs right
    away so the session does not sit on an empty cursor.
    """

    def __init__(self, card_store: ObservableCardStore, engine: PracticeEngine) -> None:
        self._card_store = card_store
        self._engine = engine
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def is_attached(self) -> bool:
        return self._unsubscribe is not None

    def attach(self) -> None:
        """Start listening to store changes."""
        if self._unsubscribe is None:
            self._unsubscribe = self._card_store.subscribe(self.on_deck_changed)

    def detach(self) -> None:
        """Stop listening to store changes."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def on_deck_changed(self, deck_id: str) -> None:
        """Reconcile the deck's session with its current card ids."""
        if self._engine.get_session(deck_id) is None:
            return

        valid_card_ids = self._card_store.get_card_ids(deck_id)
        if not self._engine.rehydrate_session(deck_id, valid_card_ids):
            return

        session = self._engine.get_session(deck_id)
        if session is not None and session.phase.accepts_answers() and session.is_round_complete:
            logger.info(f"Deck {deck_id}: round exhausted by card changes, completing round")
            self._engine.start_missed_round(deck_id)
