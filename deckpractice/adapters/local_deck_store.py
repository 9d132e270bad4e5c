"""In-memory deck store seeded from an embedded JSON document.

Loads the packaged default decks unless a seed file is configured with
DECK_DATA_PATH. Edits live in memory only and are announced to subscribers
so live practice sessions can be rehydrated.
"""

import json
import logging
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from importlib import resources
from pathlib import Path
from uuid import uuid4

from deckpractice.domain.entities.card import Card
from deckpractice.domain.entities.deck import Deck
from deckpractice.domain.value_objects.deck_summary import DeckSummary
from deckpractice.ports.card_repository import CardStoreListener

logger = logging.getLogger(__name__)


class CardStoreError(Exception):
    """Deck store error."""

    pass


class DeckNotFoundError(CardStoreError):
    """Raised when a deck id is unknown."""

    def __init__(self, deck_id: str):
        self.deck_id = deck_id
        super().__init__(f"Deck {deck_id} not found")


class CardNotFoundError(CardStoreError):
    """Raised when a card id is unknown."""

    def __init__(self, card_id: str):
        self.card_id = card_id
        super().__init__(f"Card {card_id} not found")


class LocalDeckStore:
    """ObservableCardStore implementation holding decks in memory.

    This adapter is useful for:
    - Running the API without any external storage
    - Tests that need real card edits to drive rehydration
    - Demo environments
    """

    def __init__(self, data: dict | None = None, data_path: str | None = None) -> None:
        """Initialize store.

        Args:
            data: Seed document with "decks" and "cards" lists
            data_path: JSON seed file, used when data is not given
        """
        if data is None:
            data = self._load_data(data_path)

        self._cards: dict[str, Card] = {}
        for card_data in data.get("cards", []):
            card = Card.from_dict(card_data)
            self._cards[card.id] = card

        self._decks: dict[str, Deck] = {}
        for deck_data in data.get("decks", []):
            deck = Deck.from_dict(deck_data)
            self._decks[deck.id] = deck

        self._listeners: list[CardStoreListener] = []

    def _load_data(self, data_path: str | None) -> dict:
        """Load the seed document.

        Uses importlib.resources for reliable package data access.
        Falls back to file path if running outside package context.
        """
        if data_path:
            with open(data_path, encoding="utf-8") as f:
                return json.load(f)

        try:
            data_files = resources.files("deckpractice.adapters.data")
            with data_files.joinpath("default_decks.json").open("r", encoding="utf-8") as f:
                return json.load(f)
        except (ModuleNotFoundError, FileNotFoundError, TypeError):
            file_path = Path(__file__).parent / "data" / "default_decks.json"
            with open(file_path, encoding="utf-8") as f:
                return json.load(f)

    # =========================================================================
    # Subscriptions
    # =========================================================================

    def subscribe(self, listener: CardStoreListener) -> Callable[[], None]:
        """Register a listener called with a deck id after each change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, deck_ids: Sequence[str]) -> None:
        for deck_id in deck_ids:
            for listener in list(self._listeners):
                listener(deck_id)

    # =========================================================================
    # Queries
    # =========================================================================

    def list_decks(self) -> list[DeckSummary]:
        """Get deck summaries, pinned decks first, then by name."""
        summaries = [deck.summary() for deck in self._decks.values()]
        return sorted(summaries, key=lambda s: (not s.pinned, s.name.lower()))

    def get_deck(self, deck_id: str) -> Deck:
        deck = self._decks.get(deck_id)
        if deck is None:
            raise DeckNotFoundError(deck_id)
        return deck

    def get_card_ids(self, deck_id: str) -> list[str]:
        """Get ids of the deck's existing cards; empty for unknown decks."""
        deck = self._decks.get(deck_id)
        if deck is None:
            return []
        return [card_id for card_id in deck.card_ids if card_id in self._cards]

    def get_card(self, card_id: str) -> Card:
        card = self._cards.get(card_id)
        if card is None:
            raise CardNotFoundError(card_id)
        return card

    def load_cards(self, card_ids: Sequence[str]) -> list[Card]:
        """Load cards in the requested order, skipping unknown ids."""
        return [self._cards[card_id] for card_id in card_ids if card_id in self._cards]

    # =========================================================================
    # Mutations
    # =========================================================================

    def add_card(self, deck_id: str, front: str, back: str) -> Card:
        """Create a card at the end of a deck."""
        deck = self.get_deck(deck_id)
        now = datetime.now(UTC)
        card = Card(id=str(uuid4()), front=front, back=back, created_at=now, updated_at=now)

        self._cards[card.id] = card
        deck.card_ids.append(card.id)
        deck.touch()

        logger.info(f"Added card {card.id} to deck {deck_id}")
        self._notify([deck_id])
        return card

    def update_card(self, card_id: str, front: str | None = None, back: str | None = None) -> Card:
        """Edit card text; omitted sides keep their current value."""
        card = self.get_card(card_id)
        updated = Card(
            id=card.id,
            front=card.front if front is None else front,
            back=card.back if back is None else back,
            created_at=card.created_at,
            updated_at=datetime.now(UTC),
        )
        self._cards[card_id] = updated

        deck_ids = self._decks_containing(card_id)
        for deck_id in deck_ids:
            self._decks[deck_id].touch()

        logger.info(f"Updated card {card_id}")
        self._notify(deck_ids)
        return updated

    def delete_card(self, card_id: str) -> None:
        """Delete a card and remove it from every deck."""
        self.get_card(card_id)
        deck_ids = self._decks_containing(card_id)

        del self._cards[card_id]
        for deck_id in deck_ids:
            deck = self._decks[deck_id]
            deck.card_ids = [cid for cid in deck.card_ids if cid != card_id]
            deck.touch()

        logger.info(f"Deleted card {card_id} from {len(deck_ids)} deck(s)")
        self._notify(deck_ids)

    def _decks_containing(self, card_id: str) -> list[str]:
        return [deck.id for deck in self._decks.values() if card_id in deck.card_ids]
