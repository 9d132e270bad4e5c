"""Port interface for card lookup."""

from collections.abc import Callable, Sequence
from typing import Protocol, runtime_checkable

from deckpractice.domain.entities.card import Card

CardStoreListener = Callable[[str], None]


@runtime_checkable
class CardRepository(Protocol):
    """Port for reading card content.

    The practice engine only needs card text for grading. Follows hexagonal
    architecture - the domain does not know how cards are stored.
    """

    def load_cards(self, card_ids: Sequence[str]) -> list[Card]:
        """Load cards by id.

        Args:
            card_ids: Ids to load

        Returns:
            Cards in the order requested, unknown ids skipped
        """
        ...


@runtime_checkable
class ObservableCardStore(CardRepository, Protocol):
    """Card repository that announces shape changes per deck."""

    def get_card_ids(self, deck_id: str) -> list[str]:
        """Get the card ids currently eligible for practice in a deck."""
        ...

    def subscribe(self, listener: CardStoreListener) -> Callable[[], None]:
        """Register a listener called with the deck id after every change.

        Returns:
            Callable that removes the listener
        """
        ...
