# Ports layer - Abstract interfaces (Protocols)

from .card_repository import CardRepository, CardStoreListener, ObservableCardStore

__all__ = [
    "CardRepository",
    "CardStoreListener",
    "ObservableCardStore",
]
