# Adapters layer - Concrete implementations of the ports

from .local_deck_store import (
    CardNotFoundError,
    CardStoreError,
    DeckNotFoundError,
    LocalDeckStore,
)

__all__ = [
    "CardNotFoundError",
    "CardStoreError",
    "DeckNotFoundError",
    "LocalDeckStore",
]
