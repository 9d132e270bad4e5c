"""Deck summary value object."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DeckSummary:
    """Immutable listing entry for a deck."""

    id: str
    name: str
    card_count: int
    pinned: bool = False
