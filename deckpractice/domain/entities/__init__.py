"""Domain entities - objects with identity."""

from .card import Card
from .deck import Deck
from .practice_session import PracticeSession

__all__ = ["Card", "Deck", "PracticeSession"]
