"""API routes module."""

from .decks import router as decks_router
from .practice import router as practice_router

__all__ = ["decks_router", "practice_router"]
