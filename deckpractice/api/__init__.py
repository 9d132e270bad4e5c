"""API layer - FastAPI routes and dependencies."""

from .dependencies import (
    DeckStoreDep,
    PracticeEngineDep,
    cleanup_dependencies,
    get_deck_store,
    get_practice_engine,
    init_dependencies,
)
from .routes import decks_router, practice_router

__all__ = [
    # Routes
    "decks_router",
    "practice_router",
    # Dependencies
    "init_dependencies",
    "cleanup_dependencies",
    "get_deck_store",
    "get_practice_engine",
    # Type aliases
    "DeckStoreDep",
    "PracticeEngineDep",
]
