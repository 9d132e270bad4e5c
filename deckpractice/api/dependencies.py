"""FastAPI dependency injection module.

Provides singleton instances of services for API routes.
Uses lifespan events for initialization and cleanup.
"""

import logging
from typing import Annotated

from fastapi import Depends

from deckpractice.adapters.local_deck_store import LocalDeckStore
from deckpractice.composition import (
    create_deck_store,
    create_practice_engine,
    create_practice_sync,
)
from deckpractice.domain.services.practice_engine import PracticeEngine
from deckpractice.domain.services.practice_sync import PracticeSync

logger = logging.getLogger(__name__)


# Singletons stored at module level
_deck_store: LocalDeckStore | None = None
_practice_engine: PracticeEngine | None = None
_practice_sync: PracticeSync | None = None


def init_dependencies() -> None:
    """Initialize all singleton dependencies.

    Called during FastAPI lifespan startup.
    """
    global _deck_store, _practice_engine, _practice_sync

    _deck_store = create_deck_store()
    logger.info(f"Deck store loaded with {len(_deck_store.list_decks())} decks")

    _practice_engine = create_practice_engine(_deck_store)

    # Card edits rehydrate live sessions through the store notification
    _practice_sync = create_practice_sync(_deck_store, _practice_engine)


def cleanup_dependencies() -> None:
    """Cleanup dependencies on shutdown.

    Called during FastAPI lifespan shutdown.
    Ends live sessions and stops listening to the store.
    """
    global _deck_store, _practice_engine, _practice_sync

    if _practice_sync is not None:
        _practice_sync.detach()

    if _practice_engine is not None:
        ended = _practice_engine.end_all_sessions()
        if ended:
            logger.info(f"Ended {ended} practice session(s) on shutdown")

    _deck_store = None
    _practice_engine = None
    _practice_sync = None


def get_deck_store() -> LocalDeckStore:
    """Dependency: Get LocalDeckStore instance."""
    if _deck_store is None:
        raise RuntimeError("Dependencies not initialized. Call init_dependencies first.")
    return _deck_store


def get_practice_engine() -> PracticeEngine:
    """Dependency: Get PracticeEngine instance."""
    if _practice_engine is None:
        raise RuntimeError("Dependencies not initialized. Call init_dependencies first.")
    return _practice_engine


# Type aliases for dependency injection
DeckStoreDep = Annotated[LocalDeckStore, Depends(get_deck_store)]
PracticeEngineDep = Annotated[PracticeEngine, Depends(get_practice_engine)]
