"""
Deck Practice - FastAPI Application

Typed-answer flashcard practice over local decks.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root (parent of deckpractice/)
# Must happen before importing modules that use environment variables
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from deckpractice import __version__  # noqa: E402
from deckpractice.api.dependencies import cleanup_dependencies, init_dependencies  # noqa: E402
from deckpractice.api.routes import decks_router, practice_router  # noqa: E402
from deckpractice.config import (  # noqa: E402
    CORS_ALLOWED_HEADERS,
    CORS_ALLOWED_METHODS,
    get_cors_allow_credentials,
    get_cors_origins,
    get_log_level,
)

logging.basicConfig(level=get_log_level())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan manager for startup/shutdown events.

    Startup:
    - Load decks and wire the practice engine

    Shutdown:
    - End live practice sessions
    """
    logger.info("Starting deck practice backend...")

    init_dependencies()
    logger.info("Dependencies initialized")

    yield

    logger.info("Shutting down deck practice backend...")
    cleanup_dependencies()
    logger.info("Shutdown complete")


app = FastAPI(
    title="Deck Practice API",
    description="Typed-answer flashcard practice sessions",
    version=__version__,
    lifespan=lifespan,
)

# CORS configuration - loaded from environment with restrictive defaults
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=get_cors_allow_credentials(),
    allow_methods=CORS_ALLOWED_METHODS,
    allow_headers=CORS_ALLOWED_HEADERS,
)

# Register API routers
app.include_router(decks_router)
app.include_router(practice_router)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "deckpractice",
        "version": __version__,
    }
