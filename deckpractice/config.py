"""Application configuration loaded from environment variables.

Provides type-safe access to configuration with sensible defaults.
Production defaults are restrictive for security.
"""

import os

from deckpractice.domain.constants import FEEDBACK_DELAY_MS, SKIP_DEBOUNCE_MS


def get_cors_origins() -> list[str]:
    """Get allowed CORS origins from environment.

    Environment variable: CORS_ORIGINS (comma-separated)
    Default: localhost ports 3000-3001 for development
    """
    default_origins = "http://localhost:3000,http://localhost:3001"
    origins_str = os.getenv("CORS_ORIGINS", default_origins)
    return [origin.strip() for origin in origins_str.split(",") if origin.strip()]


def get_cors_allow_credentials() -> bool:
    """Get CORS allow_credentials setting.

    Environment variable: CORS_ALLOW_CREDENTIALS
    Default: true for development
    """
    return os.getenv("CORS_ALLOW_CREDENTIALS", "true").lower() == "true"


# Restricted HTTP methods - only what the API actually uses
CORS_ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]

# Restricted headers - only what's needed for the API
CORS_ALLOWED_HEADERS = [
    "Accept",
    "Accept-Language",
    "Content-Type",
    "X-Requested-With",
]


def get_log_level() -> str:
    """Get root log level.

    Environment variable: LOG_LEVEL
    Default: INFO
    """
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_deck_data_path() -> str | None:
    """Get path of the JSON document seeding the deck store.

    Environment variable: DECK_DATA_PATH
    Default: None (use the packaged default decks)
    """
    return os.getenv("DECK_DATA_PATH") or None


def get_practice_shuffle() -> bool:
    """Get whether practice queues are shuffled by default.

    Environment variable: PRACTICE_SHUFFLE
    Default: true
    """
    return os.getenv("PRACTICE_SHUFFLE", "true").lower() == "true"


def get_feedback_delay_seconds() -> float:
    """Get how long answer feedback stays on screen before auto-advance.

    Environment variable: FEEDBACK_DELAY_SECONDS
    Default: 2.5
    """
    return float(os.getenv("FEEDBACK_DELAY_SECONDS", str(FEEDBACK_DELAY_MS / 1000)))


def get_skip_debounce_seconds() -> float:
    """Get how long after feedback starts the continue key becomes active.

    Environment variable: SKIP_DEBOUNCE_SECONDS
    Default: 0.1
    """
    return float(os.getenv("SKIP_DEBOUNCE_SECONDS", str(SKIP_DEBOUNCE_MS / 1000)))
