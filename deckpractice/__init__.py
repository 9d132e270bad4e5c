"""Deck practice engine: typed-answer flashcard practice sessions."""

__version__ = "0.1.0"
