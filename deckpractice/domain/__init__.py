# Domain layer - Business logic (NO external dependencies)

from .entities import Card, Deck, PracticeSession
from .value_objects import (
    CardResult,
    CardSide,
    GradeResult,
    PracticePhase,
    Progress,
    RoundStats,
)

__all__ = [
    "Card",
    "CardResult",
    "CardSide",
    "Deck",
    "GradeResult",
    "PracticePhase",
    "PracticeSession",
    "Progress",
    "RoundStats",
]
