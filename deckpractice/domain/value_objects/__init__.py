"""Domain value objects - immutable objects without identity."""

from .card_result import CardResult
from .deck_summary import DeckSummary
from .grade_result import GradeResult
from .practice_phase import CardSide, PracticePhase
from .progress import Progress
from .round_stats import RoundStats

__all__ = [
    "CardResult",
    "CardSide",
    "DeckSummary",
    "GradeResult",
    "PracticePhase",
    "Progress",
    "RoundStats",
]
