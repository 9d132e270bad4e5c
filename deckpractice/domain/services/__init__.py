"""Domain services - orchestration and business logic."""

from .answer_grader import grade, normalize
from .practice_engine import PracticeEngine, SessionListener
from .practice_sync import PracticeSync

__all__ = [
    "PracticeEngine",
    "PracticeSync",
    "SessionListener",
    "grade",
    "normalize",
]
