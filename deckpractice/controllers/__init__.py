"""Client-side practice flow: feedback timing and retry sequencing."""

from .feedback_timer import FeedbackTimer
from .practice_controller import AnswerState, PracticeController, PracticeScreen

__all__ = [
    "AnswerState",
    "FeedbackTimer",
    "PracticeController",
    "PracticeScreen",
]
