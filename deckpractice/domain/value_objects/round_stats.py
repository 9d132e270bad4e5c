"""Round statistics value object."""

from collections.abc import Iterable
from dataclasses import dataclass

from deckpractice.domain.constants import EncouragementMessages
from deckpractice.domain.value_objects.card_result import CardResult


@dataclass(frozen=True)
class RoundStats:
    """Aggregate tallies shown on the summary and completion screens.

    Accuracy is a percentage in [0, 100]; 0 when nothing was attempted.
    """

    correct: int
    incorrect: int

    @classmethod
    def from_results(cls, results: Iterable[CardResult]) -> "RoundStats":
        correct = 0
        incorrect = 0
        for result in results:
            correct += result.correct
            incorrect += result.wrong
        return cls(correct=correct, incorrect=incorrect)

    @property
    def total(self) -> int:
        return self.correct + self.incorrect

    @property
    def accuracy(self) -> float:
        if self.total == 0:
            return 0.0
        return self.correct / self.total * 100

    def encouragement(self) -> str:
        """Completion message for the achieved accuracy."""
        return EncouragementMessages.for_accuracy(self.accuracy)

    def to_dict(self) -> dict:
        return {
            "correct": self.correct,
            "incorrect": self.incorrect,
            "total": self.total,
            "accuracy": self.accuracy,
        }
