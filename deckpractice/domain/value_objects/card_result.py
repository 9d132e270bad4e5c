"""Per-card answer tally value object."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CardResult:
    """Correct/wrong counts for one card within a round."""

    correct: int = 0
    wrong: int = 0

    def with_correct(self) -> "CardResult":
        return CardResult(correct=self.correct + 1, wrong=self.wrong)

    def with_wrong(self) -> "CardResult":
        return CardResult(correct=self.correct, wrong=self.wrong + 1)

    def to_dict(self) -> dict[str, int]:
        return {"correct": self.correct, "wrong": self.wrong}
