"""Practice progress value object."""

from dataclasses import dataclass

from deckpractice.domain.value_objects.practice_phase import PracticePhase


@dataclass(frozen=True)
class Progress:
    """Position of the user within the current round.

    Attributes:
        current: One-based position of the next unanswered card
        total: Number of cards in the current round
        phase: Session phase
    """

    current: int
    total: int
    phase: PracticePhase

    def to_dict(self) -> dict:
        return {"current": self.current, "total": self.total, "phase": self.phase.value}
