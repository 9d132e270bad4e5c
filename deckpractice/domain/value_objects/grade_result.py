"""Grade result value object."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GradeResult:
    """Outcome of grading a typed answer.

    Attributes:
        is_correct: Whether the normalized submission matched the answer
        normalized: Normalized form of the submission
        recorded: Whether the grade was committed to the session
    """

    is_correct: bool
    normalized: str
    recorded: bool = False

    @classmethod
    def rejected(cls, normalized: str = "") -> "GradeResult":
        """Result for a submission the session did not accept."""
        return cls(is_correct=False, normalized=normalized, recorded=False)
