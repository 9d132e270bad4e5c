"""Practice phase and card side value objects."""

from enum import StrEnum


class PracticePhase(StrEnum):
    """Practice session lifecycle phases.

    State machine:
        ALL -> SUMMARY -> MISSED -> SUMMARY -> MISSED ...
         |                  |
         v                  v
        DONE   <-------   DONE

    States:
        ALL: Practicing the full card set
        MISSED: Practicing only cards missed in the previous round
        SUMMARY: Stats screen between rounds
        DONE: Terminal, session still addressable and restartable
    """

    ALL = "all"
    MISSED = "missed"
    SUMMARY = "summary"
    DONE = "done"

    def accepts_answers(self) -> bool:
        """Check if answers can be graded in this phase."""
        return self in (PracticePhase.ALL, PracticePhase.MISSED)

    def is_terminal(self) -> bool:
        """Check if session is in the terminal phase."""
        return self == PracticePhase.DONE


class CardSide(StrEnum):
    """Card field used as prompt or answer."""

    FRONT = "front"
    BACK = "back"
