"""
Practice Controller.

Client-side sequencing for one deck's practice screen: local answer state,
the retry protocol, and the feedback delay. Every session change goes
through PracticeEngine commands; the controller owns only UI state.

Retry protocol per card presentation:
1. First attempt correct -> feedback, then submit_answer (tally + advance)
2. First attempt wrong -> mark_incorrect_without_advancing, offer retry/skip
3. Retry (right or wrong) -> feedback, then advance_to_next_card (no tally)
4. Skip after a wrong attempt -> advance_to_next_card immediately

After any move the round completion check runs.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from deckpractice.controllers.feedback_timer import FeedbackTimer
from deckpractice.domain.entities.practice_session import PracticeSession
from deckpractice.domain.services.answer_grader import grade
from deckpractice.domain.services.practice_engine import PracticeEngine
from deckpractice.domain.value_objects.grade_result import GradeResult
from deckpractice.domain.value_objects.practice_phase import PracticePhase

logger = logging.getLogger(__name__)


class PracticeScreen(str, Enum):
    """Screen rendered for a deck's practice state."""

    START = "start"  # No session yet
    PRACTICE = "practice"  # Answering cards (all or missed round)
    SUMMARY = "summary"  # Stats between rounds
    COMPLETE = "complete"  # Session done

    @classmethod
    def for_session(cls, session: PracticeSession | None) -> "PracticeScreen":
        if session is None:
            return cls.START
        if session.phase == PracticePhase.DONE:
            return cls.COMPLETE
        if session.phase == PracticePhase.SUMMARY:
            return cls.SUMMARY
        return cls.PRACTICE


@dataclass
class AnswerState:
    """Local state for the card currently on screen."""

    answer: str = ""
    is_submitted: bool = False
    was_correct: bool | None = None
    is_retrying: bool = False
    showing_feedback: bool = False
    penalized: bool = False

    @property
    def awaiting_retry_choice(self) -> bool:
        """Wrong first attempt: user chooses between retry and skip."""
        return self.was_correct is False and not self.is_retrying and not self.showing_feedback


class PracticeController:
    """Drives one deck's practice screen on top of a PracticeEngine.

    Local state is reset whenever the identity of the current card changes,
    including changes caused elsewhere (rehydration after a card edit or
    delete). A pending feedback callback is cancelled at the same time so it
    can never act on a card that is no longer current.
    """

    def __init__(
        self,
        engine: PracticeEngine,
        deck_id: str,
        timer: FeedbackTimer | None = None,
    ) -> None:
        self._engine = engine
        self.deck_id = deck_id
        self._timer = timer or FeedbackTimer()
        self.state = AnswerState()
        self._presentation = self._current_presentation()
        self._unsubscribe = engine.subscribe(self._on_session_changed)

    # =========================================================================
    # Read-only views
    # =========================================================================

    @property
    def session(self) -> PracticeSession | None:
        return self._engine.get_session(self.deck_id)

    @property
    def screen(self) -> PracticeScreen:
        return PracticeScreen.for_session(self.session)

    @property
    def current_card_id(self) -> str | None:
        return self._presentation[1]

    @property
    def feedback_pending(self) -> bool:
        return self._timer.is_pending

    # =========================================================================
    # Card identity tracking
    # =========================================================================

    def _current_presentation(self) -> tuple[str | None, str | None]:
        session = self.session
        if session is None:
            return None, None
        return session.session_id, session.current_card_id

    def _on_session_changed(self, deck_id: str, session: PracticeSession | None) -> None:
        if deck_id == self.deck_id:
            self.sync()

    def sync(self) -> bool:
        """Reset local state if the current card is no longer the one shown.

        Returns:
            True if the card changed
        """
        presentation = self._current_presentation()
        if presentation == self._presentation:
            return False

        if self._timer.is_pending:
            logger.debug(f"Deck {self.deck_id}: current card changed, dropping pending feedback")
        self._timer.cancel()
        self._presentation = presentation
        self.state = AnswerState()
        return True

    # =========================================================================
    # Start / summary / completion screens
    # =========================================================================

    def start(self, card_ids: Sequence[str]) -> PracticeSession | None:
        """Start practicing; ignored when there are no cards."""
        return self._engine.start_session(self.deck_id, card_ids)

    def continue_round(self) -> PracticePhase | None:
        """Leave the summary screen."""
        return self._engine.continue_from_summary(self.deck_id)

    def practice_again(self, card_ids: Sequence[str]) -> PracticeSession | None:
        """Restart from the completion screen."""
        return self._engine.reset_session(self.deck_id, card_ids)

    # =========================================================================
    # Active practice
    # =========================================================================

    def submit(self, text: str) -> GradeResult | None:
        """Handle the user submitting an answer.

        Blank input, a second submission of the same attempt, and input
        while feedback is showing are ignored.

        Returns:
            Local grade of the attempt, or None if ignored
        """
        state = self.state
        if not text.strip() or state.showing_feedback:
            return None
        if state.is_submitted and not state.is_retrying:
            return None

        session = self.session
        if session is None or not session.accepts_answers:
            return None
        card_id = session.current_card_id
        expected = self._engine.get_expected_answer(self.deck_id)
        if expected is None:
            return None

        result = grade(text, expected)
        state.answer = text
        state.is_submitted = True
        state.was_correct = result.is_correct

        if state.is_retrying:
            # Already penalized once; a retry never adds another tally
            self._show_feedback(card_id, submitted=None)
        elif result.is_correct:
            # Commit against the text the user was graded on, not a later edit
            self._show_feedback(card_id, submitted=text, expected=expected)
        else:
            self._engine.mark_incorrect_without_advancing(self.deck_id, card_id)
            state.penalized = True

        logger.debug(
            "Answer submitted",
            extra={
                "deck_id": self.deck_id,
                "card_id": card_id,
                "is_correct": result.is_correct,
                "retry": state.is_retrying,
            },
        )
        return result

    def retry(self) -> bool:
        """Clear the wrong answer so the user can try the same card again."""
        if not self.state.awaiting_retry_choice:
            return False

        self.state.answer = ""
        self.state.is_submitted = False
        self.state.was_correct = None
        self.state.is_retrying = True
        return True

    def skip(self) -> bool:
        """Give up on a wrongly answered card and move on immediately."""
        if not self.state.awaiting_retry_choice:
            return False
        return self._move_on(self.current_card_id, submitted=None)

    def press_continue(self) -> bool:
        """Skip the remaining feedback delay (continue key).

        Ignored until the debounce window after the feedback started has
        passed.

        Returns:
            True if the card moved on
        """
        if not self.state.showing_feedback:
            return False
        return self._timer.skip()

    def end(self) -> None:
        """End the session from the practice screen."""
        self._timer.cancel()
        self._engine.end_session(self.deck_id)

    def close(self) -> None:
        """Detach from the engine; pending feedback is dropped."""
        self._timer.cancel()
        self._unsubscribe()

    # =========================================================================
    # Helpers
    # =========================================================================

    def _show_feedback(
        self, card_id: str | None, submitted: str | None, expected: str | None = None
    ) -> None:
        self.state.showing_feedback = True
        self._timer.start(lambda: self._move_on(card_id, submitted, expected))

    def _move_on(
        self, card_id: str | None, submitted: str | None, expected: str | None = None
    ) -> bool:
        """Commit the card's outcome, then run the round completion check."""
        self.state.showing_feedback = False

        if submitted is not None:
            moved = self._engine.submit_answer(
                self.deck_id, submitted, card_id=card_id, expected=expected
            ).recorded
        else:
            moved = self._engine.advance_to_next_card(self.deck_id, card_id=card_id)

        if moved:
            self._engine.start_missed_round(self.deck_id)
        return moved
