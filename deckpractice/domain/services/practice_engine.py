"""Practice engine service for practice session lifecycle management."""

import logging
import random
from collections.abc import Callable, Mapping, Sequence
from types import MappingProxyType

from deckpractice.domain.entities.card import Card
from deckpractice.domain.entities.practice_session import PracticeSession
from deckpractice.domain.services.answer_grader import grade, normalize
from deckpractice.domain.value_objects.grade_result import GradeResult
from deckpractice.domain.value_objects.practice_phase import CardSide, PracticePhase
from deckpractice.domain.value_objects.progress import Progress
from deckpractice.domain.value_objects.round_stats import RoundStats
from deckpractice.ports.card_repository import CardRepository

logger = logging.getLogger(__name__)

SessionListener = Callable[[str, PracticeSession | None], None]


class PracticeEngine:
    """Manages practice sessions, one per deck.

    Responsibilities:
    - Session state machine (all -> summary -> missed -> ... -> done)
    - Grading typed answers and tracking missed cards per round
    - Reconciling sessions with card set changes (rehydration)
    - Notifying listeners after every committed change

    Commands are synchronous and never raise for unknown decks; they are
    no-ops returning an empty result. The engine holds no timers.
    """

    def __init__(
        self,
        card_repository: CardRepository,
        shuffle: bool = True,
        rng: random.Random | None = None,
    ):
        """Initialize practice engine.

        Args:
            card_repository: Port for loading card text
            shuffle: Default for commands that accept a shuffle flag
            rng: Random source for shuffling (seed it for reproducible order)
        """
        self._card_repository = card_repository
        self._shuffle = shuffle
        self._rng = rng or random.Random()
        self._sessions: dict[str, PracticeSession] = {}
        self._listeners: list[SessionListener] = []
        self.active_deck_id: str | None = None

    # =========================================================================
    # Subscriptions
    # =========================================================================

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener called as listener(deck_id, session) after commits.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, deck_id: str, session: PracticeSession | None) -> None:
        """Store the next session value (or remove it) and notify listeners."""
        if session is None:
            self._sessions.pop(deck_id, None)
        else:
            self._sessions[deck_id] = session
        for listener in list(self._listeners):
            listener(deck_id, session)

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def sessions(self) -> Mapping[str, PracticeSession]:
        """Read-only view of sessions keyed by deck id."""
        return MappingProxyType(self._sessions)

    def get_session(self, deck_id: str | None) -> PracticeSession | None:
        if deck_id is None:
            return None
        return self._sessions.get(deck_id)

    def get_active_session(self) -> PracticeSession | None:
        """Get the session of the focused deck, if any."""
        return self.get_session(self.active_deck_id)

    def get_current_card_id(self, deck_id: str | None) -> str | None:
        session = self.get_session(deck_id)
        if session is None:
            return None
        return session.current_card_id

    def get_current_card(self, deck_id: str | None) -> Card | None:
        """Load the card at the cursor of the deck's session."""
        card_id = self.get_current_card_id(deck_id)
        if card_id is None:
            return None
        cards = self._card_repository.load_cards([card_id])
        return cards[0] if cards else None

    def get_expected_answer(self, deck_id: str | None) -> str | None:
        """Answer-side text of the current card, as it reads right now."""
        session = self.get_session(deck_id)
        card = self.get_current_card(deck_id)
        if session is None or card is None:
            return None
        return card.text_for(session.answer_side)

    def get_progress(self, deck_id: str | None) -> Progress | None:
        session = self.get_session(deck_id)
        if session is None:
            return None
        return session.progress()

    def get_round_stats(self, deck_id: str | None) -> RoundStats | None:
        session = self.get_session(deck_id)
        if session is None:
            return None
        return session.round_stats()

    # =========================================================================
    # Commands
    # =========================================================================

    def start_session(
        self,
        deck_id: str,
        card_ids: Sequence[str],
        prompt_side: CardSide = CardSide.FRONT,
        answer_side: CardSide = CardSide.BACK,
        shuffle: bool | None = None,
    ) -> PracticeSession | None:
        """Start a new practice session for a deck.

        Replaces any existing session for the deck and focuses it.

        Args:
            deck_id: Deck to practice
            card_ids: Cards to practice; an empty list is a no-op
            prompt_side: Side shown as the question
            answer_side: Side graded as the answer
            shuffle: Shuffle the queue (engine default when None)

        Returns:
            The new session, or None if card_ids is empty

        Raises:
            ValueError: If prompt_side equals answer_side
        """
        if not card_ids:
            logger.debug(f"Not starting session for deck {deck_id}: no cards")
            return None

        session = PracticeSession.create(
            deck_id,
            card_ids,
            prompt_side=prompt_side,
            answer_side=answer_side,
            shuffle=self._shuffle if shuffle is None else shuffle,
            rng=self._rng,
        )
        self.active_deck_id = deck_id
        self._commit(deck_id, session)

        logger.info(
            f"Started session {session.session_id} for deck {deck_id} "
            f"with {len(session.queue)} cards"
        )
        return session

    def submit_answer(
        self,
        deck_id: str,
        submitted: str,
        card_id: str | None = None,
        expected: str | None = None,
    ) -> GradeResult:
        """Grade and record an answer for the current card, then advance.

        A wrong answer adds the card to the round's missed list once.

        Args:
            deck_id: Deck whose session receives the answer
            submitted: Text typed by the user
            card_id: Card the caller believes is current; a mismatch rejects
                the submission instead of grading a different card
            expected: Answer text to grade against, as it read when the user
                answered; defaults to the card's current answer side

        Returns:
            GradeResult with recorded=True if the session changed
        """
        session = self._session_for_command(deck_id, card_id, "submit_answer")
        if session is None:
            return GradeResult.rejected(normalize(submitted))

        if session.is_retry_pending:
            logger.warning(
                f"Rejected submit_answer for deck {deck_id}: card "
                f"{session.current_card_id} already penalized, awaiting retry"
            )
            return GradeResult.rejected(normalize(submitted))

        current_card_id = session.current_card_id
        if expected is None:
            cards = self._card_repository.load_cards([current_card_id])
            if not cards:
                logger.warning(f"Rejected submit_answer for deck {deck_id}: card {current_card_id} missing")
                return GradeResult.rejected(normalize(submitted))
            expected = cards[0].text_for(session.answer_side)

        result = grade(submitted, expected)
        self._commit(deck_id, session.with_answer(current_card_id, result.is_correct))

        logger.debug(
            f"Deck {deck_id}: card {current_card_id} answered "
            f"{'correctly' if result.is_correct else 'incorrectly'}"
        )
        return GradeResult(is_correct=result.is_correct, normalized=result.normalized, recorded=True)

    def mark_incorrect_without_advancing(self, deck_id: str, card_id: str | None = None) -> bool:
        """Record one wrong answer for the current card and keep it current.

        Repeated calls for the same presentation of a card record nothing.

        Returns:
            True if a penalty was recorded
        """
        session = self._session_for_command(deck_id, card_id, "mark_incorrect_without_advancing")
        if session is None:
            return False

        if session.is_retry_pending:
            logger.debug(f"Deck {deck_id}: card {session.current_card_id} already penalized")
            return False

        self._commit(deck_id, session.with_penalty(session.current_card_id))
        logger.debug(f"Deck {deck_id}: card {session.current_card_id} marked incorrect")
        return True

    def advance_to_next_card(self, deck_id: str, card_id: str | None = None) -> bool:
        """Move past the current card without recording a result.

        Returns:
            True if the cursor moved
        """
        session = self._session_for_command(deck_id, card_id, "advance_to_next_card")
        if session is None:
            return False

        self._commit(deck_id, session.advanced())
        return True

    def start_missed_round(self, deck_id: str) -> PracticePhase | None:
        """Run the round completion check.

        Once the cursor has passed the last card: a round without misses ends
        the session, otherwise the session moves to the summary screen with
        its statistics intact. Does nothing mid-round or outside a round.

        Returns:
            Phase after the check, or None without a session
        """
        session = self.get_session(deck_id)
        if session is None:
            return None

        if not session.phase.accepts_answers() or not session.is_round_complete:
            return session.phase

        finished = session.finished_round()
        self._commit(deck_id, finished)

        logger.info(
            f"Round complete for deck {deck_id}: {len(session.missed_order)} missed, "
            f"phase -> {finished.phase}"
        )
        return finished.phase

    def continue_from_summary(self, deck_id: str, shuffle: bool | None = None) -> PracticePhase | None:
        """Leave the summary screen and start a round over the missed cards.

        Returns:
            Phase after the transition, or None without a session
        """
        session = self.get_session(deck_id)
        if session is None:
            return None

        if session.phase != PracticePhase.SUMMARY:
            logger.warning(f"Ignored continue_from_summary for deck {deck_id} in phase {session.phase}")
            return session.phase

        if not session.missed_order:
            # Missed cards were all removed while the summary was showing
            nxt = session.ended()
        else:
            nxt = session.next_missed_round(
                shuffle=self._shuffle if shuffle is None else shuffle,
                rng=self._rng,
            )
        self._commit(deck_id, nxt)

        logger.info(f"Deck {deck_id}: phase -> {nxt.phase} with {len(nxt.queue)} cards")
        return nxt.phase

    def end_session(self, deck_id: str) -> None:
        """Force the session into DONE, keeping partial statistics."""
        session = self.get_session(deck_id)
        if session is None or session.phase.is_terminal():
            return

        self._commit(deck_id, session.ended())
        logger.info(f"Ended session {session.session_id} for deck {deck_id}")

    def reset_session(self, deck_id: str, card_ids: Sequence[str]) -> PracticeSession | None:
        """Discard the deck's session and start a fresh one ("practice again").

        Returns:
            The new session, or None if card_ids is empty
        """
        if deck_id in self._sessions:
            if self.active_deck_id == deck_id:
                self.active_deck_id = None
            self._commit(deck_id, None)
            logger.debug(f"Discarded session for deck {deck_id}")

        return self.start_session(deck_id, card_ids)

    def rehydrate_session(self, deck_id: str, valid_card_ids: Sequence[str]) -> bool:
        """Reconcile the deck's session with the cards still eligible.

        Filters the queue, missed cards and tallies down to valid_card_ids
        and clamps the cursor. Does not change phase: when the queue ends up
        exhausted the caller runs start_missed_round.

        Returns:
            True if the session changed
        """
        session = self.get_session(deck_id)
        if session is None:
            return False

        refreshed = session.rehydrated(valid_card_ids)
        if refreshed is session:
            return False

        self._commit(deck_id, refreshed)
        logger.info(
            f"Rehydrated deck {deck_id}: queue {len(session.queue)} -> {len(refreshed.queue)}, "
            f"index {session.index} -> {refreshed.index}"
        )
        return True

    def end_all_sessions(self) -> int:
        """End every session that is not already done (for shutdown).

        Returns:
            Number of sessions ended
        """
        ended = 0
        for deck_id, session in list(self._sessions.items()):
            if not session.phase.is_terminal():
                self.end_session(deck_id)
                ended += 1
        return ended

    # =========================================================================
    # Helpers
    # =========================================================================

    def _session_for_command(
        self, deck_id: str, card_id: str | None, command: str
    ) -> PracticeSession | None:
        """Get a session that can act on its current card, or None.

        Rejects commands for missing sessions, inactive phases, exhausted
        rounds, and callers holding a stale card id.
        """
        session = self.get_session(deck_id)
        if session is None:
            return None

        if not session.accepts_answers:
            logger.warning(
                f"Rejected {command} for deck {deck_id}: phase {session.phase}, "
                f"index {session.index}/{len(session.queue)}"
            )
            return None

        if card_id is not None and card_id != session.current_card_id:
            logger.warning(
                f"Rejected {command} for deck {deck_id}: card {card_id} is not current "
                f"({session.current_card_id})"
            )
            return None

        return session
