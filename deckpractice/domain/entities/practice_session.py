"""Practice session entity for the typed-answer practice flow."""

import random
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Self
from uuid import uuid4

from deckpractice.domain.value_objects.card_result import CardResult
from deckpractice.domain.value_objects.practice_phase import CardSide, PracticePhase
from deckpractice.domain.value_objects.progress import Progress
from deckpractice.domain.value_objects.round_stats import RoundStats


def _ordered(card_ids: Iterable[str], shuffle: bool, rng: random.Random) -> tuple[str, ...]:
    ordered = list(card_ids)
    if shuffle:
        rng.shuffle(ordered)
    return tuple(ordered)


@dataclass(frozen=True)
class PracticeSession:
    """Practice session entity.

    Sessions are immutable values: every transition returns a new session,
    so a command either commits a complete next state or nothing at all.

    Attributes:
        deck_id: Deck being practiced
        session_id: Opaque token, regenerated on every fresh start
        prompt_side: Card side shown as the question
        answer_side: Card side graded as the answer
        phase: Current lifecycle phase
        queue: Card ids of the current round
        index: Cursor of the next unanswered card in queue
        missed_order: Cards missed this round, in first-miss order
        missed_set: Same ids as missed_order, for membership checks
        results_by_card_id: Correct/wrong tallies for the current round
        penalized_card_id: Current card when it was marked wrong and is
            waiting for a retry, None otherwise
    """

    deck_id: str
    session_id: str = field(default_factory=lambda: str(uuid4()))
    prompt_side: CardSide = CardSide.FRONT
    answer_side: CardSide = CardSide.BACK
    phase: PracticePhase = PracticePhase.ALL
    queue: tuple[str, ...] = ()
    index: int = 0
    missed_order: tuple[str, ...] = ()
    missed_set: frozenset[str] = frozenset()
    results_by_card_id: Mapping[str, CardResult] = field(default_factory=dict)
    penalized_card_id: str | None = None

    def __post_init__(self) -> None:
        """Validate session invariants."""
        if self.prompt_side == self.answer_side:
            raise ValueError(f"prompt_side and answer_side must differ, both are {self.prompt_side}")
        if not 0 <= self.index <= len(self.queue):
            raise ValueError(f"index {self.index} outside queue of length {len(self.queue)}")
        if len(self.missed_order) != len(self.missed_set) or set(self.missed_order) != self.missed_set:
            raise ValueError("missed_set must contain exactly the ids in missed_order")

    @classmethod
    def create(
        cls,
        deck_id: str,
        card_ids: Iterable[str],
        prompt_side: CardSide = CardSide.FRONT,
        answer_side: CardSide = CardSide.BACK,
        shuffle: bool = True,
        rng: random.Random | None = None,
    ) -> Self:
        """Create a new session at the start of the all-cards round.

        Args:
            deck_id: Deck being practiced
            card_ids: Cards to practice (copied, never mutated)
            prompt_side: Side shown as the question
            answer_side: Side graded as the answer
            shuffle: Whether to shuffle the queue
            rng: Random source for shuffling

        Returns:
            New session in ALL phase
        """
        return cls(
            deck_id=deck_id,
            prompt_side=prompt_side,
            answer_side=answer_side,
            phase=PracticePhase.ALL,
            queue=_ordered(card_ids, shuffle, rng or random.Random()),
        )

    # -------------------------------------------------------------------------
    # Derived state
    # -------------------------------------------------------------------------

    @property
    def current_card_id(self) -> str | None:
        """Card at the cursor, or None once the round is exhausted."""
        if self.index >= len(self.queue):
            return None
        return self.queue[self.index]

    @property
    def is_round_complete(self) -> bool:
        return self.index >= len(self.queue)

    @property
    def accepts_answers(self) -> bool:
        """Whether the current card can be graded."""
        return self.phase.accepts_answers() and not self.is_round_complete

    @property
    def is_retry_pending(self) -> bool:
        """Whether the current card was penalized and awaits a retry."""
        return self.penalized_card_id is not None and self.penalized_card_id == self.current_card_id

    def progress(self) -> Progress:
        return Progress(current=self.index + 1, total=len(self.queue), phase=self.phase)

    def round_stats(self) -> RoundStats:
        return RoundStats.from_results(self.results_by_card_id.values())

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def _tallied(self, card_id: str, is_correct: bool) -> dict:
        """Compute tally and missed-card fields after grading card_id."""
        results = dict(self.results_by_card_id)
        previous = results.get(card_id, CardResult())
        results[card_id] = previous.with_correct() if is_correct else previous.with_wrong()

        missed_order = self.missed_order
        missed_set = self.missed_set
        # A card enters the missed list at most once per round
        if not is_correct and card_id not in missed_set:
            missed_order = (*missed_order, card_id)
            missed_set = missed_set | {card_id}

        return {
            "results_by_card_id": results,
            "missed_order": missed_order,
            "missed_set": missed_set,
        }

    def with_answer(self, card_id: str, is_correct: bool) -> Self:
        """Record a graded answer for card_id and advance the cursor."""
        return replace(
            self,
            index=self.index + 1,
            penalized_card_id=None,
            **self._tallied(card_id, is_correct),
        )

    def with_penalty(self, card_id: str) -> Self:
        """Record a wrong answer for card_id without advancing."""
        return replace(self, penalized_card_id=card_id, **self._tallied(card_id, False))

    def advanced(self) -> Self:
        """Move the cursor forward without touching tallies."""
        return replace(self, index=self.index + 1, penalized_card_id=None)

    def finished_round(self) -> Self:
        """Close the round: DONE if nothing was missed, otherwise SUMMARY."""
        if not self.missed_order:
            return replace(self, phase=PracticePhase.DONE, penalized_card_id=None)
        return replace(self, phase=PracticePhase.SUMMARY, penalized_card_id=None)

    def next_missed_round(self, shuffle: bool = True, rng: random.Random | None = None) -> Self:
        """Start a round over the cards missed in the previous one."""
        return replace(
            self,
            phase=PracticePhase.MISSED,
            queue=_ordered(self.missed_order, shuffle, rng or random.Random()),
            index=0,
            missed_order=(),
            missed_set=frozenset(),
            results_by_card_id={},
            penalized_card_id=None,
        )

    def ended(self) -> Self:
        """Force the terminal phase, keeping partial statistics."""
        return replace(self, phase=PracticePhase.DONE, penalized_card_id=None)

    def rehydrated(self, valid_card_ids: Iterable[str]) -> Self:
        """Drop every card id not in valid_card_ids.

        Relative order of the retained ids is preserved. The cursor is
        clamped to the shortened queue, which may leave the round complete.
        Returns self unchanged when no field would change.
        """
        valid = set(valid_card_ids)

        queue = tuple(card_id for card_id in self.queue if card_id in valid)
        missed_order = tuple(card_id for card_id in self.missed_order if card_id in valid)
        results = {
            card_id: result
            for card_id, result in self.results_by_card_id.items()
            if card_id in valid
        }
        index = min(self.index, len(queue))

        if (
            queue == self.queue
            and missed_order == self.missed_order
            and results == dict(self.results_by_card_id)
            and index == self.index
        ):
            return self

        current_card_id = queue[index] if index < len(queue) else None
        penalized_card_id = (
            self.penalized_card_id if self.penalized_card_id == current_card_id else None
        )

        return replace(
            self,
            queue=queue,
            index=index,
            missed_order=missed_order,
            missed_set=frozenset(missed_order),
            results_by_card_id=results,
            penalized_card_id=penalized_card_id,
        )
