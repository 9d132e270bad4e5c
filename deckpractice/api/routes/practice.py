"""Practice session API routes.

Thin HTTP surface over PracticeEngine commands. The feedback delay and
retry bookkeeping belong to the client; every command here applies
immediately and returns the resulting practice view.
"""

import logging

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from deckpractice.adapters.local_deck_store import DeckNotFoundError, LocalDeckStore
from deckpractice.api.dependencies import DeckStoreDep, PracticeEngineDep
from deckpractice.api.errors import ErrorResponse, not_found
from deckpractice.controllers.practice_controller import PracticeScreen
from deckpractice.domain.entities.practice_session import PracticeSession
from deckpractice.domain.services.practice_engine import PracticeEngine
from deckpractice.domain.value_objects.practice_phase import CardSide

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/practice", tags=["practice"])


# =============================================================================
# Request/Response Models
# =============================================================================


class StartPracticeRequest(BaseModel):
    """Request body for starting a session."""

    prompt_side: CardSide = CardSide.FRONT
    answer_side: CardSide = CardSide.BACK
    shuffle: bool | None = None
    card_ids: list[str] | None = None  # Defaults to the deck's cards


class SubmitAnswerRequest(BaseModel):
    """Request body for answering the current card."""

    answer: str
    card_id: str | None = None


class CardCommandRequest(BaseModel):
    """Request body for commands acting on the current card."""

    card_id: str | None = None


class ContinueRequest(BaseModel):
    """Request body for leaving the summary screen."""

    shuffle: bool | None = None


class RehydrateRequest(BaseModel):
    """Request body for rehydration."""

    valid_card_ids: list[str] | None = None  # Defaults to the deck's cards


class ProgressResponse(BaseModel):
    """Position within the current round."""

    current: int
    total: int
    phase: str


class StatsResponse(BaseModel):
    """Round statistics."""

    correct: int
    incorrect: int
    total: int
    accuracy: float
    encouragement: str


class CardResultResponse(BaseModel):
    """Per-card tally."""

    correct: int
    wrong: int


class SessionResponse(BaseModel):
    """Session snapshot."""

    session_id: str
    deck_id: str
    phase: str
    prompt_side: str
    answer_side: str
    queue: list[str]
    index: int
    missed_order: list[str]
    results_by_card_id: dict[str, CardResultResponse]
    retry_pending: bool


class CurrentCardResponse(BaseModel):
    """Card on screen; the answer side is never included."""

    id: str
    prompt: str


class PracticeViewResponse(BaseModel):
    """Everything a client needs to render a deck's practice screen."""

    deck_id: str
    screen: str
    available_cards: int
    session: SessionResponse | None = None
    progress: ProgressResponse | None = None
    current_card: CurrentCardResponse | None = None
    stats: StatsResponse | None = None
    missed_count: int = 0


class AnswerResponse(BaseModel):
    """Response for an answer submission."""

    is_correct: bool
    normalized: str
    recorded: bool
    view: PracticeViewResponse


class CommandResponse(BaseModel):
    """Response for commands reporting whether they applied."""

    applied: bool
    view: PracticeViewResponse


# =============================================================================
# Helpers
# =============================================================================


def _session_response(session: PracticeSession) -> SessionResponse:
    return SessionResponse(
        session_id=session.session_id,
        deck_id=session.deck_id,
        phase=session.phase.value,
        prompt_side=session.prompt_side.value,
        answer_side=session.answer_side.value,
        queue=list(session.queue),
        index=session.index,
        missed_order=list(session.missed_order),
        results_by_card_id={
            card_id: CardResultResponse(**result.to_dict())
            for card_id, result in session.results_by_card_id.items()
        },
        retry_pending=session.is_retry_pending,
    )


def build_view(deck_id: str, engine: PracticeEngine, deck_store: LocalDeckStore) -> PracticeViewResponse:
    """Build the practice view for a deck from engine state."""
    session = engine.get_session(deck_id)
    view = PracticeViewResponse(
        deck_id=deck_id,
        screen=PracticeScreen.for_session(session).value,
        available_cards=len(deck_store.get_card_ids(deck_id)),
    )
    if session is None:
        return view

    progress = session.progress()
    stats = session.round_stats()
    view.session = _session_response(session)
    view.progress = ProgressResponse(**progress.to_dict())
    view.stats = StatsResponse(**stats.to_dict(), encouragement=stats.encouragement())
    view.missed_count = len(session.missed_order)

    card = engine.get_current_card(deck_id)
    if card is not None:
        view.current_card = CurrentCardResponse(id=card.id, prompt=card.text_for(session.prompt_side))
    return view


def _require_deck(deck_id: str, deck_store: LocalDeckStore) -> None:
    try:
        deck_store.get_deck(deck_id)
    except DeckNotFoundError:
        raise not_found("DECK_NOT_FOUND", f"Deck {deck_id} not found") from None


def _require_session(deck_id: str, engine: PracticeEngine) -> PracticeSession:
    session = engine.get_session(deck_id)
    if session is None:
        raise not_found("SESSION_NOT_FOUND", f"No practice session for deck {deck_id}")
    return session


_SESSION_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Session not found"}}


# =============================================================================
# Routes
# =============================================================================


@router.get(
    "/{deck_id}",
    response_model=PracticeViewResponse,
    responses={404: {"model": ErrorResponse, "description": "Deck not found"}},
)
async def get_practice_view(
    deck_id: str,
    engine: PracticeEngineDep,
    deck_store: DeckStoreDep,
) -> PracticeViewResponse:
    """Get the practice screen state for a deck."""
    _require_deck(deck_id, deck_store)
    return build_view(deck_id, engine, deck_store)


@router.post(
    "/{deck_id}/start",
    response_model=PracticeViewResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid card sides or cards outside the deck"},
        404: {"model": ErrorResponse, "description": "Deck not found"},
    },
)
async def start_practice(
    deck_id: str,
    request: StartPracticeRequest,
    engine: PracticeEngineDep,
    deck_store: DeckStoreDep,
) -> PracticeViewResponse:
    """Start a practice session.

    Starting without cards leaves the deck on the start screen.
    """
    _require_deck(deck_id, deck_store)
    deck_card_ids = deck_store.get_card_ids(deck_id)
    card_ids = request.card_ids if request.card_ids is not None else deck_card_ids

    unknown = sorted(set(card_ids) - set(deck_card_ids))
    if unknown:
        logger.warning(f"Rejected start for deck {deck_id}: {len(unknown)} card(s) not in deck")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": {
                    "code": "UNKNOWN_CARDS",
                    "message": f"Cards not in deck {deck_id}",
                    "details": {"card_ids": unknown},
                }
            },
        )

    try:
        engine.start_session(
            deck_id,
            card_ids,
            prompt_side=request.prompt_side,
            answer_side=request.answer_side,
            shuffle=request.shuffle,
        )
    except ValueError as e:
        logger.warning(f"Rejected start for deck {deck_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": {"code": "INVALID_SIDES", "message": str(e)}},
        ) from None

    return build_view(deck_id, engine, deck_store)


@router.post("/{deck_id}/answer", response_model=AnswerResponse, responses=_SESSION_NOT_FOUND)
async def submit_answer(
    deck_id: str,
    request: SubmitAnswerRequest,
    engine: PracticeEngineDep,
    deck_store: DeckStoreDep,
) -> AnswerResponse:
    """Grade and record an answer for the current card, then advance."""
    _require_session(deck_id, engine)
    result = engine.submit_answer(deck_id, request.answer, card_id=request.card_id)
    return AnswerResponse(
        is_correct=result.is_correct,
        normalized=result.normalized,
        recorded=result.recorded,
        view=build_view(deck_id, engine, deck_store),
    )


@router.post("/{deck_id}/mark-incorrect", response_model=CommandResponse, responses=_SESSION_NOT_FOUND)
async def mark_incorrect(
    deck_id: str,
    request: CardCommandRequest,
    engine: PracticeEngineDep,
    deck_store: DeckStoreDep,
) -> CommandResponse:
    """Record a wrong answer for the current card without advancing."""
    _require_session(deck_id, engine)
    applied = engine.mark_incorrect_without_advancing(deck_id, card_id=request.card_id)
    return CommandResponse(applied=applied, view=build_view(deck_id, engine, deck_store))


@router.post("/{deck_id}/advance", response_model=CommandResponse, responses=_SESSION_NOT_FOUND)
async def advance(
    deck_id: str,
    request: CardCommandRequest,
    engine: PracticeEngineDep,
    deck_store: DeckStoreDep,
) -> CommandResponse:
    """Move past the current card without recording a result."""
    _require_session(deck_id, engine)
    applied = engine.advance_to_next_card(deck_id, card_id=request.card_id)
    return CommandResponse(applied=applied, view=build_view(deck_id, engine, deck_store))


@router.post("/{deck_id}/complete-round", response_model=CommandResponse, responses=_SESSION_NOT_FOUND)
async def complete_round(
    deck_id: str,
    engine: PracticeEngineDep,
    deck_store: DeckStoreDep,
) -> CommandResponse:
    """Run the round completion check (summary or done)."""
    before = _require_session(deck_id, engine)
    phase = engine.start_missed_round(deck_id)
    return CommandResponse(applied=phase != before.phase, view=build_view(deck_id, engine, deck_store))


@router.post("/{deck_id}/continue", response_model=CommandResponse, responses=_SESSION_NOT_FOUND)
async def continue_from_summary(
    deck_id: str,
    request: ContinueRequest,
    engine: PracticeEngineDep,
    deck_store: DeckStoreDep,
) -> CommandResponse:
    """Start the missed-cards round from the summary screen."""
    before = _require_session(deck_id, engine)
    engine.continue_from_summary(deck_id, shuffle=request.shuffle)
    applied = engine.get_session(deck_id) is not before
    return CommandResponse(applied=applied, view=build_view(deck_id, engine, deck_store))


@router.post(
    "/{deck_id}/reset",
    response_model=PracticeViewResponse,
    responses={404: {"model": ErrorResponse, "description": "Deck not found"}},
)
async def reset_practice(
    deck_id: str,
    engine: PracticeEngineDep,
    deck_store: DeckStoreDep,
) -> PracticeViewResponse:
    """Discard the session and practice the deck's cards again."""
    _require_deck(deck_id, deck_store)
    engine.reset_session(deck_id, deck_store.get_card_ids(deck_id))
    return build_view(deck_id, engine, deck_store)


@router.post("/{deck_id}/end", response_model=PracticeViewResponse, responses=_SESSION_NOT_FOUND)
async def end_practice(
    deck_id: str,
    engine: PracticeEngineDep,
    deck_store: DeckStoreDep,
) -> PracticeViewResponse:
    """End the session, keeping its statistics for the completion screen."""
    _require_session(deck_id, engine)
    engine.end_session(deck_id)
    return build_view(deck_id, engine, deck_store)


@router.post("/{deck_id}/rehydrate", response_model=CommandResponse, responses=_SESSION_NOT_FOUND)
async def rehydrate(
    deck_id: str,
    request: RehydrateRequest,
    engine: PracticeEngineDep,
    deck_store: DeckStoreDep,
) -> CommandResponse:
    """Narrow the session to a card set, e.g. after a search filter changed."""
    _require_session(deck_id, engine)
    valid_card_ids = (
        request.valid_card_ids
        if request.valid_card_ids is not None
        else deck_store.get_card_ids(deck_id)
    )
    changed = engine.rehydrate_session(deck_id, valid_card_ids)
    return CommandResponse(applied=changed, view=build_view(deck_id, engine, deck_store))
