"""Deck and card management API routes."""

from fastapi import APIRouter, HTTPException, Response, status
from pydantic import BaseModel, Field

from deckpractice.adapters.local_deck_store import CardNotFoundError, DeckNotFoundError
from deckpractice.api.dependencies import DeckStoreDep
from deckpractice.api.errors import ErrorResponse, not_found
from deckpractice.domain.entities.card import Card

router = APIRouter(prefix="/api/decks", tags=["decks"])


# =============================================================================
# Request/Response Models
# =============================================================================


class DeckInfo(BaseModel):
    """Deck with card count."""

    id: str
    name: str
    card_count: int
    pinned: bool


class DecksResponse(BaseModel):
    """Response for deck listing."""

    decks: list[DeckInfo]


class CardResponse(BaseModel):
    """Card in API response."""

    id: str
    front: str
    back: str


class DeckCardsResponse(BaseModel):
    """Deck with its cards in deck order."""

    id: str
    name: str
    cards: list[CardResponse]


class CreateCardRequest(BaseModel):
    """Request body for adding a card."""

    front: str = Field(..., min_length=1)
    back: str = Field(..., min_length=1)


class UpdateCardRequest(BaseModel):
    """Request body for editing a card; omitted sides are unchanged."""

    front: str | None = None
    back: str | None = None


def _card_response(card: Card) -> CardResponse:
    return CardResponse(id=card.id, front=card.front, back=card.back)


def _deck_not_found(deck_id: str) -> HTTPException:
    return not_found("DECK_NOT_FOUND", f"Deck {deck_id} not found")


def _card_not_found(deck_id: str, card_id: str) -> HTTPException:
    return not_found(
        "CARD_NOT_FOUND",
        f"Card {card_id} not found",
        details={"deck_id": deck_id},
    )


# =============================================================================
# Routes
# =============================================================================


@router.get("", response_model=DecksResponse)
async def list_decks(deck_store: DeckStoreDep) -> DecksResponse:
    """List all decks with card counts, pinned decks first."""
    return DecksResponse(
        decks=[
            DeckInfo(
                id=summary.id,
                name=summary.name,
                card_count=summary.card_count,
                pinned=summary.pinned,
            )
            for summary in deck_store.list_decks()
        ]
    )


@router.get(
    "/{deck_id}",
    response_model=DeckCardsResponse,
    responses={404: {"model": ErrorResponse, "description": "Deck not found"}},
)
async def get_deck(deck_id: str, deck_store: DeckStoreDep) -> DeckCardsResponse:
    """Get a deck with its cards."""
    try:
        deck = deck_store.get_deck(deck_id)
    except DeckNotFoundError:
        raise _deck_not_found(deck_id) from None

    cards = deck_store.load_cards(deck_store.get_card_ids(deck_id))
    return DeckCardsResponse(
        id=deck.id,
        name=deck.name,
        cards=[_card_response(card) for card in cards],
    )


@router.post(
    "/{deck_id}/cards",
    response_model=CardResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse, "description": "Deck not found"}},
)
async def add_card(deck_id: str, request: CreateCardRequest, deck_store: DeckStoreDep) -> CardResponse:
    """Add a card at the end of a deck."""
    try:
        card = deck_store.add_card(deck_id, front=request.front, back=request.back)
    except DeckNotFoundError:
        raise _deck_not_found(deck_id) from None
    return _card_response(card)


@router.put(
    "/{deck_id}/cards/{card_id}",
    response_model=CardResponse,
    responses={404: {"model": ErrorResponse, "description": "Deck or card not found"}},
)
async def update_card(
    deck_id: str,
    card_id: str,
    request: UpdateCardRequest,
    deck_store: DeckStoreDep,
) -> CardResponse:
    """Edit a card's text.

    Live practice sessions keep their place; only the grading text changes.
    """
    if card_id not in deck_store.get_card_ids(deck_id):
        raise _card_not_found(deck_id, card_id)

    try:
        card = deck_store.update_card(card_id, front=request.front, back=request.back)
    except CardNotFoundError:
        raise _card_not_found(deck_id, card_id) from None
    return _card_response(card)


@router.delete(
    "/{deck_id}/cards/{card_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse, "description": "Deck or card not found"}},
)
async def delete_card(deck_id: str, card_id: str, deck_store: DeckStoreDep) -> Response:
    """Delete a card.

    Live practice sessions drop the card from their queue and missed list.
    """
    if card_id not in deck_store.get_card_ids(deck_id):
        raise _card_not_found(deck_id, card_id)

    try:
        deck_store.delete_card(card_id)
    except CardNotFoundError:
        raise _card_not_found(deck_id, card_id) from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)
