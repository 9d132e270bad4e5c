"""Deck entity."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from deckpractice.domain.value_objects.deck_summary import DeckSummary


@dataclass
class Deck:
    """Named, ordered collection of card ids.

    Attributes:
        id: Unique deck identifier
        name: Display name
        card_ids: Card ids in deck order
        pinned: Whether the deck is pinned in listings
        created_at: Creation timestamp
        updated_at: Last modification (cards added, removed or edited)
        last_opened_at: Last time the deck was opened
    """

    id: str
    name: str
    card_ids: list[str] = field(default_factory=list)
    pinned: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    last_opened_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def touch(self) -> None:
        """Update modification timestamp."""
        self.updated_at = datetime.now(UTC)

    def summary(self) -> DeckSummary:
        return DeckSummary(
            id=self.id,
            name=self.name,
            card_count=len(self.card_ids),
            pinned=self.pinned,
        )

    @classmethod
    def from_dict(cls, data: dict) -> "Deck":
        """Create from dictionary."""
        now = datetime.now(UTC)
        return cls(
            id=data["id"],
            name=data["name"],
            card_ids=list(data.get("card_ids", [])),
            pinned=data.get("pinned", False),
            created_at=datetime.fromisoformat(data["created_at"]) if "created_at" in data else now,
            updated_at=datetime.fromisoformat(data["updated_at"]) if "updated_at" in data else now,
            last_opened_at=(
                datetime.fromisoformat(data["last_opened_at"]) if "last_opened_at" in data else now
            ),
        )
