"""Card entity representing a flashcard."""

from dataclasses import dataclass
from datetime import datetime

from deckpractice.domain.value_objects.practice_phase import CardSide


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value)


@dataclass(frozen=True)
class Card:
    """Flashcard entity.

    Attributes:
        id: Unique card identifier
        front: Front side text
        back: Back side text
        created_at: When the card was created (optional for older data)
        updated_at: When the card was last edited (optional for older data)
    """

    id: str
    front: str
    back: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def text_for(self, side: CardSide) -> str:
        """Get the text shown on one side of the card."""
        return self.front if side == CardSide.FRONT else self.back

    @classmethod
    def from_dict(cls, data: dict) -> "Card":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            front=data.get("front", ""),
            back=data.get("back", ""),
            created_at=_parse_timestamp(data.get("created_at")),
            updated_at=_parse_timestamp(data.get("updated_at")),
        )
