from dataclasses import dataclass
from datetime import UTC, datetime

# Fields a client may set on a card
CARD_FIELDS: tuple[str, ...] = ("suit", "value", "collection")


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class Card:
    """
    A stored card record.

    Records are immutable; the store swaps in a new record on update.

    Attributes:
        id: Unique identifier, assigned by the store and never reused
        suit: Card suit (e.g., "hearts")
        value: Card value (e.g., "queen", "10")
        collection: Free-text grouping label (e.g., "royal")
        created_at: When the card was inserted
        updated_at: When the card was last changed
    """

    id: int
    suit: str
    value: str
    collection: str
    created_at: datetime
    updated_at: datetime
