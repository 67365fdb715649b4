"""
In-memory card store.

Owns the authoritative, insertion-ordered list of cards and the counter
that hands out new IDs. Every other layer works on the immutable records
returned from here.

INVARIANTS:
- IDs are unique among live cards and never reused, even after deletion
- created_at never changes; updated_at strictly increases on each update
- Mutations run under a single lock
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from datetime import datetime, timedelta
from threading import Lock
from typing import TypedDict

from cardcollection.models.card import CARD_FIELDS, Card, utc_now


class SeedCard(TypedDict):
    id: int
    suit: str
    value: str
    collection: str


DEFAULT_SEED: tuple[SeedCard, ...] = (
    {"id": 171836785992, "suit": "diamonds", "value": "queen", "collection": "royal"},
    {"id": 171836785993, "suit": "hearts", "value": "king", "collection": "royal"},
    {"id": 171836785994, "suit": "clubs", "value": "ace", "collection": "classic"},
    {"id": 171836785995, "suit": "spades", "value": "jack", "collection": "classic"},
)

# Counter start when the store is seeded with nothing
FIRST_ID = 1

# Smallest step applied when the clock has not moved since the last write
_TICK = timedelta(microseconds=1)


class CardStore:
    """
    Ordered in-memory collection of cards.

    Performs no validation; callers are responsible for passing clean data.

    Args:
        seed: Initial records. IDs start above the largest seeded ID.
        clock: Source of the current time, injectable for tests.
    """

    def __init__(
        self,
        seed: Iterable[SeedCard] = DEFAULT_SEED,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._clock = clock
        self._lock = Lock()

        now = clock()
        self._cards: list[Card] = [
            Card(
                id=entry["id"],
                suit=entry["suit"],
                value=entry["value"],
                collection=entry["collection"],
                created_at=now,
                updated_at=now,
            )
            for entry in seed
        ]
        self._next_id = max((card.id for card in self._cards), default=FIRST_ID - 1) + 1

    @property
    def next_id(self) -> int:
        """ID the next insert will receive."""
        return self._next_id

    def _index_of(self, card_id: int) -> int | None:
        for index, card in enumerate(self._cards):
            if card.id == card_id:
                return index
        return None

    def get_all(self) -> list[Card]:
        """Snapshot of all cards in insertion order."""
        with self._lock:
            return list(self._cards)

    def get_by_id(self, card_id: int) -> Card | None:
        """Return the card with this ID, or None."""
        with self._lock:
            index = self._index_of(card_id)
            return None if index is None else self._cards[index]

    def insert(self, fields: Mapping[str, str]) -> Card:
        """
        Append a new card and return it.

        Assigns the next ID and stamps both timestamps with the same instant.
        """
        with self._lock:
            now = self._clock()
            card = Card(
                id=self._next_id,
                suit=fields["suit"],
                value=fields["value"],
                collection=fields["collection"],
                created_at=now,
                updated_at=now,
            )
            self._next_id += 1
            self._cards.append(card)
            return card

    def update(self, card_id: int, changes: Mapping[str, str]) -> Card | None:
        """
        Merge the given fields into a card.

        Only suit, value and collection are applied; anything else in
        ``changes`` is ignored. Returns None if no card has this ID.
        """
        with self._lock:
            index = self._index_of(card_id)
            if index is None:
                return None

            current = self._cards[index]
            updated_at = max(self._clock(), current.updated_at + _TICK)
            applied = {name: changes[name] for name in CARD_FIELDS if name in changes}

            card = replace(current, **applied, updated_at=updated_at)
            self._cards[index] = card
            return card

    def delete(self, card_id: int) -> bool:
        """Remove a card. Returns True if one was removed."""
        with self._lock:
            index = self._index_of(card_id)
            if index is None:
                return False
            del self._cards[index]
            return True

    def count(self) -> int:
        """Number of stored cards."""
        with self._lock:
            return len(self._cards)
