"""
Card service.

Sits between the HTTP layer and the store: adds pagination and logging,
and otherwise hands store results back unchanged.
"""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass

from cardcollection.db.store import CardStore
from cardcollection.models.card import Card

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PageRef:
    """Pointer to a neighbouring page."""

    page: int
    limit: int


@dataclass(frozen=True)
class CardPage:
    """
    One page of cards plus navigation metadata.

    Attributes:
        total_cards: Number of cards in the store
        total_pages: Number of pages at this limit (at least 1)
        current_page: Page actually returned, after clamping
        limit: Requested page size
        cards: Cards on this page, possibly fewer than limit
        next: Following page, or None on the last page
        previous: Preceding page, or None on the first page
    """

    total_cards: int
    total_pages: int
    current_page: int
    limit: int
    cards: list[Card]
    next: PageRef | None
    previous: PageRef | None

    @property
    def count(self) -> int:
        return len(self.cards)


def clamp_page(page: int, total_pages: int) -> int:
    """Pull a page number into [1, total_pages]."""
    return max(1, min(page, total_pages))


class CardService:
    """Card operations over a single store."""

    def __init__(self, store: CardStore) -> None:
        self._store = store

    def paginate(self, page: int = 1, limit: int = 10) -> CardPage:
        """
        Return one page of cards.

        Out-of-range pages are clamped to the nearest valid page rather
        than rejected. An empty store still has one (empty) page.
        """
        all_cards = self._store.get_all()
        total_cards = len(all_cards)
        total_pages = max(1, math.ceil(total_cards / limit))

        current_page = clamp_page(page, total_pages)
        if current_page != page:
            logger.warning(
                "Invalid page number %d, adjusted to %d",
                page,
                current_page,
                extra={"requested_page": page, "total_pages": total_pages},
            )

        start = (current_page - 1) * limit
        end = start + limit

        return CardPage(
            total_cards=total_cards,
            total_pages=total_pages,
            current_page=current_page,
            limit=limit,
            cards=all_cards[start:end],
            next=PageRef(current_page + 1, limit) if current_page < total_pages else None,
            previous=PageRef(current_page - 1, limit) if current_page > 1 else None,
        )

    def get_card(self, card_id: int) -> Card | None:
        return self._store.get_by_id(card_id)

    def create_card(self, fields: Mapping[str, str]) -> Card:
        card = self._store.insert(fields)
        logger.info("Card created with ID: %d", card.id, extra={"card_id": card.id})
        return card

    def update_card(self, card_id: int, changes: Mapping[str, str]) -> Card | None:
        card = self._store.update(card_id, changes)
        if card is not None:
            logger.info(
                "Card %d updated",
                card_id,
                extra={"card_id": card_id, "fields": sorted(changes)},
            )
        return card

    def delete_card(self, card_id: int) -> bool:
        deleted = self._store.delete(card_id)
        if deleted:
            logger.info("Card %d deleted", card_id, extra={"card_id": card_id})
        return deleted

    def count(self) -> int:
        return self._store.count()
