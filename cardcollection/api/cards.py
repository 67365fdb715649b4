"""
Card API endpoints.

Provides paginated listing and CRUD operations for cards. Handlers take
raw path/query/body input, run it through the validators, and delegate to
the card service. Failures are raised as ``ApiError`` subclasses and
rendered by the handlers registered in ``cardcollection.main``.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Annotated, Any

from fastapi import APIRouter, Body, Query, status
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from cardcollection.api.deps import CardServiceDep
from cardcollection.models.card import CARD_FIELDS, Card, utc_now
from cardcollection.models.failure import (
    ApiError,
    ErrorResponse,
    InternalError,
    NotFoundError,
    ValidationError,
)
from cardcollection.services.card_service import CardPage, PageRef
from cardcollection.services.validators import (
    INVALID_ID_MESSAGE,
    validate_card_data,
    validate_card_id,
    validate_pagination_params,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cards", tags=["cards"])


class CamelModel(BaseModel):
    """Response model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CardResponse(CamelModel):
    """A single card."""

    id: int
    suit: str
    value: str
    collection: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_card(cls, card: Card) -> "CardResponse":
        return cls(
            id=card.id,
            suit=card.suit,
            value=card.value,
            collection=card.collection,
            created_at=card.created_at,
            updated_at=card.updated_at,
        )


class PageRefResponse(CamelModel):
    """Link to a neighbouring page."""

    page: int
    limit: int

    @classmethod
    def from_ref(cls, ref: PageRef | None) -> "PageRefResponse | None":
        if ref is None:
            return None
        return cls(page=ref.page, limit=ref.limit)


class CardPageResponse(CamelModel):
    """Paginated envelope for card listings."""

    total_cards: int
    total_pages: int
    current_page: int
    limit: int
    count: int
    cards: list[CardResponse] = Field(default_factory=list)
    next: PageRefResponse | None = None
    previous: PageRefResponse | None = None

    @classmethod
    def from_page(cls, page: CardPage) -> "CardPageResponse":
        return cls(
            total_cards=page.total_cards,
            total_pages=page.total_pages,
            current_page=page.current_page,
            limit=page.limit,
            count=page.count,
            cards=[CardResponse.from_card(card) for card in page.cards],
            next=PageRefResponse.from_ref(page.next),
            previous=PageRefResponse.from_ref(page.previous),
        )


class DeleteResponse(BaseModel):
    """Confirmation of a deleted card."""

    message: str = "Card deleted successfully"
    id: int
    timestamp: datetime = Field(default_factory=utc_now)


ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@contextmanager
def internal_failure(message: str) -> Iterator[None]:
    """
    Report unexpected exceptions as an InternalError with ``message``.

    ApiErrors pass through untouched.
    """
    try:
        yield
    except ApiError:
        raise
    except Exception as e:
        logger.exception(message)
        raise InternalError(message, detail=f"{type(e).__name__}: {e}") from e


def _parse_card_id(raw_id: str, action: str) -> int:
    validation = validate_card_id(raw_id)
    if not validation.valid or validation.card_id is None:
        logger.warning("Invalid card ID in %s request", action, extra={"raw_id": raw_id})
        raise ValidationError([validation.error or INVALID_ID_MESSAGE])
    return validation.card_id


def _body_or_empty(payload: Any) -> Any:
    """An absent (or null) request body reads as an empty object."""
    return {} if payload is None else payload


def _trimmed_fields(payload: dict[str, Any]) -> dict[str, str]:
    """Pick the supplied card fields from a validated payload, trimmed."""
    return {name: payload[name].strip() for name in CARD_FIELDS if name in payload}


@router.get("", response_model=CardPageResponse, responses=ERROR_RESPONSES)
async def list_cards(
    service: CardServiceDep,
    page: Annotated[str | None, Query(description="Page number, from 1")] = None,
    limit: Annotated[str | None, Query(description="Cards per page, 1-100")] = None,
) -> CardPageResponse:
    """
    List cards one page at a time.

    Defaults to page 1 with 10 cards per page. A page past the end is
    clamped to the last page.
    """
    validation = validate_pagination_params(page, limit)
    if not validation.valid or validation.page is None or validation.limit is None:
        logger.warning(
            "Invalid pagination parameters",
            extra={"page": page, "limit": limit, "errors": validation.errors},
        )
        raise ValidationError(validation.errors)

    with internal_failure("Failed to retrieve cards"):
        result = service.paginate(validation.page, validation.limit)

    logger.debug(
        "Retrieved %d cards",
        result.count,
        extra={"page": result.current_page, "limit": result.limit},
    )
    return CardPageResponse.from_page(result)


@router.get("/{card_id}", response_model=CardResponse, responses=ERROR_RESPONSES)
async def get_card(card_id: str, service: CardServiceDep) -> CardResponse:
    """Fetch a single card by ID."""
    parsed_id = _parse_card_id(card_id, "get")

    with internal_failure("Failed to retrieve card"):
        card = service.get_card(parsed_id)

    if card is None:
        logger.debug("Card not found: %d", parsed_id)
        raise NotFoundError(parsed_id)

    return CardResponse.from_card(card)


@router.post(
    "",
    response_model=CardResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
async def create_card(
    service: CardServiceDep,
    payload: Annotated[
        Any, Body(examples=[{"suit": "hearts", "value": "10", "collection": "classic"}])
    ] = None,
) -> CardResponse:
    """
    Create a card.

    All of suit, value and collection are required; surrounding whitespace
    is trimmed before storage.
    """
    payload = _body_or_empty(payload)
    validation = validate_card_data(payload, is_creation=True)
    if not validation.valid:
        logger.warning("Invalid card data in create request", extra={"errors": validation.errors})
        raise ValidationError(validation.errors)

    with internal_failure("Failed to create card"):
        card = service.create_card(_trimmed_fields(payload))

    return CardResponse.from_card(card)


@router.put("/{card_id}", response_model=CardResponse, responses=ERROR_RESPONSES)
async def update_card(
    card_id: str,
    service: CardServiceDep,
    payload: Annotated[Any, Body(examples=[{"collection": "vintage"}])] = None,
) -> CardResponse:
    """
    Update some or all fields of a card.

    Unknown IDs are rejected with 404 before the payload is validated.
    Fields left out of the payload keep their current values.
    """
    parsed_id = _parse_card_id(card_id, "update")

    with internal_failure("Failed to update card"):
        existing = service.get_card(parsed_id)
    if existing is None:
        logger.debug("Card not found for update: %d", parsed_id)
        raise NotFoundError(parsed_id)

    payload = _body_or_empty(payload)
    validation = validate_card_data(payload, is_creation=False)
    if not validation.valid:
        logger.warning(
            "Invalid card data in update request for card %d",
            parsed_id,
            extra={"errors": validation.errors},
        )
        raise ValidationError(validation.errors)

    with internal_failure("Failed to update card"):
        card = service.update_card(parsed_id, _trimmed_fields(payload))

    # Deleted between the existence check and the write
    if card is None:
        raise NotFoundError(parsed_id)

    return CardResponse.from_card(card)


@router.delete("/{card_id}", response_model=DeleteResponse, responses=ERROR_RESPONSES)
async def delete_card(card_id: str, service: CardServiceDep) -> DeleteResponse:
    """
    Delete a card.

    This is irreversible; the ID is never handed out again.
    """
    parsed_id = _parse_card_id(card_id, "delete")

    with internal_failure("Failed to delete card"):
        deleted = service.delete_card(parsed_id)

    if not deleted:
        logger.debug("Card not found for deletion: %d", parsed_id)
        raise NotFoundError(parsed_id)

    return DeleteResponse(id=parsed_id)
