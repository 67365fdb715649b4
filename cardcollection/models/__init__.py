from cardcollection.models.card import CARD_FIELDS, Card, utc_now
from cardcollection.models.failure import (
    ERROR_TITLES,
    GENERIC_INTERNAL_MESSAGE,
    ApiError,
    ErrorKind,
    ErrorResponse,
    InternalError,
    NotFoundError,
    PayloadTooLargeError,
    ValidationError,
)

__all__ = [
    "CARD_FIELDS",
    "ERROR_TITLES",
    "GENERIC_INTERNAL_MESSAGE",
    "ApiError",
    "Card",
    "ErrorKind",
    "ErrorResponse",
    "InternalError",
    "NotFoundError",
    "PayloadTooLargeError",
    "ValidationError",
    "utc_now",
]
