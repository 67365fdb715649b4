"""
Error classification for the HTTP boundary.

Every failure a client can see is one of three kinds:

- ValidationError: malformed input (400)
- NotFoundError: unknown card ID (404)
- InternalError: unexpected fault (500)

Handlers in ``cardcollection.main`` turn these exceptions into an
``ErrorResponse`` body. Internal detail is only ever attached outside
production.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from cardcollection.models.card import utc_now


class ErrorKind(str, Enum):
    """Classification of client-visible failures."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    INTERNAL = "internal"


# HTTP reason phrase reported in the "error" field
ERROR_TITLES: dict[ErrorKind, str] = {
    ErrorKind.VALIDATION: "Bad Request",
    ErrorKind.NOT_FOUND: "Not Found",
    ErrorKind.PAYLOAD_TOO_LARGE: "Payload Too Large",
    ErrorKind.INTERNAL: "Internal Server Error",
}

# Fixed client message for faults nobody anticipated
GENERIC_INTERNAL_MESSAGE = "An unexpected error occurred"


class ErrorResponse(BaseModel):
    """JSON body returned for every failed request."""

    error: str = Field(..., description="HTTP reason phrase")
    message: str = Field(..., description="Human-readable explanation")
    detail: str | None = Field(
        default=None,
        description="Technical detail, omitted in production",
    )
    timestamp: datetime = Field(default_factory=utc_now)


class ApiError(Exception):
    """
    Base class for failures the API reports to the client.

    Subclasses fix the kind and status code; callers supply the message.
    """

    kind: ErrorKind = ErrorKind.INTERNAL
    status_code: int = 500

    def __init__(self, message: str, detail: str | None = None):
        self.message = message
        self.detail = detail
        super().__init__(message)

    @property
    def title(self) -> str:
        return ERROR_TITLES[self.kind]

    def to_response(self, include_detail: bool = False) -> ErrorResponse:
        """Convert to an ErrorResponse, optionally carrying the detail."""
        return ErrorResponse(
            error=self.title,
            message=self.message,
            detail=self.detail if include_detail else None,
        )


class ValidationError(ApiError):
    """Raised when request input fails validation."""

    kind = ErrorKind.VALIDATION
    status_code = 400

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class NotFoundError(ApiError):
    """Raised when a card ID does not match any stored card."""

    kind = ErrorKind.NOT_FOUND
    status_code = 404

    def __init__(self, card_id: int):
        self.card_id = card_id
        super().__init__(f"Card with ID {card_id} does not exist")


class PayloadTooLargeError(ApiError):
    """Raised when a request body exceeds the configured size limit."""

    kind = ErrorKind.PAYLOAD_TOO_LARGE
    status_code = 413

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Request body exceeds the {limit} byte limit")


class InternalError(ApiError):
    """
    Raised when an operation fails for an unexpected reason.

    The message names the failed operation; the detail carries the
    underlying exception and is hidden from clients in production.
    """

    kind = ErrorKind.INTERNAL
    status_code = 500
