"""
Request input validators.

Pure functions that check the shape of client input. They never raise;
callers branch on the ``valid`` flag and report the collected messages.
"""

from dataclasses import dataclass, field
from typing import Any

from cardcollection.config import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from cardcollection.models.card import CARD_FIELDS

INVALID_OBJECT_MESSAGE = "Card data must be a valid object"
INVALID_ID_MESSAGE = "Card ID must be a positive number"
INVALID_PAGE_MESSAGE = "page must be a positive integer"
INVALID_LIMIT_MESSAGE = f"limit must be a positive integer between 1 and {MAX_PAGE_LIMIT}"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a card payload."""

    valid: bool
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class PaginationValidation:
    """Outcome of validating pagination params, with the parsed values."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    page: int | None = None
    limit: int | None = None


@dataclass(frozen=True)
class IdValidation:
    """Outcome of validating a card ID, with the parsed value."""

    valid: bool
    error: str | None = None
    card_id: int | None = None


def _is_blank(raw: Any) -> bool:
    return raw is None or (isinstance(raw, str) and not raw.strip())


def parse_int(raw: Any) -> int | None:
    """
    Parse an integer from query/path input.

    Accepts ints and strings holding an optionally signed run of digits.
    Booleans, floats, digit runs too long to convert, and anything else
    yield None.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if not isinstance(raw, str):
        return None

    text = raw.strip()
    digits = text[1:] if text[:1] in ("+", "-") else text
    if not digits.isascii() or not digits.isdigit():
        return None
    try:
        return int(text)
    except ValueError:
        # Past the interpreter's int-from-string digit limit
        return None


def _is_non_empty_string(raw: Any) -> bool:
    return isinstance(raw, str) and raw.strip() != ""


def validate_card_data(card_data: Any, is_creation: bool = False) -> ValidationResult:
    """
    Validate a card payload.

    On creation every field is required. On update each field is optional,
    but a field that is present (even as null) must still be a non-empty
    string. Unknown keys are ignored.
    """
    if not isinstance(card_data, dict):
        return ValidationResult(valid=False, errors=[INVALID_OBJECT_MESSAGE])

    errors: list[str] = []
    for name in CARD_FIELDS:
        if is_creation:
            if not _is_non_empty_string(card_data.get(name)):
                errors.append(f"{name} is required and must be a non-empty string")
        elif name in card_data and not _is_non_empty_string(card_data[name]):
            errors.append(f"{name} must be a non-empty string")

    return ValidationResult(valid=not errors, errors=errors)


def validate_pagination_params(page: Any = None, limit: Any = None) -> PaginationValidation:
    """
    Validate page and limit.

    Missing or empty values fall back to page 1 and a limit of 10. Page
    must be >= 1 and limit within [1, 100]. The page is not checked
    against the number of pages; the service clamps it.
    """
    errors: list[str] = []

    parsed_page = DEFAULT_PAGE if _is_blank(page) else parse_int(page)
    if parsed_page is None or parsed_page < 1:
        errors.append(INVALID_PAGE_MESSAGE)

    parsed_limit = DEFAULT_PAGE_LIMIT if _is_blank(limit) else parse_int(limit)
    if parsed_limit is None or not 1 <= parsed_limit <= MAX_PAGE_LIMIT:
        errors.append(INVALID_LIMIT_MESSAGE)

    if errors:
        return PaginationValidation(valid=False, errors=errors)
    return PaginationValidation(valid=True, page=parsed_page, limit=parsed_limit)


def validate_card_id(raw_id: Any) -> IdValidation:
    """Validate that an ID is a positive integer."""
    card_id = parse_int(raw_id)
    if card_id is None or card_id <= 0:
        return IdValidation(valid=False, error=INVALID_ID_MESSAGE)
    return IdValidation(valid=True, card_id=card_id)
