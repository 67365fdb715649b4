from cardcollection.services.card_service import CardPage, CardService, PageRef, clamp_page
from cardcollection.services.validators import (
    IdValidation,
    PaginationValidation,
    ValidationResult,
    parse_int,
    validate_card_data,
    validate_card_id,
    validate_pagination_params,
)

__all__ = [
    "CardPage",
    "CardService",
    "IdValidation",
    "PageRef",
    "PaginationValidation",
    "ValidationResult",
    "clamp_page",
    "parse_int",
    "validate_card_data",
    "validate_card_id",
    "validate_pagination_params",
]
