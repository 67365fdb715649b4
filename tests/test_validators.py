"""Tests for request input validators."""

import pytest

from cardcollection.services.validators import (
    INVALID_ID_MESSAGE,
    INVALID_LIMIT_MESSAGE,
    INVALID_OBJECT_MESSAGE,
    INVALID_PAGE_MESSAGE,
    parse_int,
    validate_card_data,
    validate_card_id,
    validate_pagination_params,
)

VALID_CARD = {"suit": "hearts", "value": "10", "collection": "classic"}


class TestParseInt:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("5", 5), (" 12 ", 12), ("-3", -3), ("+7", 7), (42, 42)],
    )
    def test_accepts_integers(self, raw: object, expected: int) -> None:
        assert parse_int(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "", "1.5", "12abc", "1e3", None, 2.0, True])
    def test_rejects_non_integers(self, raw: object) -> None:
        assert parse_int(raw) is None

    def test_overlong_digit_run(self) -> None:
        """Digit runs past the int conversion limit are rejected, not raised."""
        assert parse_int("9" * 5000) is None
        assert parse_int("-" + "9" * 5000) is None


class TestValidateCardDataCreation:
    def test_valid_payload(self) -> None:
        result = validate_card_data(VALID_CARD, is_creation=True)

        assert result.valid is True
        assert result.errors == []

    def test_all_fields_missing(self) -> None:
        """Each missing field gets its own message."""
        result = validate_card_data({}, is_creation=True)

        assert result.valid is False
        assert result.errors == [
            "suit is required and must be a non-empty string",
            "value is required and must be a non-empty string",
            "collection is required and must be a non-empty string",
        ]

    def test_blank_and_non_string_fields(self) -> None:
        result = validate_card_data(
            {"suit": "   ", "value": 10, "collection": "royal"}, is_creation=True
        )

        assert result.valid is False
        assert result.errors == [
            "suit is required and must be a non-empty string",
            "value is required and must be a non-empty string",
        ]

    @pytest.mark.parametrize("payload", [None, [], "hearts", 3])
    def test_non_object_payload(self, payload: object) -> None:
        result = validate_card_data(payload, is_creation=True)

        assert result.valid is False
        assert result.errors == [INVALID_OBJECT_MESSAGE]

    def test_extra_fields_ignored(self) -> None:
        result = validate_card_data({**VALID_CARD, "rarity": "rare"}, is_creation=True)

        assert result.valid is True


class TestValidateCardDataUpdate:
    def test_empty_payload_is_valid(self) -> None:
        """Absent fields are not errors on update."""
        assert validate_card_data({}, is_creation=False).valid is True

    def test_partial_payload(self) -> None:
        assert validate_card_data({"collection": "vintage"}).valid is True

    def test_present_field_must_be_non_empty(self) -> None:
        result = validate_card_data({"suit": "", "value": "9"})

        assert result.valid is False
        assert result.errors == ["suit must be a non-empty string"]

    def test_null_counts_as_present(self) -> None:
        result = validate_card_data({"collection": None})

        assert result.valid is False
        assert result.errors == ["collection must be a non-empty string"]

    def test_non_object_payload(self) -> None:
        result = validate_card_data(None)

        assert result.errors == [INVALID_OBJECT_MESSAGE]


class TestValidatePaginationParams:
    def test_defaults_when_missing(self) -> None:
        result = validate_pagination_params()

        assert result.valid is True
        assert result.page == 1
        assert result.limit == 10

    def test_empty_strings_use_defaults(self) -> None:
        result = validate_pagination_params("", " ")

        assert (result.page, result.limit) == (1, 10)

    def test_parses_strings(self) -> None:
        result = validate_pagination_params("3", "25")

        assert result.valid is True
        assert (result.page, result.limit) == (3, 25)

    @pytest.mark.parametrize("limit", ["1", "100"])
    def test_limit_bounds_inclusive(self, limit: str) -> None:
        assert validate_pagination_params("1", limit).valid is True

    @pytest.mark.parametrize("page", ["0", "-1", "abc", "1.5"])
    def test_invalid_page(self, page: str) -> None:
        result = validate_pagination_params(page, "10")

        assert result.valid is False
        assert result.errors == [INVALID_PAGE_MESSAGE]
        assert result.page is None

    @pytest.mark.parametrize("limit", ["0", "101", "-5", "ten"])
    def test_invalid_limit(self, limit: str) -> None:
        result = validate_pagination_params("1", limit)

        assert result.valid is False
        assert result.errors == [INVALID_LIMIT_MESSAGE]

    def test_both_invalid_itemized(self) -> None:
        result = validate_pagination_params("0", "500")

        assert result.errors == [INVALID_PAGE_MESSAGE, INVALID_LIMIT_MESSAGE]

    def test_overlong_values_invalid(self) -> None:
        result = validate_pagination_params("9" * 5000, "1" * 5000)

        assert result.valid is False
        assert result.errors == [INVALID_PAGE_MESSAGE, INVALID_LIMIT_MESSAGE]

    def test_large_page_is_valid(self) -> None:
        """Pages past the end are accepted here and clamped later."""
        assert validate_pagination_params("9999", "10").valid is True


class TestValidateCardId:
    def test_positive_id(self) -> None:
        result = validate_card_id("171836785992")

        assert result.valid is True
        assert result.card_id == 171836785992
        assert result.error is None

    @pytest.mark.parametrize("raw", ["abc", "0", "-4", "", "3.7"])
    def test_invalid_id(self, raw: str) -> None:
        result = validate_card_id(raw)

        assert result.valid is False
        assert result.error == INVALID_ID_MESSAGE
        assert result.card_id is None

    def test_overlong_id(self) -> None:
        result = validate_card_id("9" * 5000)

        assert result.valid is False
        assert result.error == INVALID_ID_MESSAGE
