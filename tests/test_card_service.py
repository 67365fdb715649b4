"""Tests for the card service: pagination math and pass-through operations."""

import logging

import pytest

from cardcollection.db.store import CardStore
from cardcollection.services.card_service import CardService, PageRef, clamp_page

NEW_CARD = {"suit": "hearts", "value": "10", "collection": "classic"}


@pytest.fixture
def service(store: CardStore) -> CardService:
    return CardService(store)


def _service_with(count: int) -> CardService:
    store = CardStore(seed=())
    for i in range(count):
        store.insert({"suit": "spades", "value": str(i), "collection": "numbered"})
    return CardService(store)


class TestClampPage:
    @pytest.mark.parametrize(
        ("page", "total", "expected"),
        [(1, 3, 1), (3, 3, 3), (7, 3, 3), (0, 3, 1), (-2, 3, 1), (5, 1, 1)],
    )
    def test_clamps_into_range(self, page: int, total: int, expected: int) -> None:
        assert clamp_page(page, total) == expected


class TestPaginate:
    def test_first_page_of_seed(self, service: CardService) -> None:
        """Four seed cards at limit 2 make two pages."""
        page = service.paginate(1, 2)

        assert page.total_cards == 4
        assert page.total_pages == 2
        assert page.current_page == 1
        assert page.count == 2
        assert page.next == PageRef(page=2, limit=2)
        assert page.previous is None

    def test_last_page(self, service: CardService) -> None:
        page = service.paginate(2, 2)

        assert [card.id for card in page.cards] == [171836785994, 171836785995]
        assert page.next is None
        assert page.previous == PageRef(page=1, limit=2)

    def test_short_tail_page(self) -> None:
        page = _service_with(7).paginate(3, 3)

        assert page.total_pages == 3
        assert page.count == 1
        assert page.cards[0].value == "6"

    def test_page_past_end_clamped(self, service: CardService) -> None:
        page = service.paginate(50, 3)

        assert page.current_page == page.total_pages == 2
        assert page.next is None
        assert page.count == 1

    def test_clamping_logs_warning(
        self, service: CardService, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="cardcollection.services.card_service"):
            service.paginate(9, 2)

        assert "adjusted to 2" in caplog.text

    def test_empty_store_has_one_page(self) -> None:
        page = _service_with(0).paginate(4, 10)

        assert page.total_cards == 0
        assert page.total_pages == 1
        assert page.current_page == 1
        assert page.cards == []
        assert page.next is None
        assert page.previous is None

    @pytest.mark.parametrize("limit", [1, 3, 4, 5, 10, 100])
    def test_count_never_exceeds_limit(self, limit: int) -> None:
        service = _service_with(9)
        for requested in range(1, 12):
            page = service.paginate(requested, limit)
            assert page.count <= limit

    @pytest.mark.parametrize("limit", [5, 50, 100])
    def test_single_page_holds_everything(self, service: CardService, limit: int) -> None:
        """When there are fewer cards than the limit, one page holds them all."""
        page = service.paginate(1, limit)

        assert page.total_pages == 1
        assert page.count == page.total_cards == 4

    def test_pages_cover_store_in_order(self) -> None:
        service = _service_with(10)
        seen = []
        for requested in range(1, 5):
            seen.extend(card.value for card in service.paginate(requested, 3).cards)

        assert seen == [str(i) for i in range(10)]


class TestPassThrough:
    def test_get_card(self, service: CardService) -> None:
        card = service.get_card(171836785992)

        assert card is not None
        assert card.value == "queen"
        assert service.get_card(1) is None

    def test_create_card_logs(
        self, service: CardService, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger="cardcollection.services.card_service"):
            card = service.create_card(NEW_CARD)

        assert card.id == 171836785996
        assert f"Card created with ID: {card.id}" in caplog.text
        assert service.count() == 5

    def test_update_card(self, service: CardService) -> None:
        card = service.update_card(171836785995, {"value": "ten"})

        assert card is not None
        assert card.value == "ten"
        assert service.update_card(1, {"value": "ten"}) is None

    def test_delete_card(self, service: CardService) -> None:
        assert service.delete_card(171836785995) is True
        assert service.delete_card(171836785995) is False
        assert service.count() == 3
