"""Application tests for order placement through create_order()."""

from uuid import uuid4

import pytest
from ordering.catalog.item import Item
from ordering.catalog.stocking import add_catalog_item
from ordering.discount.discount_code import DiscountCode, DiscountCodeStatus
from ordering.discount.issuance import issue_code
from ordering.errors import (
    ClientInputError,
    InsufficientStockError,
    InvoiceUnavailableError,
    ItemsNotFoundError,
    StoreUnavailableError,
)
from ordering.order.order import Order, OrderStatus
from ordering.order.placement import create_order
from ordering.order.sequence import ORDER_SEQUENCE, OrderSequence
from payments.gateway import get_gateway, set_gateway
from protean import current_domain
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError


@pytest.fixture()
def catalog():
    return {
        "book": add_catalog_item(item_name="Book", price_in_paise=25000, available_qty=10),
        "pen": add_catalog_item(item_name="Pen", price_in_paise=1000, available_qty=100),
    }


def _all_orders():
    return current_domain.repository_for(Order).all_orders()


def _place_n_orders(catalog, count):
    return [create_order("user-001", [{"item_id": catalog["pen"], "item_qty": 1}]) for _ in range(count)]


class TestCreateOrder:
    def test_returns_receipt_with_invoice(self, catalog):
        receipt = create_order("user-001", [{"item_id": catalog["book"], "item_qty": 2}])
        assert receipt.order_id
        assert receipt.invoice_id.startswith("INV-")
        assert receipt.order_value_in_paise_after_discount == 50000.0
        assert receipt.discount_amount == 0.0

    def test_persists_order_priced_from_catalog(self, catalog):
        receipt = create_order(
            "user-001",
            [
                {"item_id": catalog["book"], "item_qty": 1},
                {"item_id": catalog["pen"], "item_qty": 3},
            ],
        )
        order = current_domain.repository_for(Order).get(receipt.order_id)
        assert order.status == OrderStatus.CREATED.value
        assert str(order.user_id) == "user-001"
        assert order.order_value_in_paise_before_discount == 25000 + 3 * 1000
        assert [(line.item_id, line.item_qty) for line in order.ordered_lines()] == [
            (catalog["book"], 1),
            (catalog["pen"], 3),
        ]

    def test_client_supplied_price_is_ignored(self, catalog):
        receipt = create_order("user-001", [{"item_id": catalog["book"], "item_qty": 1, "price_in_paise": 1}])
        assert receipt.order_value_in_paise_after_discount == 25000.0

    def test_invoice_requested_for_amount_after_discount(self, catalog):
        receipt = create_order("user-001", [{"item_id": catalog["pen"], "item_qty": 2}])
        call = get_gateway().calls[-1]
        assert call["method"] == "generate_invoice"
        assert call["order_id"] == receipt.order_id
        assert call["amount_in_paise"] == 2000.0

    def test_placement_does_not_touch_stock(self, catalog):
        create_order("user-001", [{"item_id": catalog["book"], "item_qty": 4}])
        item = current_domain.repository_for(Item).get(catalog["book"])
        assert item.available_qty == 10
        assert item.purchased_count == 0

    def test_sequence_numbers_increase(self, catalog):
        _place_n_orders(catalog, 3)
        assert [order.sequence_number for order in _all_orders()] == [1, 2, 3]
        assert current_domain.repository_for(OrderSequence).get(ORDER_SEQUENCE).last_value == 3


class TestCreateOrderRejections:
    def test_empty_items_list(self, catalog):
        with pytest.raises(ClientInputError) as exc_info:
            create_order("user-001", [])
        assert str(exc_info.value) == "Failed to create order. No items found"
        assert _all_orders() == []

    def test_unknown_items(self, catalog):
        with pytest.raises(ItemsNotFoundError):
            create_order("user-001", [{"item_id": "00000000-0000-0000-0000-000000000000", "item_qty": 1}])
        assert _all_orders() == []

    def test_insufficient_stock_persists_nothing(self, catalog):
        with pytest.raises(InsufficientStockError) as exc_info:
            create_order("user-001", [{"item_id": catalog["book"], "item_qty": 11}])

        assert exc_info.value.item_name == "Book"
        assert exc_info.value.available_qty == 10
        assert _all_orders() == []
        assert get_gateway().calls == []

    def test_rejected_order_does_not_consume_a_sequence_number(self, catalog):
        with pytest.raises(InsufficientStockError):
            create_order("user-001", [{"item_id": catalog["book"], "item_qty": 11}])

        create_order("user-001", [{"item_id": catalog["book"], "item_qty": 1}])
        assert [order.sequence_number for order in _all_orders()] == [1]


class TestNthOrderDiscount:
    def test_first_four_orders_have_no_discount(self, catalog):
        receipts = _place_n_orders(catalog, 4)
        assert all(receipt.discount_amount == 0.0 for receipt in receipts)
        assert current_domain.repository_for(DiscountCode).all_codes() == []

    def test_fifth_order_gets_ten_percent_and_a_code(self, catalog):
        receipts = _place_n_orders(catalog, 5)
        fifth = current_domain.repository_for(Order).get(receipts[4].order_id)

        assert fifth.discount_amount == 100.0
        assert fifth.order_value_in_paise_after_discount == 900.0

        code = current_domain.repository_for(DiscountCode).get(fifth.discount_code)
        assert code.status == DiscountCodeStatus.ACTIVE.value
        assert code.discount_percent == 10
        assert code.discount_amount == 100.0
        assert str(code.order_id) == str(fifth.id)

    def test_tenth_order_gets_a_second_code(self, catalog):
        receipts = _place_n_orders(catalog, 10)
        discounted = [receipt for receipt in receipts if receipt.discount_amount > 0]
        assert [receipts.index(receipt) + 1 for receipt in discounted] == [5, 10]
        assert len(current_domain.repository_for(DiscountCode).all_codes()) == 2

    def test_period_follows_configuration(self, catalog, monkeypatch):
        monkeypatch.setenv("NTH_ORDER_COUNT", "2")
        receipts = _place_n_orders(catalog, 4)
        assert [receipt.discount_amount > 0 for receipt in receipts] == [False, True, False, True]


class TestPresentedDiscountCode:
    def test_valid_code_discounts_the_order(self, catalog):
        code = issue_code(discount_percent=20)
        receipt = create_order("user-001", [{"item_id": catalog["book"], "item_qty": 1}], discount_code=code)

        assert receipt.discount_amount == 5000.0
        assert receipt.order_value_in_paise_after_discount == 20000.0
        assert receipt.applied_discount_code == code
        assert receipt.discount_code is None
        assert get_gateway().calls[-1]["amount_in_paise"] == 20000.0

    def test_valid_code_is_redeemed_by_the_order(self, catalog):
        code = issue_code(discount_percent=20)
        receipt = create_order("user-001", [{"item_id": catalog["book"], "item_qty": 1}], discount_code=code)

        discount_code = current_domain.repository_for(DiscountCode).get(code)
        assert discount_code.status == DiscountCodeStatus.USED.value
        assert str(discount_code.redeemed_by_order_id) == receipt.order_id
        assert str(current_domain.repository_for(Order).get(receipt.order_id).applied_discount_code) == code

    @pytest.mark.parametrize("code", [str(uuid4()), "SAVE10", ""])
    def test_invalid_code_places_order_without_discount(self, catalog, code):
        receipt = create_order("user-001", [{"item_id": catalog["book"], "item_qty": 1}], discount_code=code)

        assert receipt.discount_amount == 0.0
        assert receipt.order_value_in_paise_after_discount == 25000.0
        assert receipt.applied_discount_code is None

    def test_reused_code_is_ignored(self, catalog):
        code = issue_code(discount_percent=20)
        first = create_order("user-001", [{"item_id": catalog["book"], "item_qty": 1}], discount_code=code)
        second = create_order("user-002", [{"item_id": catalog["book"], "item_qty": 1}], discount_code=code)

        assert first.discount_amount == 5000.0
        assert second.discount_amount == 0.0
        assert second.applied_discount_code is None
        discount_code = current_domain.repository_for(DiscountCode).get(code)
        assert discount_code.status == DiscountCodeStatus.USED.value
        assert str(discount_code.redeemed_by_order_id) == first.order_id

    def test_code_stacks_with_nth_order_reward(self, catalog, monkeypatch):
        monkeypatch.setenv("NTH_ORDER_COUNT", "1")
        code = issue_code(discount_percent=20)
        receipt = create_order("user-001", [{"item_id": catalog["book"], "item_qty": 1}], discount_code=code)

        assert receipt.discount_amount == 7500.0
        assert receipt.order_value_in_paise_after_discount == 17500.0
        assert receipt.applied_discount_code == code

        earned = current_domain.repository_for(DiscountCode).get(receipt.discount_code)
        assert earned.discount_percent == 10
        assert earned.discount_amount == 2500.0
        assert earned.status == DiscountCodeStatus.ACTIVE.value

    def test_stacked_discount_is_capped_at_full_value(self, catalog, monkeypatch):
        monkeypatch.setenv("NTH_ORDER_COUNT", "1")
        code = issue_code(discount_percent=95)
        receipt = create_order("user-001", [{"item_id": catalog["book"], "item_qty": 1}], discount_code=code)

        assert receipt.discount_amount == 25000.0
        assert receipt.order_value_in_paise_after_discount == 0.0

    def test_rejected_order_leaves_presented_code_active(self, catalog):
        code = issue_code(discount_percent=20)
        with pytest.raises(InsufficientStockError):
            create_order("user-001", [{"item_id": catalog["book"], "item_qty": 11}], discount_code=code)
        assert current_domain.repository_for(DiscountCode).get(code).status == DiscountCodeStatus.ACTIVE.value


class TestPlacementAtomicity:
    def test_failure_after_issuing_reward_persists_nothing(self, catalog, monkeypatch):
        monkeypatch.setenv("NTH_ORDER_COUNT", "1")
        presented = issue_code(discount_percent=20)

        def _failing_place(cls, **kwargs):
            raise RuntimeError("write failed")

        monkeypatch.setattr(Order, "place", classmethod(_failing_place))

        with pytest.raises(StoreUnavailableError):
            create_order("user-001", [{"item_id": catalog["pen"], "item_qty": 1}], discount_code=presented)

        assert _all_orders() == []
        codes = current_domain.repository_for(DiscountCode).all_codes()
        assert [str(code.id) for code in codes] == [presented]
        assert codes[0].status == DiscountCodeStatus.ACTIVE.value
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(OrderSequence).get(ORDER_SEQUENCE)
        assert get_gateway().calls == []

    def test_stale_sequence_write_is_reported_as_store_unavailable(self, catalog, monkeypatch):
        def _stale_write():
            raise ExpectedVersionError("OrderSequence orders was updated concurrently")

        monkeypatch.setattr("ordering.order.creation.next_order_number", _stale_write)

        with pytest.raises(StoreUnavailableError) as exc_info:
            create_order("user-001", [{"item_id": catalog["pen"], "item_qty": 1}])

        assert exc_info.value.status_code == 503
        assert _all_orders() == []


class TestInvoiceFailure:
    def test_order_exists_when_invoice_fails(self, catalog):
        get_gateway().configure(should_succeed=False, failure_reason="Gateway timeout")

        with pytest.raises(InvoiceUnavailableError) as exc_info:
            create_order("user-001", [{"item_id": catalog["pen"], "item_qty": 1}])

        order_id = exc_info.value.order_id
        assert exc_info.value.reason == "Gateway timeout"
        assert exc_info.value.context["order_created"] is True
        assert current_domain.repository_for(Order).get(order_id).status == OrderStatus.CREATED.value

    def test_gateway_exception_is_reported_as_invoice_unavailable(self, catalog):
        class ExplodingGateway:
            def generate_invoice(self, order_id, amount_in_paise):
                raise ConnectionError("connection reset")

        set_gateway(ExplodingGateway())
        with pytest.raises(InvoiceUnavailableError) as exc_info:
            create_order("user-001", [{"item_id": catalog["pen"], "item_qty": 1}])
        assert "connection reset" in exc_info.value.reason
        assert len(_all_orders()) == 1
