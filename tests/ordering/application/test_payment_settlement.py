"""Application tests for payment settlement and stock recording."""

import pytest
from ordering.catalog.item import Item
from ordering.catalog.stocking import add_catalog_item
from ordering.errors import InsufficientStockError
from ordering.order.placement import create_order
from ordering.order.settlement import settle_payment
from payments.gateway import get_gateway
from protean import current_domain
from protean.exceptions import ObjectNotFoundError


@pytest.fixture()
def book():
    return add_catalog_item(item_name="Book", price_in_paise=25000, available_qty=5)


def _item(item_id):
    return current_domain.repository_for(Item).get(item_id)


class TestSettlePayment:
    def test_successful_payment_records_purchase(self, book):
        receipt = create_order("user-001", [{"item_id": book, "item_qty": 2}])

        assert settle_payment(receipt.order_id, receipt.invoice_id) is True

        item = _item(book)
        assert item.available_qty == 3
        assert item.purchased_count == 2

    def test_repeated_lines_are_recorded_together(self, book):
        receipt = create_order(
            "user-001",
            [
                {"item_id": book, "item_qty": 1},
                {"item_id": book, "item_qty": 2},
            ],
        )
        settle_payment(receipt.order_id, receipt.invoice_id)
        assert _item(book).available_qty == 2

    def test_failed_payment_leaves_stock_untouched(self, book):
        receipt = create_order("user-001", [{"item_id": book, "item_qty": 2}])
        get_gateway().configure(should_succeed=False, failure_reason="Card declined")

        assert settle_payment(receipt.order_id, receipt.invoice_id) is False
        assert _item(book).available_qty == 5

    def test_invoice_can_only_be_paid_once(self, book):
        receipt = create_order("user-001", [{"item_id": book, "item_qty": 1}])
        settle_payment(receipt.order_id, receipt.invoice_id)

        assert settle_payment(receipt.order_id, receipt.invoice_id) is False
        assert _item(book).purchased_count == 1

    def test_stock_sold_out_before_payment(self, book):
        first = create_order("user-001", [{"item_id": book, "item_qty": 4}])
        second = create_order("user-002", [{"item_id": book, "item_qty": 3}])
        settle_payment(first.order_id, first.invoice_id)

        with pytest.raises(InsufficientStockError):
            settle_payment(second.order_id, second.invoice_id)
        assert _item(book).available_qty == 1

    def test_unknown_order(self):
        with pytest.raises(ObjectNotFoundError):
            settle_payment("00000000-0000-0000-0000-000000000000", "INV-00000000")
