"""Tests for catalog items and stock recording."""

import pytest
from ordering.catalog.events import ItemAdded, ItemPurchaseRecorded
from ordering.catalog.item import Item
from ordering.errors import InsufficientStockError
from protean.exceptions import ValidationError


def _make_item(**overrides):
    defaults = {
        "item_name": "Notebook",
        "price_in_paise": 15000,
        "available_qty": 10,
    }
    defaults.update(overrides)
    return Item.add(**defaults)


class TestItemAdd:
    def test_add_sets_fields(self):
        item = _make_item()
        assert item.item_name == "Notebook"
        assert item.price_in_paise == 15000
        assert item.available_qty == 10
        assert item.purchased_count == 0
        assert item.created_on is not None

    def test_add_raises_item_added_event(self):
        item = _make_item()
        assert len(item._events) == 1
        event = item._events[0]
        assert isinstance(event, ItemAdded)
        assert event.item_id == str(item.id)
        assert event.price_in_paise == 15000

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            _make_item(price_in_paise=-1)

    def test_item_name_is_required(self):
        with pytest.raises(ValidationError):
            _make_item(item_name=None)


class TestStockCheck:
    def test_has_stock_for_up_to_available(self):
        item = _make_item(available_qty=3)
        assert item.has_stock_for(3)
        assert not item.has_stock_for(4)


class TestRecordPurchase:
    def test_decrements_available_and_increments_purchased(self):
        item = _make_item(available_qty=5)
        item.record_purchase(order_id="ord-001", quantity=2)
        assert item.available_qty == 3
        assert item.purchased_count == 2

    def test_raises_purchase_recorded_event(self):
        item = _make_item(available_qty=5)
        item._events.clear()
        item.record_purchase(order_id="ord-001", quantity=2)
        event = item._events[-1]
        assert isinstance(event, ItemPurchaseRecorded)
        assert event.order_id == "ord-001"
        assert event.quantity == 2
        assert event.available_qty == 3

    def test_purchase_of_exact_stock_empties_item(self):
        item = _make_item(available_qty=2)
        item.record_purchase(order_id="ord-001", quantity=2)
        assert item.available_qty == 0

    def test_purchase_beyond_stock_is_refused(self):
        item = _make_item(item_name="Pen", available_qty=1)
        with pytest.raises(InsufficientStockError) as exc_info:
            item.record_purchase(order_id="ord-001", quantity=2)
        assert exc_info.value.available_qty == 1
        assert exc_info.value.requested_qty == 2
        assert "Only 1 units of Pen are left" in str(exc_info.value)
        assert item.available_qty == 1
        assert item.purchased_count == 0

    def test_zero_quantity_is_refused(self):
        item = _make_item()
        with pytest.raises(ValidationError):
            item.record_purchase(order_id="ord-001", quantity=0)
