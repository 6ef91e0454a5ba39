"""Item aggregate (CQRS) — a catalog entry with its unit price and stock level.

Prices are held in paise, the smallest currency unit, so catalog arithmetic
stays in integers. Order placement only reads items; the stock decrement is
performed later by ``record_purchase`` once payment has gone through.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Integer, String

from ordering.catalog.events import ItemAdded, ItemPurchaseRecorded
from ordering.domain import ordering
from ordering.errors import InsufficientStockError


@ordering.aggregate
class Item:
    item_name = String(required=True, max_length=255)
    price_in_paise = Integer(required=True, min_value=0)
    available_qty = Integer(default=0, min_value=0)
    purchased_count = Integer(default=0, min_value=0)
    created_on = DateTime()

    @classmethod
    def add(cls, item_name: str, price_in_paise: int, available_qty: int = 0):
        """Add a new item to the catalog."""
        now = datetime.now(UTC)
        item = cls(
            item_name=item_name,
            price_in_paise=price_in_paise,
            available_qty=available_qty,
            purchased_count=0,
            created_on=now,
        )
        item.raise_(
            ItemAdded(
                item_id=str(item.id),
                item_name=item_name,
                price_in_paise=price_in_paise,
                available_qty=available_qty,
                added_on=now,
            )
        )
        return item

    def has_stock_for(self, quantity: int) -> bool:
        return (self.available_qty or 0) >= quantity

    def record_purchase(self, order_id: str, quantity: int) -> None:
        """Take ``quantity`` units out of stock for a paid order.

        The decrement only happens when enough stock remains, so
        ``available_qty`` never goes negative.
        """
        if quantity < 1:
            raise ValidationError({"quantity": ["Purchased quantity must be at least 1"]})
        if not self.has_stock_for(quantity):
            raise InsufficientStockError(
                item_id=str(self.id),
                item_name=self.item_name,
                available_qty=self.available_qty or 0,
                requested_qty=quantity,
            )

        self.available_qty -= quantity
        self.purchased_count = (self.purchased_count or 0) + quantity

        self.raise_(
            ItemPurchaseRecorded(
                item_id=str(self.id),
                order_id=order_id,
                quantity=quantity,
                available_qty=self.available_qty,
                purchased_count=self.purchased_count,
                recorded_on=datetime.now(UTC),
            )
        )
