"""Admin reports — read-side aggregates over items, orders and discount codes.

Totals over an empty collection are ``0.0``. A collection that has records
but cannot produce a value (a record missing the amount being summed) raises
``NoDataError``, so "nothing sold yet" and "cannot tell" stay distinct.
"""

from dataclasses import dataclass

import structlog
from protean.utils.globals import current_domain

from ordering.admin.capability import AdminCapability, require_admin
from ordering.catalog.item import Item
from ordering.discount.discount_code import DiscountCode
from ordering.errors import NoDataError, store_access
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PurchasedItemLine:
    item_id: str
    item_name: str
    purchased_count: int


@dataclass(frozen=True)
class DiscountCodeLine:
    code: str
    discount_percent: int
    discount_amount: float
    status: str


def _sum_field(records, field_name: str, report: str) -> float:
    total = 0.0
    for record in records:
        value = getattr(record, field_name)
        if value is None:
            logger.error("Aggregate undefined", report=report, record_id=str(record.id), field=field_name)
            raise NoDataError(f"Cannot compute {report}: a record has no {field_name}", report=report)
        total += value
    return round(total, 2)


def list_items_purchased(capability: AdminCapability) -> list[PurchasedItemLine]:
    """Purchase counts per catalog item, ordered by item name."""
    require_admin(capability)
    with store_access("list_items_purchased"):
        items = current_domain.repository_for(Item).all_items()

    lines = [
        PurchasedItemLine(
            item_id=str(item.id),
            item_name=item.item_name,
            purchased_count=item.purchased_count or 0,
        )
        for item in items
    ]
    return sorted(lines, key=lambda line: (line.item_name, line.item_id))


def total_purchase_amount(capability: AdminCapability) -> float:
    """Sum of every order's value after discount, in paise."""
    require_admin(capability)
    with store_access("total_purchase_amount"):
        orders = current_domain.repository_for(Order).all_orders()

    total = _sum_field(orders, "order_value_in_paise_after_discount", "total_purchase_amount")
    logger.info("Computed total purchase amount", user_id=capability.user_id, orders=len(orders), total=total)
    return total


def list_discount_codes(capability: AdminCapability) -> list[DiscountCodeLine]:
    """Every discount code, oldest first."""
    require_admin(capability)
    with store_access("list_discount_codes"):
        codes = current_domain.repository_for(DiscountCode).all_codes()

    return [
        DiscountCodeLine(
            code=str(code.id),
            discount_percent=code.discount_percent,
            discount_amount=code.discount_amount or 0.0,
            status=code.status,
        )
        for code in codes
    ]


def total_discount_amount(capability: AdminCapability) -> float:
    """Sum of the discount amounts recorded against every code, in paise."""
    require_admin(capability)
    with store_access("total_discount_amount"):
        codes = current_domain.repository_for(DiscountCode).all_codes()

    total = _sum_field(codes, "discount_amount", "total_discount_amount")
    logger.info("Computed total discount amount", user_id=capability.user_id, codes=len(codes), total=total)
    return total
