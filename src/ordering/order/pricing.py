"""Order pricing — validates requested lines against catalog rows.

Every step returns an explicit outcome instead of raising, so that an
expected rejection (not enough stock) is never confused with an
infrastructure failure. The command handler turns a ``PricingRejection``
into the matching client error at the transaction boundary.
"""

from dataclasses import dataclass
from enum import Enum

from ordering.catalog.repository import CatalogRow
from ordering.errors import ClientInputError, InsufficientStockError, ItemsNotFoundError


@dataclass(frozen=True)
class RequestedLine:
    item_id: str
    item_qty: int


class RejectionReason(Enum):
    ITEMS_NOT_FOUND = "items_not_found"
    INSUFFICIENT_STOCK = "insufficient_stock"


@dataclass(frozen=True)
class PricedOrder:
    """Lines accepted by the catalog and their server-computed total."""

    lines: tuple[RequestedLine, ...]
    value_before_discount: int


@dataclass(frozen=True)
class PricingRejection:
    """Why the catalog refused the requested lines."""

    reason: RejectionReason
    item_id: str | None = None
    item_name: str | None = None
    available_qty: int = 0
    requested_qty: int = 0

    def to_error(self) -> ClientInputError:
        if self.reason == RejectionReason.ITEMS_NOT_FOUND:
            return ItemsNotFoundError("Items not found")
        return InsufficientStockError(
            item_id=self.item_id,
            item_name=self.item_name,
            available_qty=self.available_qty,
            requested_qty=self.requested_qty,
        )


def parse_items_list(items_list) -> tuple[RequestedLine, ...]:
    """Turn raw ``[{item_id, item_qty}]`` input into requested lines.

    Raises ``ClientInputError`` for an empty list or a malformed entry. Any
    client-supplied price is ignored.
    """
    if not items_list or not isinstance(items_list, list | tuple):
        raise ClientInputError("Failed to create order. No items found")

    lines = []
    for position, entry in enumerate(items_list, start=1):
        if not isinstance(entry, dict):
            raise ClientInputError(f"Line {position} must name an item_id and an item_qty", line=position)

        item_id = entry.get("item_id")
        item_qty = entry.get("item_qty")
        if not item_id or not isinstance(item_id, str):
            raise ClientInputError(f"Line {position} is missing an item_id", line=position)
        if isinstance(item_qty, bool) or not isinstance(item_qty, int) or item_qty < 1:
            raise ClientInputError(
                f"Line {position} must request a positive quantity",
                line=position,
                item_id=item_id,
            )
        lines.append(RequestedLine(item_id=item_id, item_qty=item_qty))

    return tuple(lines)


def price_lines(lines: tuple[RequestedLine, ...], catalog_rows: list[CatalogRow]) -> PricedOrder | PricingRejection:
    """Price ``lines`` exclusively from ``catalog_rows``.

    Quantities for an item repeated across lines are checked together, so
    the order can never ask for more than the catalog holds.
    """
    if not catalog_rows:
        return PricingRejection(reason=RejectionReason.ITEMS_NOT_FOUND)

    rows = {row.item_id: row for row in catalog_rows}
    requested: dict[str, int] = {}
    total = 0

    for line in lines:
        row = rows.get(line.item_id)
        requested[line.item_id] = requested.get(line.item_id, 0) + line.item_qty

        if row is None:
            return PricingRejection(
                reason=RejectionReason.INSUFFICIENT_STOCK,
                item_id=line.item_id,
                available_qty=0,
                requested_qty=requested[line.item_id],
            )
        if requested[line.item_id] > row.available_qty:
            return PricingRejection(
                reason=RejectionReason.INSUFFICIENT_STOCK,
                item_id=row.item_id,
                item_name=row.item_name,
                available_qty=row.available_qty,
                requested_qty=requested[line.item_id],
            )

        total += row.price_in_paise * line.item_qty

    return PricedOrder(lines=lines, value_before_discount=total)
