"""Repository for the Order aggregate."""

from ordering.domain import ordering
from ordering.order.order import Order
from ordering.utils.queries import fetch_all


@ordering.repository(part_of=Order)
class OrderRepository:
    def all_orders(self) -> list[Order]:
        """Every order, in placement order."""
        return sorted(fetch_all(self._dao.query), key=lambda order: order.sequence_number or 0)
