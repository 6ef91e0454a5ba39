"""Takes paid stock out of the catalog, one order at a time.

All lines of an order are decremented inside one unit of work: if any line
lacks stock, none of the items change.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.catalog.item import Item
from ordering.domain import ordering
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Item")
class RecordPurchase:
    order_id = Identifier(required=True)


@ordering.command_handler(part_of=Item)
class RecordPurchaseHandler:
    @handle(RecordPurchase)
    def record_purchase(self, command):
        order = current_domain.repository_for(Order).get(command.order_id)
        item_repo = current_domain.repository_for(Item)

        quantities: dict[str, int] = {}
        for line in order.ordered_lines():
            quantities[str(line.item_id)] = quantities.get(str(line.item_id), 0) + line.item_qty

        for item_id, quantity in quantities.items():
            item = item_repo.get(item_id)
            item.record_purchase(order_id=str(order.id), quantity=quantity)
            item_repo.add(item)

        logger.info(
            "Recorded purchase against catalog",
            order_id=str(order.id),
            line_count=len(order.items_purchased),
        )
