"""Catalog stocking — command and handler for adding items to the catalog."""

import structlog
from protean import handle
from protean.fields import Integer, String
from protean.utils.globals import current_domain

from ordering.catalog.item import Item
from ordering.domain import ordering
from ordering.errors import store_access

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Item")
class AddCatalogItem:
    item_name = String(required=True, max_length=255)
    price_in_paise = Integer(required=True, min_value=0)
    available_qty = Integer(default=0, min_value=0)


@ordering.command_handler(part_of=Item)
class AddCatalogItemHandler:
    @handle(AddCatalogItem)
    def add_catalog_item(self, command):
        item = Item.add(
            item_name=command.item_name,
            price_in_paise=command.price_in_paise,
            available_qty=command.available_qty or 0,
        )
        current_domain.repository_for(Item).add(item)
        return str(item.id)


def add_catalog_item(item_name: str, price_in_paise: int, available_qty: int = 0) -> str:
    """Stock a new catalog item and return its id."""
    command = AddCatalogItem(item_name=item_name, price_in_paise=price_in_paise, available_qty=available_qty)
    with store_access("add_catalog_item", item_name=item_name):
        item_id = current_domain.process(command, asynchronous=False)

    logger.info("Catalog item added", item_id=item_id, item_name=item_name, available_qty=available_qty)
    return item_id
