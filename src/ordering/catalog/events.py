"""Domain events for the Item aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Item")
class ItemAdded:
    """A new item was added to the catalog."""

    __version__ = 1

    item_id = Identifier(required=True)
    item_name = String(required=True, max_length=255)
    price_in_paise = Integer(required=True)
    available_qty = Integer(required=True)
    added_on = DateTime(required=True)


@ordering.event(part_of="Item")
class ItemPurchaseRecorded:
    """Stock was taken out of the catalog for a paid order."""

    __version__ = 1

    item_id = Identifier(required=True)
    order_id = Identifier(required=True)
    quantity = Integer(required=True)
    available_qty = Integer(required=True)
    purchased_count = Integer(required=True)
    recorded_on = DateTime(required=True)
