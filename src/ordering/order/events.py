"""Domain events for the Order aggregate.

Events are versioned, immutable facts. Orders are written once, so placement
is the only fact this aggregate records.
"""

from protean.fields import DateTime, Float, Identifier, Integer, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A new order was validated, priced and persisted."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    sequence_number = Integer(required=True)
    items = Text(required=True)  # JSON: list of {item_id, item_qty}
    order_value_in_paise_before_discount = Float(required=True)
    order_value_in_paise_after_discount = Float(required=True)
    discount_amount = Float(default=0.0)
    discount_code = Identifier()
    applied_discount_code = Identifier()
    placed_on = DateTime(required=True)
