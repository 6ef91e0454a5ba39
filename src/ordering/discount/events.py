"""Domain events for the DiscountCode aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer

from ordering.domain import ordering


@ordering.event(part_of="DiscountCode")
class DiscountCodeIssued:
    """A new ACTIVE discount code was issued."""

    __version__ = 1

    code = Identifier(required=True)
    discount_percent = Integer(required=True)
    discount_amount = Float(default=0.0)
    order_id = Identifier()
    issued_on = DateTime(required=True)


@ordering.event(part_of="DiscountCode")
class DiscountCodeRedeemed:
    """A discount code was consumed by an order."""

    __version__ = 1

    code = Identifier(required=True)
    order_id = Identifier(required=True)
    redeemed_on = DateTime(required=True)


@ordering.event(part_of="DiscountCode")
class DiscountCodeExpired:
    """An ACTIVE discount code was withdrawn by an administrator."""

    __version__ = 1

    code = Identifier(required=True)
    expired_on = DateTime(required=True)
