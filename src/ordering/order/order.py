"""Order aggregate (CQRS) — the record of a placed order.

An order is written exactly once, at placement, with every value computed on
the server: the catalog prices its lines, the order sequence fixes its
position, and the nth-order rule decides its discount. Later lifecycle
states (payment, shipping, returns) belong to other systems, so CREATED is
the only status this aggregate produces.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from ordering.domain import ordering
from ordering.order.eligibility import DiscountDecision
from ordering.order.events import OrderPlaced
from ordering.order.pricing import PricedOrder


class OrderStatus(Enum):
    CREATED = "Created"


@ordering.entity(part_of="Order")
class OrderLine:
    """One requested line: which catalog item and how many units."""

    line_number = Integer(required=True, min_value=1)
    item_id = Identifier(required=True)
    item_qty = Integer(required=True, min_value=1)


@ordering.aggregate
class Order:
    user_id = Identifier(required=True)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.CREATED.value,
    )
    sequence_number = Integer(required=True, min_value=1)
    items_purchased = HasMany(OrderLine)
    order_value_in_paise_before_discount = Float(required=True, min_value=0.0)
    order_value_in_paise_after_discount = Float(required=True, min_value=0.0)
    discount_amount = Float(default=0.0, min_value=0.0)
    discount_code = Identifier()  # earned by this order
    applied_discount_code = Identifier()  # presented by the buyer and redeemed
    created_on = DateTime()

    @invariant.post
    def after_discount_value_must_equal_before_minus_discount(self):
        before = self.order_value_in_paise_before_discount or 0.0
        after = self.order_value_in_paise_after_discount or 0.0
        discount = self.discount_amount or 0.0
        if abs(round(before - discount, 2) - after) > 0.005:
            raise ValidationError(
                {"order_value_in_paise_after_discount": ["Value after discount must equal value before minus discount"]}
            )

    @invariant.post
    def discount_requires_a_discount_code(self):
        if (self.discount_amount or 0.0) > 0 and not (self.discount_code or self.applied_discount_code):
            raise ValidationError({"discount_code": ["A discounted order must reference its discount code"]})

    @classmethod
    def place(
        cls,
        order_id: str,
        user_id: str,
        sequence_number: int,
        priced: PricedOrder,
        decision: DiscountDecision,
        discount_code: str | None = None,
        applied_discount_code: str | None = None,
    ):
        """Build the order record for a priced, numbered request.

        ``order_id`` is generated by the caller before any other work so a
        discount code issued in the same transaction can reference it.
        ``discount_code`` is the code this order earned; ``applied_discount_code``
        is the buyer's code that was redeemed against it.
        """
        now = datetime.now(UTC)
        order = cls(
            id=order_id,
            user_id=user_id,
            status=OrderStatus.CREATED.value,
            sequence_number=sequence_number,
            order_value_in_paise_before_discount=decision.value_before_discount,
            order_value_in_paise_after_discount=decision.value_after_discount,
            discount_amount=decision.discount_amount,
            discount_code=discount_code,
            applied_discount_code=applied_discount_code,
            created_on=now,
        )
        for line_number, line in enumerate(priced.lines, start=1):
            order.add_items_purchased(
                OrderLine(
                    line_number=line_number,
                    item_id=line.item_id,
                    item_qty=line.item_qty,
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=order_id,
                user_id=str(user_id),
                sequence_number=sequence_number,
                items=json.dumps([{"item_id": line.item_id, "item_qty": line.item_qty} for line in priced.lines]),
                order_value_in_paise_before_discount=decision.value_before_discount,
                order_value_in_paise_after_discount=decision.value_after_discount,
                discount_amount=decision.discount_amount,
                discount_code=discount_code,
                applied_discount_code=applied_discount_code,
                placed_on=now,
            )
        )
        return order

    def ordered_lines(self) -> list[OrderLine]:
        """Lines in the order the buyer requested them."""
        return sorted(self.items_purchased, key=lambda line: line.line_number)
