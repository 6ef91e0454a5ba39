"""Order placement — command and handler.

The handler runs inside a single unit of work: the order sequence advance,
the discount code earned by an nth order, the redemption of a code presented
by the buyer and the order record are committed together or not at all.
"""

import json

import structlog
from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from ordering.catalog.item import Item
from ordering.discount.issuance import register_code
from ordering.discount.redemption import consume_code
from ordering.discount.validation import validate_code
from ordering.domain import ordering
from ordering.order.eligibility import decide_discount, discount_period
from ordering.order.order import Order
from ordering.order.pricing import PricingRejection, parse_items_list, price_lines
from ordering.order.sequence import next_order_number

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {item_id, item_qty}
    discount_code = Text()


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items_list = json.loads(command.items) if isinstance(command.items, str) else command.items
        lines = parse_items_list(items_list)
        period = discount_period()

        catalog_rows = current_domain.repository_for(Item).find_catalog_rows([line.item_id for line in lines])
        priced = price_lines(lines, catalog_rows)
        if isinstance(priced, PricingRejection):
            logger.warning(
                "Order rejected by catalog",
                order_id=command.order_id,
                reason=priced.reason.value,
                item_id=priced.item_id,
                requested_qty=priced.requested_qty,
                available_qty=priced.available_qty,
            )
            raise priced.to_error()

        # An unusable code never fails the order; it is ignored
        applied_code = None
        code_percent = 0
        if command.discount_code:
            validation = validate_code(command.discount_code)
            if validation.valid_code:
                applied_code = command.discount_code
                code_percent = validation.discount_percent or 0
            else:
                logger.info("Order placed without presented code", order_id=command.order_id)

        sequence_number = next_order_number()
        decision = decide_discount(sequence_number, priced.value_before_discount, period, code_percent=code_percent)

        if applied_code:
            consume_code(applied_code, command.order_id)

        earned_code = None
        if decision.eligible:
            earned_code = str(
                register_code(
                    discount_percent=decision.discount_percent,
                    order_id=command.order_id,
                    discount_amount=decision.reward_amount,
                ).id
            )
            logger.info(
                "Nth order discount applied",
                order_id=command.order_id,
                sequence_number=sequence_number,
                discount_amount=decision.reward_amount,
                code=earned_code,
            )

        order = Order.place(
            order_id=command.order_id,
            user_id=command.user_id,
            sequence_number=sequence_number,
            priced=priced,
            decision=decision,
            discount_code=earned_code,
            applied_discount_code=applied_code,
        )
        current_domain.repository_for(Order).add(order)
        return str(order.id)
