"""Consumes an ACTIVE discount code for one order."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.discount.discount_code import DiscountCode
from ordering.domain import ordering
from ordering.errors import DiscountCodeUnavailableError, OrderNotFoundError, store_access
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@ordering.command(part_of="DiscountCode")
class RedeemDiscountCode:
    code = Identifier(required=True)
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)


def consume_code(code: str, order_id: str) -> DiscountCode:
    """Mark ``code`` USED by ``order_id`` within the current unit of work."""
    repo = current_domain.repository_for(DiscountCode)
    discount_code = repo.get(code)
    discount_code.redeem(order_id=order_id)
    repo.add(discount_code)
    return discount_code


@ordering.command_handler(part_of=DiscountCode)
class RedeemDiscountCodeHandler:
    @handle(RedeemDiscountCode)
    def redeem_discount_code(self, command):
        try:
            order = current_domain.repository_for(Order).get(command.order_id)
        except ObjectNotFoundError:
            raise OrderNotFoundError(command.order_id) from None

        # Another buyer's order is reported exactly like a missing one
        if str(order.user_id) != str(command.user_id):
            raise OrderNotFoundError(command.order_id)

        consume_code(command.code, str(order.id))


def redeem_code(code: str, order_id: str, user_id: str) -> None:
    """Mark ``code`` as USED by ``user_id``'s order ``order_id``.

    Raises ``OrderNotFoundError`` when the order does not exist or belongs to
    someone else, and ``DiscountCodeUnavailableError`` when the code is
    unknown or no longer ACTIVE, so a code can never be consumed twice.
    """
    command = RedeemDiscountCode(code=code, order_id=order_id, user_id=user_id)
    try:
        with store_access("redeem_discount_code", code=code, order_id=order_id):
            current_domain.process(command, asynchronous=False)
    except (ObjectNotFoundError, ValidationError) as exc:
        logger.info("Discount code could not be redeemed", code=code, order_id=order_id, error=str(exc))
        raise DiscountCodeUnavailableError(f"Discount code {code} is not available", code=code) from exc

    logger.info("Discount code redeemed", code=code, order_id=order_id, user_id=user_id)
