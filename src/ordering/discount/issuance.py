"""Discount code issuance — command, handler and the registry entry point."""

import structlog
from protean import handle
from protean.fields import Float, Identifier, Integer
from protean.utils.globals import current_domain

from ordering.discount.discount_code import DEFAULT_DISCOUNT_PERCENT, DiscountCode
from ordering.domain import ordering
from ordering.errors import store_access

logger = structlog.get_logger(__name__)


@ordering.command(part_of="DiscountCode")
class IssueDiscountCode:
    """Issue a new ACTIVE discount code."""

    discount_percent = Integer(default=DEFAULT_DISCOUNT_PERCENT, min_value=0, max_value=100)
    order_id = Identifier()
    discount_amount = Float(min_value=0.0)


def register_code(
    discount_percent: int = DEFAULT_DISCOUNT_PERCENT,
    order_id: str | None = None,
    discount_amount: float | None = None,
) -> DiscountCode:
    """Issue a code and add it to the registry within the current unit of work."""
    code = DiscountCode.issue(
        discount_percent=discount_percent,
        order_id=order_id,
        discount_amount=discount_amount,
    )
    current_domain.repository_for(DiscountCode).add(code)
    return code


@ordering.command_handler(part_of=DiscountCode)
class IssueDiscountCodeHandler:
    @handle(IssueDiscountCode)
    def issue_discount_code(self, command):
        code = register_code(
            discount_percent=command.discount_percent,
            order_id=command.order_id,
            discount_amount=command.discount_amount,
        )
        return str(code.id)


def issue_code(
    discount_percent: int = DEFAULT_DISCOUNT_PERCENT,
    order_id: str | None = None,
    discount_amount: float | None = None,
) -> str:
    """Create an ACTIVE code and return it.

    Raises ``StoreUnavailableError`` when the code cannot be persisted.
    """
    command = IssueDiscountCode(
        discount_percent=discount_percent,
        order_id=order_id,
        discount_amount=discount_amount,
    )
    with store_access("issue_discount_code", order_id=order_id):
        code = current_domain.process(command, asynchronous=False)

    logger.info("Discount code created", code=code, discount_percent=discount_percent, order_id=order_id)
    return code
