"""Order placement service, the entry point for creating an order.

Sequence:
    1. Reject an empty or malformed item list before touching any store
    2. Generate the order id
    3. Process PlaceOrder (catalog check, pricing, nth-order discount,
       redemption of the buyer's code, persistence) as one unit of work
    4. Ask the payment collaborator for an invoice for the amount due

Once step 3 commits the order exists. A failure in step 4 is reported as
``InvoiceUnavailableError`` carrying the order id, never as a failed
placement.
"""

import json
import threading
from dataclasses import dataclass
from uuid import uuid4

import structlog
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from ordering.errors import InvoiceUnavailableError, OrderingError, store_access
from ordering.order.creation import PlaceOrder
from ordering.order.order import Order
from ordering.order.pricing import parse_items_list
from payments.gateway import get_gateway

logger = structlog.get_logger(__name__)

# Serializes sequence assignment and order insertion within this process only.
# Separate worker processes share no lock: concurrent placements there rely on
# the provider rejecting a stale OrderSequence version, which surfaces as a
# retryable StoreUnavailableError rather than a duplicate sequence number.
_placement_lock = threading.Lock()


@dataclass(frozen=True)
class OrderReceipt:
    order_id: str
    invoice_id: str
    order_value_in_paise_after_discount: float
    discount_amount: float
    discount_code: str | None = None
    applied_discount_code: str | None = None


def create_order(user_id: str, items_list: list[dict], discount_code: str | None = None) -> OrderReceipt:
    """Place an order for ``user_id`` and return its invoice reference.

    ``discount_code`` is optional; a code that is unknown, malformed or
    already used is ignored and the order is priced without it.
    """
    lines = parse_items_list(items_list)
    order_id = str(uuid4())

    command = PlaceOrder(
        order_id=order_id,
        user_id=user_id,
        items=json.dumps([{"item_id": line.item_id, "item_qty": line.item_qty} for line in lines]),
        discount_code=discount_code or None,
    )

    try:
        with _placement_lock, store_access("place_order", order_id=order_id, user_id=user_id):
            current_domain.process(command, asynchronous=False)
    except (OrderingError, ValidationError) as exc:
        logger.warning(
            "Failed to create order",
            order_id=order_id,
            user_id=user_id,
            requested=[(line.item_id, line.item_qty) for line in lines],
            error=str(exc),
        )
        raise

    with store_access("load_order", order_id=order_id):
        order = current_domain.repository_for(Order).get(order_id)

    invoice_id = _request_invoice(order_id, order.order_value_in_paise_after_discount)

    logger.info(
        "Created order successfully, sending invoice to user",
        order_id=order_id,
        invoice_id=invoice_id,
        sequence_number=order.sequence_number,
        order_value_in_paise_after_discount=order.order_value_in_paise_after_discount,
        discount_amount=order.discount_amount,
    )
    return OrderReceipt(
        order_id=order_id,
        invoice_id=invoice_id,
        order_value_in_paise_after_discount=order.order_value_in_paise_after_discount,
        discount_amount=order.discount_amount or 0.0,
        discount_code=str(order.discount_code) if order.discount_code else None,
        applied_discount_code=str(order.applied_discount_code) if order.applied_discount_code else None,
    )


def _request_invoice(order_id: str, amount_in_paise: float) -> str:
    try:
        result = get_gateway().generate_invoice(order_id, amount_in_paise)
    except Exception as exc:
        logger.error("Invoice request failed", order_id=order_id, amount_in_paise=amount_in_paise, error=str(exc))
        raise InvoiceUnavailableError(order_id=order_id, reason=str(exc)) from exc

    if not result.success or not result.invoice_id:
        reason = result.failure_reason or "No invoice returned"
        logger.error("Invoice request declined", order_id=order_id, amount_in_paise=amount_in_paise, reason=reason)
        raise InvoiceUnavailableError(order_id=order_id, reason=reason)

    return result.invoice_id
