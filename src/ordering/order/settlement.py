"""Payment settlement for invoiced orders.

Runs after placement, outside its transaction. A successful payment takes
the order's quantities out of the catalog through ``RecordPurchase``.
"""

import structlog
from protean.utils.globals import current_domain

from ordering.catalog.purchase import RecordPurchase
from ordering.errors import store_access
from ordering.order.order import Order
from payments.gateway import get_gateway

logger = structlog.get_logger(__name__)


def settle_payment(order_id: str, invoice_id: str) -> bool:
    """Collect payment for ``invoice_id`` and return whether it succeeded."""
    with store_access("load_order", order_id=order_id):
        current_domain.repository_for(Order).get(order_id)

    result = get_gateway().make_payment(order_id, invoice_id)
    if not result.success:
        logger.warning(
            "Payment failed",
            order_id=order_id,
            invoice_id=invoice_id,
            reason=result.failure_reason,
        )
        return False

    try:
        with store_access("record_purchase", order_id=order_id):
            current_domain.process(RecordPurchase(order_id=order_id), asynchronous=False)
    except Exception as exc:
        logger.error(
            "Payment collected but stock could not be recorded",
            order_id=order_id,
            invoice_id=invoice_id,
            transaction_id=result.gateway_transaction_id,
            error=str(exc),
        )
        raise

    logger.info(
        "Payment settled",
        order_id=order_id,
        invoice_id=invoice_id,
        transaction_id=result.gateway_transaction_id,
    )
    return True
