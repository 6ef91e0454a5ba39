"""Error kinds raised by the ordering context.

Client errors are rejected requests that the caller can correct (no retry).
Dependency failures are infrastructure problems; the whole transaction is
safe to retry. The API layer translates each kind into an HTTP response.
"""

from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError

logger = structlog.get_logger(__name__)


class OrderingError(Exception):
    """Base class for every error kind surfaced by the ordering context."""

    status_code = 500

    def __init__(self, message: str, **context) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict:
        return {"error": self.message, "kind": type(self).__name__, **self.context}


# ---------------------------------------------------------------------------
# Client errors
# ---------------------------------------------------------------------------
class ClientInputError(OrderingError):
    """The request itself is malformed (e.g. an empty item list)."""

    status_code = 400


class ItemsNotFoundError(ClientInputError):
    """None of the requested items exist in the catalog."""

    status_code = 404


class InsufficientStockError(ClientInputError):
    """A requested quantity exceeds what the catalog has available."""

    status_code = 409

    def __init__(self, item_id: str, item_name: str | None, available_qty: int, requested_qty: int) -> None:
        label = item_name or item_id
        super().__init__(
            f"Only {available_qty} units of {label} are left",
            item_id=item_id,
            item_name=item_name,
            available_qty=available_qty,
            requested_qty=requested_qty,
        )
        self.item_id = item_id
        self.item_name = item_name
        self.available_qty = available_qty
        self.requested_qty = requested_qty


class DiscountCodeUnavailableError(ClientInputError):
    """The discount code does not exist or is no longer ACTIVE."""

    status_code = 409


class OrderNotFoundError(ClientInputError):
    """The order does not exist, or is not the caller's to act on."""

    status_code = 404

    def __init__(self, order_id: str) -> None:
        super().__init__(f"Order {order_id} not found", order_id=order_id)
        self.order_id = order_id


# ---------------------------------------------------------------------------
# Dependency failures
# ---------------------------------------------------------------------------
class DependencyFailure(OrderingError):
    """A collaborator (store, payment gateway) failed; safe to retry."""

    status_code = 503


class StoreUnavailableError(DependencyFailure):
    """Reading or writing Item, Order or DiscountCode records failed."""


class InvoiceUnavailableError(DependencyFailure):
    """The order was committed but the payment collaborator issued no invoice."""

    status_code = 502

    def __init__(self, order_id: str, reason: str) -> None:
        super().__init__(
            f"Order {order_id} was created but no invoice could be generated: {reason}",
            order_id=order_id,
            order_created=True,
        )
        self.order_id = order_id
        self.reason = reason


# ---------------------------------------------------------------------------
# Reporting and access
# ---------------------------------------------------------------------------
class AggregationDataError(OrderingError):
    """An admin aggregate could not be computed from the stored records."""


class NoDataError(AggregationDataError):
    """Records exist but the aggregated value is undefined."""


class AdminCapabilityRequired(OrderingError):
    """The caller did not present an administrative capability."""

    status_code = 403


class ConfigurationError(OrderingError):
    """A tunable (such as the discount period) is set to an unusable value."""


@contextmanager
def store_access(operation: str, **context) -> Iterator[None]:
    """Translate unexpected storage failures into ``StoreUnavailableError``.

    Domain errors, validation failures and missing records pass through
    untouched so callers can still tell them apart.
    """
    try:
        yield
    except (OrderingError, ValidationError, ObjectNotFoundError):
        raise
    except Exception as exc:
        logger.error("Store operation failed", operation=operation, error=str(exc), **context)
        raise StoreUnavailableError(f"Store unavailable during {operation}", operation=operation) from exc
