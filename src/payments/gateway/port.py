"""Payment gateway port (abstract interface).

Defines the contract the ordering context relies on for invoices and
payment confirmation. Adapters can be swapped (FakeGateway for dev/test,
a real provider in production) without changing any domain code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class InvoiceResult:
    """Result of an invoice generation attempt."""

    success: bool
    invoice_id: str | None = None
    amount_in_paise: float | None = None
    failure_reason: str | None = None


@dataclass(frozen=True)
class PaymentResult:
    """Result of a payment attempt against an invoice."""

    success: bool
    gateway_transaction_id: str | None = None
    failure_reason: str | None = None


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def generate_invoice(self, order_id: str, amount_in_paise: float) -> InvoiceResult:
        """Create an invoice for the amount due on an order."""
        ...

    @abstractmethod
    def make_payment(self, order_id: str, invoice_id: str) -> PaymentResult:
        """Collect payment for a previously generated invoice."""
        ...
