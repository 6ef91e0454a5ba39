"""Configurable fake payment gateway for development and testing.

This adapter simulates the payment collaborator without any external calls.
It can be told to succeed or fail, which makes both the happy path and the
"order exists, payment not yet arranged" path reproducible in tests.
"""

from uuid import uuid4

from payments.gateway.port import InvoiceResult, PaymentGateway, PaymentResult


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Gateway unavailable"
        self.calls: list[dict] = []
        self.invoices: dict[str, dict] = {}

    def configure(self, should_succeed: bool, failure_reason: str = "Gateway unavailable") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def generate_invoice(self, order_id: str, amount_in_paise: float) -> InvoiceResult:
        self.calls.append(
            {
                "method": "generate_invoice",
                "order_id": order_id,
                "amount_in_paise": amount_in_paise,
            }
        )

        if not self.should_succeed:
            return InvoiceResult(success=False, failure_reason=self.failure_reason)

        invoice_id = f"INV-{uuid4().hex[:8].upper()}"
        self.invoices[invoice_id] = {"order_id": order_id, "amount_in_paise": amount_in_paise, "paid": False}
        return InvoiceResult(success=True, invoice_id=invoice_id, amount_in_paise=amount_in_paise)

    def make_payment(self, order_id: str, invoice_id: str) -> PaymentResult:
        self.calls.append(
            {
                "method": "make_payment",
                "order_id": order_id,
                "invoice_id": invoice_id,
            }
        )

        if not self.should_succeed:
            return PaymentResult(success=False, failure_reason=self.failure_reason)

        invoice = self.invoices.get(invoice_id)
        if invoice is None or invoice["order_id"] != order_id:
            return PaymentResult(success=False, failure_reason="Unknown invoice for order")
        if invoice["paid"]:
            return PaymentResult(success=False, failure_reason="Invoice already paid")

        invoice["paid"] = True
        return PaymentResult(success=True, gateway_transaction_id=f"fake_txn_{uuid4().hex[:12]}")
