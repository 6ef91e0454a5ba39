"""DiscountCode aggregate (CQRS) — a single-use token for a percentage price reduction.

The aggregate identity doubles as the human-facing code string, so codes are
unique without a separate generator. Codes are issued either by the order
flow (the nth order earns one, tagged with that order) or by an
administrator (no order reference).

State Machine:
    ACTIVE → USED     (redeemed by exactly one order)
    ACTIVE → EXPIRED  (withdrawn by an administrator)

Validation never changes the status; only redemption consumes a code.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.discount.events import DiscountCodeExpired, DiscountCodeIssued, DiscountCodeRedeemed
from ordering.domain import ordering

DEFAULT_DISCOUNT_PERCENT = 10


class DiscountCodeStatus(Enum):
    ACTIVE = "Active"
    USED = "Used"
    EXPIRED = "Expired"


_VALID_TRANSITIONS = {
    DiscountCodeStatus.ACTIVE: {DiscountCodeStatus.USED, DiscountCodeStatus.EXPIRED},
    DiscountCodeStatus.USED: set(),  # Terminal
    DiscountCodeStatus.EXPIRED: set(),  # Terminal
}


@ordering.aggregate
class DiscountCode:
    discount_percent = Integer(required=True, min_value=0, max_value=100)
    status = String(
        choices=DiscountCodeStatus,
        default=DiscountCodeStatus.ACTIVE.value,
    )
    discount_amount = Float(default=0.0, min_value=0.0)
    order_id = Identifier()
    redeemed_by_order_id = Identifier()
    created_on = DateTime()
    redeemed_on = DateTime()

    def _assert_can_transition(self, target_status: DiscountCodeStatus) -> None:
        current = DiscountCodeStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    @classmethod
    def issue(
        cls,
        discount_percent: int = DEFAULT_DISCOUNT_PERCENT,
        order_id: str | None = None,
        discount_amount: float | None = None,
    ):
        """Issue a new ACTIVE code, optionally tied to the order that earned it."""
        now = datetime.now(UTC)
        code = cls(
            discount_percent=discount_percent,
            status=DiscountCodeStatus.ACTIVE.value,
            discount_amount=discount_amount or 0.0,
            order_id=order_id,
            created_on=now,
        )
        code.raise_(
            DiscountCodeIssued(
                code=str(code.id),
                discount_percent=discount_percent,
                discount_amount=code.discount_amount,
                order_id=order_id,
                issued_on=now,
            )
        )
        return code

    @property
    def is_active(self) -> bool:
        return DiscountCodeStatus(self.status) == DiscountCodeStatus.ACTIVE

    def redeem(self, order_id: str) -> None:
        """Consume the code for ``order_id``; a code can be redeemed once."""
        self._assert_can_transition(DiscountCodeStatus.USED)
        now = datetime.now(UTC)
        self.status = DiscountCodeStatus.USED.value
        self.redeemed_by_order_id = order_id
        self.redeemed_on = now
        self.raise_(
            DiscountCodeRedeemed(
                code=str(self.id),
                order_id=order_id,
                redeemed_on=now,
            )
        )

    def expire(self) -> None:
        self._assert_can_transition(DiscountCodeStatus.EXPIRED)
        now = datetime.now(UTC)
        self.status = DiscountCodeStatus.EXPIRED.value
        self.raise_(
            DiscountCodeExpired(
                code=str(self.id),
                expired_on=now,
            )
        )
