"""Nth-order discount eligibility and the discount an order ends up with.

Every Nth order (1-indexed, N read from ``NTH_ORDER_COUNT``) earns a fixed
percentage off its total and a discount code tagged with that order. A code
the buyer presents at checkout adds its own percentage; the two stack, capped
at the full order value.
"""

import os
from dataclasses import dataclass

from ordering.errors import ConfigurationError

DEFAULT_DISCOUNT_PERIOD = 5
NTH_ORDER_DISCOUNT_PERCENT = 10


@dataclass(frozen=True)
class DiscountDecision:
    eligible: bool
    discount_percent: int
    value_before_discount: float
    discount_amount: float
    value_after_discount: float
    reward_amount: float = 0.0
    code_percent: int = 0


def discount_period() -> int:
    """Return the configured discount period N."""
    raw = os.environ.get("NTH_ORDER_COUNT", str(DEFAULT_DISCOUNT_PERIOD))
    try:
        period = int(raw)
    except ValueError:
        raise ConfigurationError(f"NTH_ORDER_COUNT must be a positive integer, got {raw!r}") from None
    if period < 1:
        raise ConfigurationError(f"NTH_ORDER_COUNT must be a positive integer, got {raw!r}")
    return period


def is_discount_eligible(sequence_number: int, period: int) -> bool:
    return sequence_number % period == 0


def decide_discount(
    sequence_number: int,
    value_before_discount: int,
    period: int,
    discount_percent: int = NTH_ORDER_DISCOUNT_PERCENT,
    code_percent: int = 0,
) -> DiscountDecision:
    """Work out the discount for the order at ``sequence_number``.

    ``code_percent`` is the percentage of a valid code presented by the buyer.
    Totals are rounded to two decimal places; the after-discount value is
    always the before-discount value minus the discount.
    """
    before = round(float(value_before_discount), 2)
    eligible = is_discount_eligible(sequence_number, period)
    reward_percent = discount_percent if eligible else 0
    total_percent = min(100, reward_percent + code_percent)

    discount_amount = round(before * total_percent / 100, 2)
    return DiscountDecision(
        eligible=eligible,
        discount_percent=reward_percent,
        value_before_discount=before,
        discount_amount=discount_amount,
        value_after_discount=round(before - discount_amount, 2),
        reward_amount=round(before * reward_percent / 100, 2),
        code_percent=code_percent,
    )
