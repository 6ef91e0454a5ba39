"""Discount code validation.

An invalid code is a normal outcome rather than an error: checkout carries
on without a discount. Lookup failures are therefore reported as "invalid"
instead of being raised.
"""

from dataclasses import dataclass
from uuid import UUID

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.discount.discount_code import DiscountCode

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CodeValidation:
    """Outcome of validating a discount code."""

    valid_code: bool
    discount_percent: int | None = None


INVALID = CodeValidation(valid_code=False)


def _is_well_formed(code) -> bool:
    if not isinstance(code, str) or not code:
        return False
    try:
        UUID(code)
    except ValueError:
        return False
    return True


def validate_code(code: str) -> CodeValidation:
    """Check whether ``code`` can currently be used. Never raises."""
    if not _is_well_formed(code):
        logger.info("Invalid discount code", code=code, reason="malformed")
        return INVALID

    try:
        discount_code = current_domain.repository_for(DiscountCode).get(code)
    except ObjectNotFoundError:
        logger.info("Invalid discount code", code=code, reason="not_found")
        return INVALID
    except Exception as exc:
        logger.warning("Discount code lookup failed, treating as invalid", code=code, error=str(exc))
        return INVALID

    if not discount_code.is_active:
        logger.info("Invalid discount code", code=code, reason="inactive", status=discount_code.status)
        return INVALID

    logger.info("Valid discount code", code=code)
    return CodeValidation(valid_code=True, discount_percent=discount_code.discount_percent)
