"""Admin actions on the discount code registry and the catalog."""

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from ordering.admin.capability import AdminCapability, require_admin
from ordering.catalog.stocking import add_catalog_item
from ordering.discount.discount_code import DEFAULT_DISCOUNT_PERCENT
from ordering.discount.expiry import ExpireDiscountCode
from ordering.discount.issuance import issue_code
from ordering.errors import DiscountCodeUnavailableError, store_access

logger = structlog.get_logger(__name__)


def issue_promotional_code(capability: AdminCapability, discount_percent: int = DEFAULT_DISCOUNT_PERCENT) -> str:
    """Issue a code that is not tied to any order."""
    require_admin(capability)
    code = issue_code(discount_percent=discount_percent)
    logger.info("Promotional code issued", code=code, user_id=capability.user_id, discount_percent=discount_percent)
    return code


def expire_code(capability: AdminCapability, code: str) -> None:
    """Withdraw an ACTIVE code."""
    require_admin(capability)
    try:
        with store_access("expire_discount_code", code=code):
            current_domain.process(ExpireDiscountCode(code=code), asynchronous=False)
    except (ObjectNotFoundError, ValidationError) as exc:
        logger.info("Discount code could not be expired", code=code, error=str(exc))
        raise DiscountCodeUnavailableError(f"Discount code {code} is not available", code=code) from exc

    logger.info("Discount code expired", code=code, user_id=capability.user_id)


def stock_item(capability: AdminCapability, item_name: str, price_in_paise: int, available_qty: int = 0) -> str:
    require_admin(capability)
    return add_catalog_item(item_name=item_name, price_in_paise=price_in_paise, available_qty=available_qty)
