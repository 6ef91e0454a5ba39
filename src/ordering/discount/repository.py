"""Repository for the DiscountCode aggregate."""

from datetime import datetime

from ordering.discount.discount_code import DiscountCode
from ordering.domain import ordering
from ordering.utils.queries import fetch_all


@ordering.repository(part_of=DiscountCode)
class DiscountCodeRepository:
    def all_codes(self) -> list[DiscountCode]:
        """Every discount code, oldest first."""
        codes = fetch_all(self._dao.query)
        return sorted(codes, key=lambda code: code.created_on or datetime.min)
