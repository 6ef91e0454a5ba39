"""Discount code expiry — command and handler for withdrawing an ACTIVE code."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.discount.discount_code import DiscountCode
from ordering.domain import ordering


@ordering.command(part_of="DiscountCode")
class ExpireDiscountCode:
    code = Identifier(required=True)


@ordering.command_handler(part_of=DiscountCode)
class ExpireDiscountCodeHandler:
    @handle(ExpireDiscountCode)
    def expire_discount_code(self, command):
        repo = current_domain.repository_for(DiscountCode)
        discount_code = repo.get(command.code)
        discount_code.expire()
        repo.add(discount_code)
