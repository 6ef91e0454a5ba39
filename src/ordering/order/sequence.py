"""OrderSequence aggregate — strictly increasing order numbers.

The next number is taken inside the same unit of work that inserts the
order, so an order's position (and hence its discount eligibility) is fixed
by the write that creates it rather than by an earlier count of the orders
collection.
"""

from protean.exceptions import ObjectNotFoundError
from protean.fields import Integer, String
from protean.utils.globals import current_domain

from ordering.domain import ordering

ORDER_SEQUENCE = "orders"


@ordering.aggregate
class OrderSequence:
    name = String(identifier=True, max_length=50)
    last_value = Integer(default=0, min_value=0)

    def advance(self) -> int:
        self.last_value = (self.last_value or 0) + 1
        return self.last_value


def next_order_number() -> int:
    """Advance the order sequence and return the number assigned (1-indexed)."""
    repo = current_domain.repository_for(OrderSequence)
    try:
        sequence = repo.get(ORDER_SEQUENCE)
    except ObjectNotFoundError:
        sequence = OrderSequence(name=ORDER_SEQUENCE, last_value=0)

    number = sequence.advance()
    repo.add(sequence)
    return number
