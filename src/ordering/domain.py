"""Ordering bounded context — Item Catalog, Orders and Discount Codes.

Handles order placement (validation against the catalog, nth-order discount
eligibility, invoice acquisition), the discount code registry, and the
read-only admin reports over orders and codes.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
