"""Checkout bounded context: shopper carts, payment verification and orders.

Handles the single-vendor shopping cart (CQRS), the two-phase payment flow
(gateway intent, signed settlement) and the immutable order record written
once a settlement has been verified.
"""

import structlog
from protean.domain import Domain

checkout = Domain(name="checkout")

logger = structlog.get_logger(__name__)
