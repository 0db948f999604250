"""Ordering bounded context — carts, orders and seller fulfillment.

Handles per-shopper cart aggregation (CQRS), buy-now and cart checkout
into immutable orders (event-sourced), and the seller-scoped fulfillment
status pipeline.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
