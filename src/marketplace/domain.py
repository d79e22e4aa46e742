"""Marketplace domain — furniture catalogue, carts, payments, orders and settlements.

A single bounded context so that every multi-aggregate operation (approve a
payment and clear the buyer's cart, approve a product and publish its
listing) commits inside one unit of work.
"""

from protean.domain import Domain

from marketplace.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
marketplace = Domain(name="marketplace")
