"""Storefront bounded context — shops, catalogue, checkout and delivery.

Sellers register a shop and list products; buyers check out a cart against
a public storefront; orders move through payment confirmation and carrier
booking until delivery.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
