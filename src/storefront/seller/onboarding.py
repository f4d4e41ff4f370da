"""Seller onboarding — command and handler.

Generates the shop slug from the shop name and appends a random base-36
suffix until it no longer collides with an existing shop.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.seller.seller import Seller
from storefront.shared.slug import random_suffix, slugify

logger = structlog.get_logger(__name__)

MAX_SLUG_ATTEMPTS = 10


@storefront.command(part_of="Seller")
class RegisterSeller:
    """Create a seller profile and reserve its storefront slug."""

    shop_name = String(required=True, max_length=100)
    phone = String(max_length=20)
    promptpay_id = String(max_length=20)
    pickup_address = String(max_length=500)


def unique_slug(shop_name: str) -> str:
    repo = current_domain.repository_for(Seller)
    base = slugify(shop_name)
    slug = base
    for _ in range(MAX_SLUG_ATTEMPTS):
        if not repo.slug_taken(slug):
            return slug
        slug = f"{base}-{random_suffix()}"
    raise ValidationError({"shop_name": ["Could not reserve a shop link, please try a different name"]})


@storefront.command_handler(part_of=Seller)
class RegisterSellerHandler:
    @handle(RegisterSeller)
    def register_seller(self, command):
        if not command.shop_name.strip():
            raise ValidationError({"shop_name": ["Shop name is required"]})

        slug = unique_slug(command.shop_name)
        seller = Seller.register(
            shop_name=command.shop_name,
            shop_slug=slug,
            phone=command.phone,
            promptpay_id=command.promptpay_id,
            pickup_address=command.pickup_address,
        )
        current_domain.repository_for(Seller).add(seller)

        logger.info("Seller registered", seller_id=str(seller.id), shop_slug=slug)
        return str(seller.id)
