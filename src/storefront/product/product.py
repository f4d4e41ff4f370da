"""Product aggregate — an item a seller lists on their storefront.

Prices are whole currency units. Deactivating a product hides it from the
storefront without deleting it; placed orders keep their own snapshot of the
name and price either way.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.aggregate
class Product:
    seller_id = Identifier(required=True)
    name = String(required=True, max_length=200)
    description = Text()
    price = Integer(required=True, min_value=0)
    image_url = String(max_length=500)
    is_active = Boolean(default=True)
    sort_order = Integer(default=0)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, seller_id, name, price, description=None, image_url=None, sort_order=0, is_active=True):
        if not (name or "").strip():
            raise ValidationError({"name": ["Product name is required"]})
        now = datetime.now(UTC)
        return cls(
            seller_id=seller_id,
            name=name.strip(),
            description=description or None,
            price=price,
            image_url=image_url or None,
            sort_order=sort_order or 0,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )

    def belongs_to(self, seller_id) -> bool:
        return str(self.seller_id) == str(seller_id)

    def update_details(self, name=None, description=None, price=None, image_url=None, sort_order=None):
        if name is not None:
            if not name.strip():
                raise ValidationError({"name": ["Product name is required"]})
            self.name = name.strip()
        if description is not None:
            self.description = description or None
        if price is not None:
            self.price = price
        if image_url is not None:
            self.image_url = image_url or None
        if sort_order is not None:
            self.sort_order = sort_order
        self.updated_at = datetime.now(UTC)

    def set_visibility(self, is_active: bool):
        self.is_active = is_active
        self.updated_at = datetime.now(UTC)


def listing_order(products):
    """Sort for display: ``sort_order`` ascending, newest first on ties."""
    by_newest = sorted(products, key=lambda p: p.created_at or datetime.min.replace(tzinfo=UTC), reverse=True)
    return sorted(by_newest, key=lambda p: p.sort_order or 0)
