"""Repository for the Product aggregate — storefront and dashboard listings."""

from storefront.domain import storefront
from storefront.product.product import Product, listing_order


@storefront.repository(part_of=Product)
class ProductRepository:
    def for_seller(self, seller_id) -> list[Product]:
        """All of a seller's products, hidden ones included, in listing order."""
        return listing_order(self._dao.query.filter(seller_id=str(seller_id)).all().items)

    def active_for_seller(self, seller_id) -> list[Product]:
        """Products visible on the public storefront, in listing order."""
        return [p for p in self.for_seller(seller_id) if p.is_active]
