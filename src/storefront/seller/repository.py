"""Repository for the Seller aggregate."""

from protean.exceptions import ObjectNotFoundError

from storefront.domain import storefront
from storefront.seller.seller import Seller


@storefront.repository(part_of=Seller)
class SellerRepository:
    def find_by_slug(self, slug: str) -> Seller | None:
        results = self._dao.query.filter(shop_slug=slug).all().items
        return results[0] if results else None

    def get_by_slug(self, slug: str) -> Seller:
        seller = self.find_by_slug(slug)
        if seller is None:
            raise ObjectNotFoundError(f"Shop `{slug}` was not found")
        return seller

    def slug_taken(self, slug: str) -> bool:
        return self.find_by_slug(slug) is not None
