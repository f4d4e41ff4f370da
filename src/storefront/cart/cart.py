"""Buyer cart — a client-held basket scoped to a single seller.

The cart is not a persisted aggregate: it lives with the buyer (browser
storage, or the server-side ``CartStore`` keyed per buyer session and
seller). Lines keep the order they were first added in. Before checkout the
cart is revalidated against the seller's live, active products.
"""

from dataclasses import asdict, dataclass, field

import structlog

logger = structlog.get_logger(__name__)


@dataclass
class CartLine:
    product_id: str
    name: str
    price: int
    quantity: int = 1
    image_url: str | None = None

    @property
    def line_total(self) -> int:
        return self.price * self.quantity


@dataclass
class Cart:
    seller_id: str
    lines: list[CartLine] = field(default_factory=list)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def _find(self, product_id) -> CartLine | None:
        product_id = str(product_id)
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None

    @property
    def total(self) -> int:
        return sum(line.line_total for line in self.lines)

    @property
    def count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add(self, product) -> CartLine:
        """Add one unit of ``product``. Increments the line if already present."""
        line = self._find(product.id)
        if line is not None:
            line.quantity += 1
            return line

        line = CartLine(
            product_id=str(product.id),
            name=product.name,
            price=product.price,
            quantity=1,
            image_url=product.image_url,
        )
        self.lines.append(line)
        return line

    def set_quantity(self, product_id, quantity: int) -> None:
        """Set a line's quantity. Zero or less removes the line; unknown ids are ignored."""
        if quantity <= 0:
            self.remove(product_id)
            return
        line = self._find(product_id)
        if line is not None:
            line.quantity = quantity

    def remove(self, product_id) -> None:
        product_id = str(product_id)
        self.lines = [line for line in self.lines if line.product_id != product_id]

    def clear(self) -> None:
        self.lines = []

    def revalidate(self, active_products) -> list[str]:
        """Reconcile the cart with the seller's live catalogue.

        Lines whose product is gone or hidden are dropped; surviving lines
        take the live name, price and image. Returns the dropped product ids.
        """
        live = {str(p.id): p for p in active_products if p.is_active}
        dropped = []
        kept = []
        for line in self.lines:
            product = live.get(line.product_id)
            if product is None:
                dropped.append(line.product_id)
                continue
            line.name = product.name
            line.price = product.price
            line.image_url = product.image_url
            kept.append(line)
        self.lines = kept

        if dropped:
            logger.info("Cart lines dropped on revalidation", seller_id=self.seller_id, dropped=dropped)
        return dropped

    # -------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "seller_id": self.seller_id,
            "items": [asdict(line) for line in self.lines],
            "total": self.total,
            "count": self.count,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Cart":
        lines = [
            CartLine(
                product_id=str(item["product_id"]),
                name=item["name"],
                price=int(item["price"]),
                quantity=int(item.get("quantity", 1)),
                image_url=item.get("image_url"),
            )
            for item in data.get("items", [])
            if int(item.get("quantity", 1)) > 0
        ]
        return cls(seller_id=str(data["seller_id"]), lines=lines)
