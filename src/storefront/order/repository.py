"""Repository for the Order aggregate."""

import threading
from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.domain import storefront
from storefront.errors import PreconditionError
from storefront.order.order import Order, OrderStatus

_conditional_write_lock = threading.Lock()


@storefront.repository(part_of=Order)
class OrderRepository:
    def find_by_number(self, order_number: str) -> Order | None:
        results = self._dao.query.filter(order_number=order_number).all().items
        return results[0] if results else None

    def get_for_seller(self, order_id, seller_id=None) -> Order:
        """Load an order, hiding it from sellers who do not own it."""
        order = self.get(order_id)
        if seller_id is not None and not order.belongs_to(seller_id):
            raise ObjectNotFoundError(f"Order `{order_id}` was not found")
        return order

    def number_taken(self, order_number: str) -> bool:
        return self.find_by_number(order_number) is not None

    def for_seller(self, seller_id, status: str | None = None) -> list[Order]:
        """A seller's orders, newest first, optionally narrowed to one status."""
        filters = {"seller_id": str(seller_id)}
        if status:
            if status not in {s.value for s in OrderStatus}:
                raise ValidationError({"status": [f"Unknown order status: {status}"]})
            filters["order_status"] = status
        orders = self._dao.query.filter(**filters).all().items
        return sorted(
            orders,
            key=lambda o: o.created_at or datetime.min.replace(tzinfo=UTC),
            reverse=True,
        )

    def save_if_status(self, order: Order, expected_status: OrderStatus) -> Order:
        """Persist ``order`` only if the stored copy is still in ``expected_status``.

        Raises ``PreconditionError`` when another writer moved the order first.
        """
        with _conditional_write_lock:
            stored = self._dao.query.filter(id=str(order.id)).all().items
            if not stored or stored[0].order_status != expected_status.value:
                current = stored[0].order_status if stored else "missing"
                raise PreconditionError(
                    {"order_status": [f"Order is no longer {expected_status.value} (now {current})"]}
                )
            return self.add(order)
