"""Order aggregate (CQRS) — a single buyer's checkout at a single shop.

The buyer pays for the goods by QR transfer up front and pays the delivery
fee in cash to the courier. The order core (buyer, line snapshots, amounts)
is frozen at checkout; only the lifecycle fields move afterwards.

State Machine:
    PENDING → CONFIRMED → SHIPPED → DELIVERED
    {PENDING, CONFIRMED, SHIPPED} → CANCELLED
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, HasMany, Identifier, Integer, String

from storefront.domain import storefront
from storefront.errors import PreconditionError
from storefront.order.events import (
    OrderCancelled,
    OrderDelivered,
    OrderPlaced,
    OrderShipped,
    PaymentConfirmed,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"


PAYMENT_METHOD = "promptpay"

_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),  # terminal
    OrderStatus.CANCELLED: set(),  # terminal
}

TERMINAL_STATUSES = {OrderStatus.DELIVERED, OrderStatus.CANCELLED}


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class LineItem:
    """Snapshot of a product at checkout. Later catalogue edits never reach it."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=200)
    price = Integer(required=True, min_value=0)
    quantity = Integer(required=True, min_value=1)

    @property
    def line_total(self) -> int:
        return self.price * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    order_number = String(required=True, max_length=30, unique=True)
    seller_id = Identifier(required=True)
    buyer_name = String(required=True, max_length=200)
    buyer_phone = String(required=True, max_length=20)
    buyer_address = String(required=True, max_length=1000)
    items = HasMany(LineItem)
    subtotal = Integer(required=True, min_value=0)
    delivery_fee = Integer(required=True, min_value=0)
    total_amount = Integer(required=True, min_value=0)
    payment_method = String(max_length=20, default=PAYMENT_METHOD)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    order_status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    delivery_cost = Integer()
    carrier_booking_id = String(max_length=100)
    tracking_link = String(max_length=500)
    is_mock_delivery = Boolean(default=False)
    cancellation_reason = String(max_length=500)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_must_equal_subtotal_plus_fee(self):
        if self.total_amount != self.subtotal + self.delivery_fee:
            raise ValidationError({"total_amount": ["Total must equal subtotal plus delivery fee"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        order_number: str,
        seller_id: str,
        buyer_name: str,
        buyer_phone: str,
        buyer_address: str,
        items_data: list[dict],
        delivery_fee: int,
    ):
        """Record a checkout. ``items_data`` are snapshots taken from live products."""
        if not items_data:
            raise ValidationError({"items": ["Order must contain at least one item"]})

        subtotal = sum(item["price"] * item["quantity"] for item in items_data)
        now = datetime.now(UTC)
        order = cls(
            order_number=order_number,
            seller_id=seller_id,
            buyer_name=buyer_name,
            buyer_phone=buyer_phone,
            buyer_address=buyer_address,
            items=[LineItem(**item) for item in items_data],
            subtotal=subtotal,
            delivery_fee=delivery_fee,
            total_amount=subtotal + delivery_fee,
            payment_method=PAYMENT_METHOD,
            payment_status=PaymentStatus.PENDING.value,
            order_status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order_number,
                seller_id=str(seller_id),
                items=json.dumps(items_data),
                subtotal=subtotal,
                delivery_fee=delivery_fee,
                total_amount=subtotal + delivery_fee,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State transition helpers
    # -------------------------------------------------------------------
    @property
    def status(self) -> OrderStatus:
        return OrderStatus(self.order_status)

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def can_transition_to(self, target_status: OrderStatus) -> bool:
        return target_status in _VALID_TRANSITIONS.get(self.status, set())

    def _assert_can_transition(self, target_status: OrderStatus, message: str | None = None) -> None:
        if not self.can_transition_to(target_status):
            raise PreconditionError(
                {"order_status": [message or f"Cannot transition from {self.status.value} to {target_status.value}"]}
            )

    def belongs_to(self, seller_id) -> bool:
        return str(self.seller_id) == str(seller_id)

    @property
    def profit(self) -> int | None:
        """Delivery margin: what the buyer pays the courier minus what the carrier charges."""
        if self.delivery_cost is None:
            return None
        return self.delivery_fee - self.delivery_cost

    # -------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------
    def confirm_payment(self) -> None:
        """The seller saw the QR transfer arrive."""
        self._assert_can_transition(OrderStatus.CONFIRMED, "Only pending orders can be confirmed")
        previous = self.order_status
        now = datetime.now(UTC)
        self.order_status = OrderStatus.CONFIRMED.value
        self.payment_status = PaymentStatus.CONFIRMED.value
        self.updated_at = now
        self.raise_(
            PaymentConfirmed(
                order_id=str(self.id),
                order_number=self.order_number,
                from_status=previous,
                to_status=self.order_status,
                confirmed_at=now,
            )
        )

    def ship(
        self,
        carrier_booking_id: str,
        tracking_link: str | None = None,
        delivery_cost: int | None = None,
        is_mock: bool = False,
    ) -> None:
        """Record a courier booking. Called by the booking orchestrator only."""
        self._assert_can_transition(OrderStatus.SHIPPED, "Order must be confirmed before shipping")
        previous = self.order_status
        now = datetime.now(UTC)
        self.order_status = OrderStatus.SHIPPED.value
        self.carrier_booking_id = carrier_booking_id
        self.tracking_link = tracking_link
        self.delivery_cost = delivery_cost
        self.is_mock_delivery = is_mock
        self.updated_at = now
        self.raise_(
            OrderShipped(
                order_id=str(self.id),
                order_number=self.order_number,
                from_status=previous,
                to_status=self.order_status,
                carrier_booking_id=carrier_booking_id,
                tracking_link=tracking_link,
                delivery_cost=delivery_cost,
                is_mock=is_mock,
                shipped_at=now,
            )
        )

    def mark_delivered(self) -> None:
        self._assert_can_transition(OrderStatus.DELIVERED, "Only shipped orders can be marked delivered")
        previous = self.order_status
        now = datetime.now(UTC)
        self.order_status = OrderStatus.DELIVERED.value
        self.updated_at = now
        self.raise_(
            OrderDelivered(
                order_id=str(self.id),
                order_number=self.order_number,
                from_status=previous,
                to_status=self.order_status,
                delivered_at=now,
            )
        )

    def cancel(self, reason: str | None = None) -> None:
        self._assert_can_transition(OrderStatus.CANCELLED, f"Cannot cancel an order that is {self.order_status}")
        previous = self.order_status
        now = datetime.now(UTC)
        self.order_status = OrderStatus.CANCELLED.value
        self.cancellation_reason = reason
        self.updated_at = now
        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                order_number=self.order_number,
                from_status=previous,
                to_status=self.order_status,
                reason=reason,
                cancelled_at=now,
            )
        )
