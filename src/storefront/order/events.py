"""Order domain events — immutable facts about order status changes.

Every lifecycle transition raises exactly one event. Each transition event
carries ``from_status`` and ``to_status`` so a subscriber that only cares
about "the status changed" can treat them uniformly.

Events are appended to the ``storefront::order`` stream of the event store
when the order is saved. Nothing in this process subscribes to them: the
new-order notification is sent by checkout itself, so a subscriber added
later must not send it again.
"""

from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A buyer checked out and the order was recorded as pending."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    seller_id = Identifier(required=True)
    items = Text(required=True)  # JSON list of item snapshots
    subtotal = Integer(required=True)
    delivery_fee = Integer(required=True)
    total_amount = Integer(required=True)
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class PaymentConfirmed:
    """The seller confirmed the QR transfer for the goods."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    from_status = String(required=True)
    to_status = String(required=True)
    confirmed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderShipped:
    """A courier was booked (or mock-shipped) for the order."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    from_status = String(required=True)
    to_status = String(required=True)
    carrier_booking_id = String(required=True)
    tracking_link = String()
    delivery_cost = Integer()
    is_mock = Boolean(default=False)
    shipped_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderDelivered:
    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    from_status = String(required=True)
    to_status = String(required=True)
    delivered_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderCancelled:
    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    from_status = String(required=True)
    to_status = String(required=True)
    reason = String()
    cancelled_at = DateTime(required=True)
