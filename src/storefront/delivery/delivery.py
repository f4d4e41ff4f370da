"""Delivery aggregate — the courier booking behind a shipped order.

Created only when a real carrier booking succeeds, so mock-shipped orders
and orders cancelled before shipping never have one. The status field
mirrors whatever the carrier last reported.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront

CARRIER_COMPLETED = "COMPLETED"


@storefront.aggregate
class Delivery:
    order_id = Identifier(required=True, unique=True)
    carrier_booking_id = String(required=True, max_length=100)
    status = String(max_length=50)
    pickup_address = String(max_length=500)
    delivery_address = String(max_length=1000)
    quoted_fee = Integer(required=True, min_value=0)
    actual_cost = Integer(required=True, min_value=0)
    tracking_link = String(max_length=500)
    driver_name = String(max_length=200)
    driver_phone = String(max_length=20)
    driver_plate_number = String(max_length=20)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def record_booking(
        cls,
        order_id,
        carrier_booking_id: str,
        status: str | None,
        pickup_address: str,
        delivery_address: str,
        quoted_fee: int,
        actual_cost: int,
        tracking_link: str | None = None,
    ):
        now = datetime.now(UTC)
        return cls(
            order_id=order_id,
            carrier_booking_id=carrier_booking_id,
            status=status,
            pickup_address=pickup_address,
            delivery_address=delivery_address,
            quoted_fee=quoted_fee,
            actual_cost=actual_cost,
            tracking_link=tracking_link,
            created_at=now,
            updated_at=now,
        )

    @property
    def margin(self) -> int:
        return self.quoted_fee - self.actual_cost

    @property
    def is_completed(self) -> bool:
        return (self.status or "").upper() == CARRIER_COMPLETED

    def update_status(self, status: str, driver: dict | None = None, tracking_link: str | None = None) -> None:
        """Mirror a carrier status update, with driver details when the carrier sends them."""
        self.status = status
        if driver:
            self.driver_name = driver.get("name") or self.driver_name
            self.driver_phone = driver.get("phone") or self.driver_phone
            self.driver_plate_number = driver.get("plate_number") or self.driver_plate_number
        if tracking_link:
            self.tracking_link = tracking_link
        self.updated_at = datetime.now(UTC)


@storefront.repository(part_of=Delivery)
class DeliveryRepository:
    def find_by_order(self, order_id) -> Delivery | None:
        results = self._dao.query.filter(order_id=str(order_id)).all().items
        return results[0] if results else None

    def find_by_booking(self, carrier_booking_id: str) -> Delivery | None:
        results = self._dao.query.filter(carrier_booking_id=carrier_booking_id).all().items
        return results[0] if results else None
