"""Delivery booking orchestrator — ships a confirmed order.

Sequence, all within one request:

    1. order must be confirmed, seller must have a pickup address
    2. fresh carrier quote for (pickup, buyer address)
    3. no usable quote → mock ship (synthetic booking id, no cost, no Delivery)
    4. book against that quote, collecting the checkout delivery fee as COD;
       once a quote was obtained, a failed booking never falls back to mock
    5. record the Delivery, then persist booking and cost on the order and
       mark it shipped

The buyer pays the fee quoted at checkout while the platform pays the fresh
carrier price, so the reported profit can be negative.

A second ship call for the same order is rejected twice over: an in-process
guard refuses concurrent calls, and the status write only succeeds while the
stored order is still confirmed. A booking that loses that write is kept
as a Delivery record and reported for reconciliation.
"""

import threading
from dataclasses import dataclass

import structlog
from protean.utils.globals import current_domain

from storefront.carrier.port import CarrierPort, Contact, Stop
from storefront.delivery.delivery import Delivery
from storefront.delivery.pricing import mock_id
from storefront.delivery.quoting import carrier_cost, fetch_carrier_quote, pickup_stop, require_pickup_address
from storefront.errors import BookingOutcomeUnknown, CarrierRejected, CarrierUnavailable, PreconditionError
from storefront.order.order import Order, OrderStatus
from storefront.seller.seller import Seller

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ShipmentResult:
    order_id: str
    carrier_booking_id: str
    is_mock: bool
    delivery_fee: int
    tracking_link: str | None = None
    delivery_cost: int | None = None

    @property
    def profit(self) -> int | None:
        if self.delivery_cost is None:
            return None
        return self.delivery_fee - self.delivery_cost

    def to_dict(self) -> dict:
        return {
            "lalamove_order_id": self.carrier_booking_id,
            "share_link": self.tracking_link,
            "delivery_cost": self.delivery_cost,
            "delivery_fee": self.delivery_fee,
            "profit": self.profit,
            "is_mock": self.is_mock,
        }


class InFlightGuard:
    """Tracks orders with a ship call in progress in this process."""

    def __init__(self):
        self._lock = threading.Lock()
        self._orders: set[str] = set()

    def claim(self, order_id: str) -> None:
        with self._lock:
            if order_id in self._orders:
                raise PreconditionError({"order_id": ["Shipping is already in progress for this order"]})
            self._orders.add(order_id)

    def release(self, order_id: str) -> None:
        with self._lock:
            self._orders.discard(order_id)

    def __contains__(self, order_id: str) -> bool:
        with self._lock:
            return order_id in self._orders


_shared_guard = InFlightGuard()


class DeliveryBookingService:
    def __init__(self, carrier: CarrierPort, guard: InFlightGuard | None = None):
        self.carrier = carrier
        self.guard = guard or _shared_guard

    def ship(self, order_id, seller_id=None) -> ShipmentResult:
        order_id = str(order_id)
        self.guard.claim(order_id)
        try:
            return self._ship(order_id, seller_id)
        finally:
            self.guard.release(order_id)

    def _ship(self, order_id: str, seller_id) -> ShipmentResult:
        orders = current_domain.repository_for(Order)
        order = orders.get_for_seller(order_id, seller_id)
        if order.status != OrderStatus.CONFIRMED:
            raise PreconditionError({"order_status": ["Order must be confirmed before shipping"]})

        seller = current_domain.repository_for(Seller).get(order.seller_id)
        require_pickup_address(seller)

        quote = fetch_carrier_quote(self.carrier, pickup_stop(seller), Stop(address=order.buyer_address))
        if quote is None:
            return self._mock_ship(order)

        try:
            booking = self.carrier.book(
                quote,
                sender=Contact(name=seller.shop_name, phone=seller.phone or ""),
                recipient=Contact(name=order.buyer_name, phone=order.buyer_phone),
                cod_amount=order.delivery_fee,
                remarks=f"Order #{order.order_number}",
            )
        except CarrierUnavailable as exc:
            logger.warning("Carrier unreachable at booking, order left confirmed", order_id=order_id, error=str(exc))
            raise CarrierRejected("Carrier could not be reached to book the delivery") from exc
        except BookingOutcomeUnknown:
            logger.error(
                "Booking outcome unknown, needs manual reconciliation",
                order_id=order_id,
                order_number=order.order_number,
                quotation_id=quote.quotation_id,
            )
            raise

        if not booking.success:
            logger.warning("Carrier rejected booking", order_id=order_id, reason=booking.failure_reason)
            raise CarrierRejected(booking.failure_reason or "Carrier rejected the booking")

        cost = carrier_cost(quote)
        # The courier is booked from here on, so the Delivery is recorded
        # even if the order moved while the carrier was answering.
        current_domain.repository_for(Delivery).add(
            Delivery.record_booking(
                order_id=order_id,
                carrier_booking_id=booking.booking_id,
                status=booking.status,
                pickup_address=seller.pickup_address,
                delivery_address=order.buyer_address,
                quoted_fee=order.delivery_fee,
                actual_cost=cost,
                tracking_link=booking.tracking_link,
            )
        )

        order.ship(
            carrier_booking_id=booking.booking_id,
            tracking_link=booking.tracking_link,
            delivery_cost=cost,
            is_mock=False,
        )
        try:
            orders.save_if_status(order, OrderStatus.CONFIRMED)
        except PreconditionError as exc:
            logger.error(
                "Courier booked for an order that changed status, needs manual reconciliation",
                order_id=order_id,
                order_number=order.order_number,
                booking_id=booking.booking_id,
                quotation_id=quote.quotation_id,
                tracking_link=booking.tracking_link,
                delivery_cost=cost,
                error=str(exc.messages),
            )
            raise BookingOutcomeUnknown(
                f"Courier booking {booking.booking_id} was placed but the order is no longer confirmed"
            ) from exc

        result = ShipmentResult(
            order_id=order_id,
            carrier_booking_id=booking.booking_id,
            is_mock=False,
            delivery_fee=order.delivery_fee,
            tracking_link=booking.tracking_link,
            delivery_cost=cost,
        )
        logger.info(
            "Order shipped",
            order_id=order_id,
            booking_id=booking.booking_id,
            delivery_fee=order.delivery_fee,
            delivery_cost=cost,
            profit=result.profit,
        )
        return result

    def _mock_ship(self, order: Order) -> ShipmentResult:
        booking_id = mock_id()
        order.ship(carrier_booking_id=booking_id, is_mock=True)
        current_domain.repository_for(Order).save_if_status(order, OrderStatus.CONFIRMED)
        logger.info("Order mock shipped", order_id=str(order.id), booking_id=booking_id)
        return ShipmentResult(
            order_id=str(order.id),
            carrier_booking_id=booking_id,
            is_mock=True,
            delivery_fee=order.delivery_fee,
        )
