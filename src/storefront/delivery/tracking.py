"""Carrier status callbacks.

The carrier posts status changes for bookings it holds. Each callback is
verified through the carrier port, mirrored onto the Delivery record, and a
``COMPLETED`` status advances the order to delivered.
"""

import json

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.carrier.port import CarrierPort
from storefront.delivery.delivery import Delivery
from storefront.errors import InvalidSignature
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


def _object(value) -> dict:
    return value if isinstance(value, dict) else {}


def parse_status_callback(payload: str) -> dict:
    """Extract booking id, status and driver details from a carrier callback body."""
    try:
        body = json.loads(payload)
    except ValueError as exc:
        raise ValidationError({"payload": ["Callback body is not valid JSON"]}) from exc
    if not isinstance(body, dict):
        raise ValidationError({"payload": ["Callback body must be a JSON object"]})

    data = _object(body.get("data"))
    order = _object(data.get("order"))
    booking_id = order.get("orderId")
    status = order.get("status")
    if not isinstance(booking_id, (str, int)) or not isinstance(status, str) or not booking_id or not status:
        raise ValidationError({"payload": ["Callback is missing the order id or status"]})

    driver = _object(data.get("driver"))
    return {
        "booking_id": str(booking_id),
        "status": status,
        "tracking_link": order.get("shareLink"),
        "driver": {
            "name": driver.get("name"),
            "phone": driver.get("phone"),
            "plate_number": driver.get("plateNumber"),
        },
    }


class CarrierStatusService:
    def __init__(self, carrier: CarrierPort):
        self.carrier = carrier

    def handle_callback(self, payload: str, signature: str) -> Delivery:
        if not self.carrier.verify_webhook_signature(payload, signature):
            logger.warning("Carrier callback rejected, bad signature")
            raise InvalidSignature("Invalid callback signature")

        update = parse_status_callback(payload)
        deliveries = current_domain.repository_for(Delivery)
        delivery = deliveries.find_by_booking(update["booking_id"])
        if delivery is None:
            raise ObjectNotFoundError(f"No delivery for booking `{update['booking_id']}`")

        delivery.update_status(update["status"], driver=update["driver"], tracking_link=update["tracking_link"])
        deliveries.add(delivery)

        if delivery.is_completed:
            orders = current_domain.repository_for(Order)
            order = orders.get(delivery.order_id)
            if order.is_terminal:
                logger.info("Order already closed, ignoring completion", order_id=str(order.id))
            else:
                order.mark_delivered()
                orders.add(order)

        logger.info(
            "Carrier status mirrored",
            booking_id=update["booking_id"],
            status=update["status"],
            order_id=str(delivery.order_id),
        )
        return delivery
