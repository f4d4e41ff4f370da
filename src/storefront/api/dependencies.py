"""FastAPI dependencies — request identity and service wiring.

Services are built per request from the active adapters, so tests swap
behaviour with ``set_carrier`` / ``set_messenger`` / ``set_cart_store`` or
``app.dependency_overrides``.
"""

from concurrent.futures import ThreadPoolExecutor

from fastapi import Header, HTTPException

from storefront.carrier import get_carrier
from storefront.cart.store import CartStore
from storefront.cart.store import get_cart_store as _active_cart_store
from storefront.delivery.booking import DeliveryBookingService
from storefront.delivery.quoting import QuoteService
from storefront.delivery.tracking import CarrierStatusService
from storefront.messaging import get_messenger
from storefront.notification.dispatch import DEFAULT_WORKERS, NotificationDispatcher
from storefront.order.checkout import CheckoutService

_notification_executor = ThreadPoolExecutor(max_workers=DEFAULT_WORKERS, thread_name_prefix="notify")


async def current_seller_id(x_seller_id: str | None = Header(default=None)) -> str:
    """The authenticated seller, as supplied by the auth layer in front of this service."""
    if not x_seller_id:
        raise HTTPException(status_code=401, detail="Seller identity required")
    return x_seller_id


async def cart_session_id(x_session_id: str | None = Header(default=None)) -> str:
    if not x_session_id:
        raise HTTPException(status_code=400, detail="X-Session-Id header required")
    return x_session_id


def get_quote_service() -> QuoteService:
    return QuoteService(get_carrier())


def get_booking_service() -> DeliveryBookingService:
    return DeliveryBookingService(get_carrier())


def get_status_service() -> CarrierStatusService:
    return CarrierStatusService(get_carrier())


def get_checkout_service() -> CheckoutService:
    return CheckoutService(NotificationDispatcher(get_messenger(), executor=_notification_executor))


def get_cart_store() -> CartStore:
    return _active_cart_store()
