"""Delivery quotes for the checkout page.

A real carrier quote is preferred. Whenever the carrier is unconfigured,
unreachable, times out or returns a fee that is not a positive number, the
buyer gets a mock quote flagged with ``is_mock``.
"""

import math

import structlog
from protean.utils.globals import current_domain

from storefront.carrier.port import CarrierPort, CarrierQuote, Stop
from storefront.delivery.pricing import Quote, compute_buyer_fee, mock_quote, parse_fee
from storefront.errors import CarrierUnavailable, PreconditionError
from storefront.seller.seller import Seller
from storefront.shared.validation import validate_address

logger = structlog.get_logger(__name__)


def pickup_stop(seller: Seller) -> Stop:
    return Stop(address=seller.pickup_address, lat=seller.pickup_lat, lng=seller.pickup_lng)


def require_pickup_address(seller: Seller) -> None:
    if not seller.can_ship:
        raise PreconditionError({"pickup_address": ["Seller has no pickup address configured"]})


def carrier_cost(quote: CarrierQuote) -> int:
    """Platform cost of a carrier quote in whole currency units, rounded up."""
    return int(math.ceil(parse_fee(quote.fee)))


def fetch_carrier_quote(carrier: CarrierPort, pickup: Stop, dropoff: Stop) -> CarrierQuote | None:
    """Ask the carrier for a quote. ``None`` means "use the mock path"."""
    if not carrier.is_configured:
        logger.info("Carrier not configured, using mock quote")
        return None

    try:
        quote = carrier.quote(pickup, dropoff)
    except CarrierUnavailable as exc:
        logger.warning("Carrier unavailable, using mock quote", error=str(exc))
        return None

    if quote is None:
        return None
    if parse_fee(quote.fee) is None:
        logger.error("Carrier returned an invalid fee", fee=quote.fee, quotation_id=quote.quotation_id)
        return None
    return quote


class QuoteService:
    def __init__(self, carrier: CarrierPort):
        self.carrier = carrier

    def quote(self, seller_id, buyer_address: str) -> Quote:
        seller = current_domain.repository_for(Seller).get(seller_id)
        require_pickup_address(seller)
        validate_address(buyer_address)

        carrier_quote = fetch_carrier_quote(self.carrier, pickup_stop(seller), Stop(address=buyer_address.strip()))
        if carrier_quote is None:
            return mock_quote()

        fee = compute_buyer_fee(carrier_quote.fee)
        logger.info(
            "Delivery quoted",
            seller_id=str(seller_id),
            base_fee=carrier_quote.fee,
            delivery_fee=fee,
            quotation_id=carrier_quote.quotation_id,
        )
        return Quote(delivery_fee=fee, quotation_id=carrier_quote.quotation_id, is_mock=False)
