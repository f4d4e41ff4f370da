"""Lalamove carrier adapter (REST v3).

Every request is signed with HMAC-SHA256 over
``"{timestamp}\\r\\n{method}\\r\\n{path}\\r\\n\\r\\n{body}"`` and sent with an
``Authorization: hmac <key>:<timestamp>:<signature>`` header.

Quotation requests are retried on transport errors. Booking requests are
never retried: once a booking has been sent, a lost response means the
courier may already be on the way.
"""

import hashlib
import hmac
import json
import os
import time
from uuid import uuid4

import requests
import structlog
from requests import RequestException
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from storefront.carrier.port import CarrierBooking, CarrierPort, CarrierQuote, Contact, Stop
from storefront.errors import BookingOutcomeUnknown, CarrierUnavailable

logger = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://rest.sandbox.lalamove.com"
DEFAULT_MARKET = "TH"
DEFAULT_TIMEOUT_SECONDS = 10.0

# Bangkok city centre, used when a stop has no coordinates
DEFAULT_COORDINATES = {"lat": "13.7563", "lng": "100.5018"}


def http_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.3, min=0.3, max=3),
        retry=retry_if_exception_type(RequestException),
    )


def sign(secret: str, timestamp: str, method: str, path: str, body: str) -> str:
    raw = f"{timestamp}\r\n{method}\r\n{path}\r\n\r\n{body}"
    return hmac.new(secret.encode(), raw.encode(), hashlib.sha256).hexdigest()


def _stop_payload(stop: Stop) -> dict:
    if stop.lat is not None and stop.lng is not None:
        coordinates = {"lat": str(stop.lat), "lng": str(stop.lng)}
    else:
        coordinates = dict(DEFAULT_COORDINATES)
    return {"coordinates": coordinates, "address": stop.address}


class LalamoveCarrier(CarrierPort):
    """Production carrier adapter backed by the Lalamove REST API."""

    def __init__(
        self,
        api_key: str | None = None,
        api_secret: str | None = None,
        base_url: str | None = None,
        market: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else os.environ.get("LALAMOVE_API_KEY", "")
        self.api_secret = api_secret if api_secret is not None else os.environ.get("LALAMOVE_API_SECRET", "")
        self.base_url = (base_url or os.environ.get("LALAMOVE_BASE_URL") or DEFAULT_BASE_URL).rstrip("/")
        self.market = market or os.environ.get("LALAMOVE_MARKET") or DEFAULT_MARKET
        self.timeout = timeout or float(os.environ.get("CARRIER_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS))
        self.session = session or requests.Session()

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.api_secret)

    # -------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------
    def _send(self, method: str, path: str, payload: dict | None = None) -> requests.Response:
        timestamp = str(int(time.time() * 1000))
        body = json.dumps(payload, separators=(",", ":")) if payload is not None else ""
        signature = sign(self.api_secret, timestamp, method, path, body)
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"hmac {self.api_key}:{timestamp}:{signature}",
            "Market": self.market,
            "Request-ID": str(uuid4()),
        }
        return self.session.request(
            method,
            f"{self.base_url}{path}",
            data=body or None,
            headers=headers,
            timeout=self.timeout,
        )

    @http_retry()
    def _request_quotation(self, payload: dict) -> requests.Response:
        return self._send("POST", "/v3/quotations", payload)

    # -------------------------------------------------------------------
    # Port
    # -------------------------------------------------------------------
    def quote(self, pickup: Stop, dropoff: Stop) -> CarrierQuote | None:
        payload = {
            "data": {
                "serviceType": "MOTORCYCLE",
                "language": "th_TH",
                "stops": [_stop_payload(pickup), _stop_payload(dropoff)],
            }
        }
        try:
            response = self._request_quotation(payload)
        except RequestException as exc:
            logger.warning("Lalamove quotation request failed", error=str(exc))
            raise CarrierUnavailable(str(exc)) from exc

        if not response.ok:
            logger.warning("Lalamove quotation rejected", status_code=response.status_code, body=response.text[:500])
            return None

        try:
            data = response.json()
        except ValueError:
            logger.warning("Lalamove quotation returned malformed JSON")
            return None
        data = data.get("data", data)

        quotation_id = data.get("quotationId")
        fee = (data.get("priceBreakdown") or {}).get("total")
        if not quotation_id or fee is None:
            logger.warning("Lalamove quotation incomplete", payload=data)
            return None

        stop_ids = tuple(stop["stopId"] for stop in data.get("stops", []) if stop.get("stopId"))
        return CarrierQuote(quotation_id=quotation_id, fee=str(fee), stop_ids=stop_ids)

    def book(
        self,
        quotation: CarrierQuote,
        sender: Contact,
        recipient: Contact,
        cod_amount: int,
        remarks: str = "",
    ) -> CarrierBooking:
        sender_stop, recipient_stop = (
            quotation.stop_ids if len(quotation.stop_ids) == 2 else (str(uuid4()), str(uuid4()))
        )
        metadata = {}
        if cod_amount and cod_amount > 0:
            metadata["cashOnDelivery"] = cod_amount
        payload = {
            "data": {
                "quotationId": quotation.quotation_id,
                "sender": {"stopId": sender_stop, "name": sender.name, "phone": sender.phone},
                "recipients": [
                    {
                        "stopId": recipient_stop,
                        "name": recipient.name,
                        "phone": recipient.phone,
                        "remarks": remarks or "",
                    }
                ],
                "isPODEnabled": False,
                "metadata": metadata,
            }
        }

        try:
            response = self._send("POST", "/v3/orders", payload)
        except requests.ConnectTimeout as exc:
            # No connection was made, so nothing reached the carrier
            raise CarrierUnavailable(str(exc)) from exc
        except RequestException as exc:
            logger.error(
                "Lalamove booking response lost",
                quotation_id=quotation.quotation_id,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            raise BookingOutcomeUnknown("Booking may have been sent but the carrier did not answer") from exc

        if not response.ok:
            logger.warning(
                "Lalamove booking rejected",
                quotation_id=quotation.quotation_id,
                status_code=response.status_code,
                body=response.text[:500],
            )
            return CarrierBooking(success=False, failure_reason=response.text[:500] or response.reason)

        try:
            data = response.json().get("data", {})
        except ValueError:
            data = {}
        if not data.get("orderId"):
            raise BookingOutcomeUnknown("Carrier accepted the booking without returning an order id")

        return CarrierBooking(
            success=True,
            booking_id=data["orderId"],
            tracking_link=data.get("shareLink"),
            status=data.get("status"),
        )

    def verify_webhook_signature(self, payload: str, signature: str) -> bool:
        if not self.api_secret or not signature:
            return False
        expected = hmac.new(self.api_secret.encode(), payload.encode(), hashlib.sha256).hexdigest()
        return hmac.compare_digest(expected, signature)
