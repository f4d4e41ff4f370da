"""Configurable fake carrier for development and testing.

Simulates quoting and booking without any external calls. Tests configure
it to quote a given fee, reject bookings, drop off the network (on every
call or only when booking) or lose a booking response, and inspect
``calls`` afterwards.
"""

from uuid import uuid4

from storefront.carrier.port import CarrierBooking, CarrierPort, CarrierQuote, Contact, Stop
from storefront.errors import BookingOutcomeUnknown, CarrierUnavailable


class FakeCarrier(CarrierPort):
    """Configurable fake carrier."""

    def __init__(self, base_fee="100", configured: bool = True) -> None:
        self.base_fee = base_fee
        self.configured = configured
        self.should_succeed: bool = True
        self.failure_reason: str = "No driver available"
        self.unreachable: bool = False
        self.lose_booking_response: bool = False
        self.unreachable_at_booking: bool = False
        self.calls: list[dict] = []

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = "No driver available",
        base_fee=None,
        unreachable: bool = False,
        lose_booking_response: bool = False,
        unreachable_at_booking: bool = False,
    ) -> None:
        """Configure carrier behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        if base_fee is not None:
            self.base_fee = base_fee
        self.unreachable = unreachable
        self.lose_booking_response = lose_booking_response
        self.unreachable_at_booking = unreachable_at_booking

    @property
    def is_configured(self) -> bool:
        return self.configured

    def quote(self, pickup: Stop, dropoff: Stop) -> CarrierQuote | None:
        self.calls.append({"method": "quote", "pickup": pickup, "dropoff": dropoff})
        if self.unreachable:
            raise CarrierUnavailable("Carrier unreachable")
        return CarrierQuote(
            quotation_id=f"fake_quote_{uuid4().hex[:12]}",
            fee=str(self.base_fee),
            stop_ids=("stop-pickup", "stop-dropoff"),
        )

    def book(
        self,
        quotation: CarrierQuote,
        sender: Contact,
        recipient: Contact,
        cod_amount: int,
        remarks: str = "",
    ) -> CarrierBooking:
        self.calls.append(
            {
                "method": "book",
                "quotation_id": quotation.quotation_id,
                "sender": sender,
                "recipient": recipient,
                "cod_amount": cod_amount,
                "remarks": remarks,
            }
        )
        if self.unreachable or self.unreachable_at_booking:
            raise CarrierUnavailable("Carrier unreachable")
        if self.lose_booking_response:
            raise BookingOutcomeUnknown("Carrier did not answer the booking request")

        if self.should_succeed:
            booking_id = f"fake_order_{uuid4().hex[:12]}"
            return CarrierBooking(
                success=True,
                booking_id=booking_id,
                tracking_link=f"https://track.example.test/{booking_id}",
                status="ASSIGNING_DRIVER",
            )
        return CarrierBooking(success=False, failure_reason=self.failure_reason)

    def verify_webhook_signature(self, payload: str, signature: str) -> bool:  # noqa: ARG002
        return signature == "test-signature"

    def calls_to(self, method: str) -> list[dict]:
        return [call for call in self.calls if call["method"] == method]
