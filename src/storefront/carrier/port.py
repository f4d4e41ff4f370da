"""Carrier port (abstract interface).

Defines the contract for on-demand courier adapters. Quote and booking
results are plain frozen dataclasses so services never see the carrier's
wire format.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Stop:
    """A pickup or drop-off point."""

    address: str
    lat: float | None = None
    lng: float | None = None


@dataclass(frozen=True)
class Contact:
    name: str
    phone: str


@dataclass(frozen=True)
class CarrierQuote:
    """A carrier quotation. ``fee`` is the carrier's base fee, before markup."""

    quotation_id: str
    fee: str
    stop_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class CarrierBooking:
    """Result of a booking attempt."""

    success: bool
    booking_id: str | None = None
    tracking_link: str | None = None
    status: str | None = None
    failure_reason: str | None = None


class CarrierPort(ABC):
    """Abstract carrier interface."""

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """Whether credentials are present. Unconfigured carriers are never called."""
        ...

    @abstractmethod
    def quote(self, pickup: Stop, dropoff: Stop) -> CarrierQuote | None:
        """Request a quotation.

        Returns ``None`` when the carrier declines to quote. Raises
        ``CarrierUnavailable`` on transport failure or timeout.
        """
        ...

    @abstractmethod
    def book(
        self,
        quotation: CarrierQuote,
        sender: Contact,
        recipient: Contact,
        cod_amount: int,
        remarks: str = "",
    ) -> CarrierBooking:
        """Book a courier against a quotation.

        Raises ``CarrierUnavailable`` when the request could not be sent and
        ``BookingOutcomeUnknown`` when it was sent but no answer came back.
        """
        ...

    @abstractmethod
    def verify_webhook_signature(self, payload: str, signature: str) -> bool:
        """Verify that a status callback is authentically from the carrier."""
        ...
