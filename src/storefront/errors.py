"""Storefront error taxonomy.

Validation failures use Protean's ``ValidationError`` and unknown references
use ``ObjectNotFoundError``. The classes below cover lifecycle preconditions
and carrier outcomes.
"""

from protean.exceptions import ValidationError


class PreconditionError(ValidationError):
    """Operation attempted in the wrong lifecycle state or without required seller setup.

    Carries the same ``{field: [messages]}`` payload as ``ValidationError`` and
    is always raised before any mutation.
    """


class CarrierUnavailable(Exception):
    """Carrier could not be reached. Absorbed into the mock path while quoting."""


class CarrierRejected(Exception):
    """Carrier refused a booking or could not be reached to take it. The order keeps its prior status."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class BookingOutcomeUnknown(CarrierRejected):
    """A booking request was sent but no answer came back.

    The carrier may or may not have placed the booking, so it must be
    reconciled by hand rather than retried.
    """


class InvalidSignature(Exception):
    """A carrier callback failed signature verification."""
