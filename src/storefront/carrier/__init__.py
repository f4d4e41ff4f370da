"""Carrier adapter factory.

Provides get_carrier() / set_carrier() to swap implementations:
- LalamoveCarrier for production (``CARRIER_ADAPTER=lalamove``, the default)
- FakeCarrier for development and testing (``CARRIER_ADAPTER=fake``)

An unconfigured Lalamove adapter is never called; quoting and shipping fall
back to their mock paths instead.
"""

import os

from storefront.carrier.port import CarrierPort

_current_carrier: CarrierPort | None = None


def get_carrier() -> CarrierPort:
    """Return the current carrier adapter, building it from the environment on first use."""
    global _current_carrier
    if _current_carrier is None:
        adapter = os.environ.get("CARRIER_ADAPTER", "lalamove").lower()
        if adapter == "fake":
            from storefront.carrier.fake_adapter import FakeCarrier

            _current_carrier = FakeCarrier()
        elif adapter == "lalamove":
            from storefront.carrier.lalamove_adapter import LalamoveCarrier

            _current_carrier = LalamoveCarrier()
        else:
            raise ValueError(f"Unknown carrier adapter: {adapter}")
    return _current_carrier


def set_carrier(carrier: CarrierPort) -> None:
    """Override the active carrier (useful for tests)."""
    global _current_carrier
    _current_carrier = carrier


def reset_carrier() -> None:
    """Reset to the environment-configured carrier."""
    global _current_carrier
    _current_carrier = None
