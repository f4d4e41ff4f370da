"""Buyer-facing delivery fee rules.

The carrier's base fee is marked up by 15% and rounded up to the next
multiple of 5. Arithmetic is done in ``Decimal`` so that a product like
``100 * 1.15`` lands exactly on 115 instead of 115.00000000000001.
"""

import math
import random
import time
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from protean.exceptions import ValidationError

MARKUP = Decimal("1.15")
ROUNDING_STEP = 5
MOCK_BASE_MIN = 50
MOCK_BASE_SPAN = 100


@dataclass(frozen=True)
class Quote:
    """Quote shown to the buyer."""

    delivery_fee: int
    quotation_id: str
    is_mock: bool = False

    def to_dict(self) -> dict:
        return {
            "delivery_fee": self.delivery_fee,
            "quotation_id": self.quotation_id,
            "is_mock": self.is_mock,
        }


def parse_fee(value) -> Decimal | None:
    """Parse a carrier fee. Returns ``None`` for non-numeric or non-positive values."""
    if value is None or isinstance(value, bool):
        return None
    try:
        fee = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not fee.is_finite() or fee <= 0:
        return None
    return fee


def round_up_to_step(amount: Decimal, step: int = ROUNDING_STEP) -> int:
    return int(math.ceil(amount / step)) * step


def compute_buyer_fee(carrier_base_fee) -> int:
    fee = parse_fee(carrier_base_fee)
    if fee is None:
        raise ValidationError({"delivery_fee": ["Carrier fee must be a positive number"]})
    return round_up_to_step(fee * MARKUP)


def mock_quote(rng: random.Random | None = None) -> Quote:
    """Synthetic quote used when the carrier cannot be reached."""
    rng = rng or random
    base = rng.randrange(MOCK_BASE_MIN, MOCK_BASE_MIN + MOCK_BASE_SPAN)
    return Quote(
        delivery_fee=round_up_to_step(Decimal(base)),
        quotation_id=mock_id(),
        is_mock=True,
    )


def mock_id() -> str:
    return f"mock_{int(time.time() * 1000)}"
