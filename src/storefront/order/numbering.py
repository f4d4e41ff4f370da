"""Human-readable order numbers: ``<PREFIX>-<YYYYMMDD>-<4 base-36 chars>``."""

import os
import random
import string
from datetime import UTC, datetime

DEFAULT_PREFIX = "TS"
SUFFIX_LENGTH = 4
_ALPHABET = string.digits + string.ascii_uppercase


def generate_order_number(now: datetime | None = None, rng: random.Random | None = None) -> str:
    prefix = os.environ.get("ORDER_NUMBER_PREFIX", DEFAULT_PREFIX)
    now = now or datetime.now(UTC)
    rng = rng or random
    suffix = "".join(rng.choice(_ALPHABET) for _ in range(SUFFIX_LENGTH))
    return f"{prefix}-{now:%Y%m%d}-{suffix}"
