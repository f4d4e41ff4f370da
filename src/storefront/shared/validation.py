"""Checkout input validators for Thai mobile numbers, addresses and PromptPay IDs.

These are coarse gates that stop obviously incomplete submissions before a
carrier quote is requested. They are not an address-verification system.
"""

import re

from protean.exceptions import ValidationError

MIN_ADDRESS_LENGTH = 20

_SEPARATORS = re.compile(r"[\s\-.]")
_LOCAL_MOBILE = re.compile(r"^0[689]\d{8}$")
_INTERNATIONAL_MOBILE = re.compile(r"^\+66[689]\d{8}$")
_PROMPTPAY_PHONE = re.compile(r"^0\d{9}$")
_NATIONAL_ID = re.compile(r"^\d{13}$")

INVALID_PHONE_MESSAGE = "Please enter a valid mobile number (e.g. 081-234-5678)"
SHORT_ADDRESS_MESSAGE = "Address seems too short. Please include full details."
MISSING_NUMBER_MESSAGE = "Please include a house/building number."


def is_valid_phone(phone: str | None) -> bool:
    """Accept ``0[689]XXXXXXXX`` or ``+66[689]XXXXXXXX``, ignoring spaces, dashes and dots."""
    if not phone:
        return False
    cleaned = _SEPARATORS.sub("", phone)
    return bool(_LOCAL_MOBILE.match(cleaned) or _INTERNATIONAL_MOBILE.match(cleaned))


def normalize_phone(phone: str) -> str:
    """Strip formatting and convert ``+66`` numbers to the local ``0`` form."""
    cleaned = re.sub(r"[^\d+]", "", phone)
    if cleaned.startswith("+66"):
        return "0" + cleaned[3:]
    return cleaned


def format_phone(phone: str) -> str:
    """Render as ``0XX-XXX-XXXX`` or ``+66 XX XXX XXXX``; anything else is returned unchanged."""
    cleaned = re.sub(r"[^\d+]", "", phone)

    if len(cleaned) == 10 and cleaned.startswith("0"):
        return f"{cleaned[:3]}-{cleaned[3:6]}-{cleaned[6:]}"

    if cleaned.startswith("+66") and len(cleaned) == 12:
        return f"+66 {cleaned[3:5]} {cleaned[5:8]} {cleaned[8:]}"

    return phone


def address_problem(address: str | None) -> str | None:
    """Return the reason an address is rejected, or ``None`` when it passes."""
    trimmed = (address or "").strip()

    if len(trimmed) < MIN_ADDRESS_LENGTH:
        return SHORT_ADDRESS_MESSAGE

    if not re.search(r"\d", trimmed):
        return MISSING_NUMBER_MESSAGE

    return None


def is_valid_address(address: str | None) -> bool:
    return address_problem(address) is None


def is_valid_promptpay_id(value: str | None) -> bool:
    """PromptPay accepts a 10-digit phone number starting with 0 or a 13-digit national ID."""
    if not value:
        return False
    cleaned = re.sub(r"[\s\-]", "", value)
    return bool(_PROMPTPAY_PHONE.match(cleaned) or _NATIONAL_ID.match(cleaned))


def validate_phone(phone: str | None, field: str = "buyer_phone") -> None:
    if not is_valid_phone(phone):
        raise ValidationError({field: [INVALID_PHONE_MESSAGE]})


def validate_address(address: str | None, field: str = "buyer_address") -> None:
    problem = address_problem(address)
    if problem:
        raise ValidationError({field: [problem]})
