"""Seller aggregate — a shop owner with a public storefront.

The shop slug is assigned once at registration and never changes, so
storefront links and past order pages stay valid when the shop is renamed.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, String

from storefront.domain import storefront
from storefront.shared.slug import is_url_safe
from storefront.shared.validation import is_valid_promptpay_id


@storefront.aggregate
class Seller:
    shop_name = String(required=True, max_length=100)
    shop_slug = String(required=True, max_length=60, unique=True)
    phone = String(max_length=20)
    promptpay_id = String(max_length=20)
    pickup_address = String(max_length=500)
    pickup_lat = Float()
    pickup_lng = Float()
    profile_image_url = String(max_length=500)
    messaging_account_id = String(max_length=100)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def slug_must_be_url_safe(self):
        if not is_url_safe(self.shop_slug):
            raise ValidationError({"shop_slug": ["Shop slug may only contain a-z, 0-9, '_' and single hyphens"]})

    @invariant.post
    def promptpay_id_must_be_valid(self):
        if self.promptpay_id and not is_valid_promptpay_id(self.promptpay_id):
            raise ValidationError({"promptpay_id": ["PromptPay ID must be a 10-digit phone number or 13-digit national ID"]})

    @classmethod
    def register(
        cls,
        shop_name,
        shop_slug,
        phone=None,
        promptpay_id=None,
        pickup_address=None,
    ):
        now = datetime.now(UTC)
        return cls(
            shop_name=shop_name.strip(),
            shop_slug=shop_slug,
            phone=phone,
            promptpay_id=promptpay_id or None,
            pickup_address=(pickup_address or "").strip() or None,
            created_at=now,
            updated_at=now,
        )

    @property
    def can_ship(self) -> bool:
        return bool(self.pickup_address and self.pickup_address.strip())

    @property
    def pickup_coordinates(self) -> dict | None:
        if self.pickup_lat is None or self.pickup_lng is None:
            return None
        return {"lat": self.pickup_lat, "lng": self.pickup_lng}

    def update_settings(
        self,
        shop_name=None,
        phone=None,
        promptpay_id=None,
        pickup_address=None,
        pickup_lat=None,
        pickup_lng=None,
        profile_image_url=None,
    ):
        """Update shop settings. Only the fields passed are changed; the slug never is."""
        if shop_name is not None:
            if not shop_name.strip():
                raise ValidationError({"shop_name": ["Shop name is required"]})
            self.shop_name = shop_name.strip()
        if phone is not None:
            self.phone = phone
        if promptpay_id is not None:
            self.promptpay_id = promptpay_id or None
        if pickup_address is not None:
            self.pickup_address = pickup_address.strip() or None
        if pickup_lat is not None:
            self.pickup_lat = pickup_lat
        if pickup_lng is not None:
            self.pickup_lng = pickup_lng
        if profile_image_url is not None:
            self.profile_image_url = profile_image_url or None
        self.updated_at = datetime.now(UTC)

    def link_messaging_account(self, account_id):
        if not account_id:
            raise ValidationError({"account_id": ["Messaging account id is required"]})
        self.messaging_account_id = account_id
        self.updated_at = datetime.now(UTC)

    def unlink_messaging_account(self):
        self.messaging_account_id = None
        self.updated_at = datetime.now(UTC)
