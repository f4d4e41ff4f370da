"""Pydantic request/response schemas for the Storefront API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands and aggregates.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str


# ---------------------------------------------------------------------------
# Sellers
# ---------------------------------------------------------------------------
class RegisterSellerRequest(BaseModel):
    shop_name: str
    phone: str | None = None
    promptpay_id: str | None = None
    pickup_address: str | None = None


class SellerIdResponse(BaseModel):
    seller_id: str
    shop_slug: str


class UpdateShopSettingsRequest(BaseModel):
    shop_name: str | None = None
    phone: str | None = None
    promptpay_id: str | None = None
    pickup_address: str | None = None
    pickup_lat: float | None = None
    pickup_lng: float | None = None
    profile_image_url: str | None = None


class LinkMessagingRequest(BaseModel):
    account_id: str


class SellerResponse(BaseModel):
    id: str
    shop_name: str
    shop_slug: str
    phone: str | None = None
    promptpay_id: str | None = None
    pickup_address: str | None = None
    pickup_lat: float | None = None
    pickup_lng: float | None = None
    profile_image_url: str | None = None
    messaging_linked: bool = False
    can_ship: bool = False


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class CreateProductRequest(BaseModel):
    name: str
    price: int = Field(ge=0)
    description: str | None = None
    image_url: str | None = None
    sort_order: int = 0
    is_active: bool = True


class UpdateProductRequest(BaseModel):
    name: str | None = None
    price: int | None = Field(default=None, ge=0)
    description: str | None = None
    image_url: str | None = None
    sort_order: int | None = None


class SetVisibilityRequest(BaseModel):
    is_active: bool


class ProductIdResponse(BaseModel):
    product_id: str


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: int
    image_url: str | None = None
    is_active: bool
    sort_order: int


# ---------------------------------------------------------------------------
# Storefront & cart
# ---------------------------------------------------------------------------
class ShopResponse(BaseModel):
    seller_id: str
    shop_name: str
    shop_slug: str
    profile_image_url: str | None = None
    promptpay_id: str | None = None
    products: list[ProductResponse]


class CartItemRequest(BaseModel):
    product_id: str


class CartQuantityRequest(BaseModel):
    quantity: int


class CartLineResponse(BaseModel):
    product_id: str
    name: str
    price: int
    quantity: int
    image_url: str | None = None


class CartResponse(BaseModel):
    seller_id: str
    items: list[CartLineResponse]
    total: int
    count: int
    dropped: list[str] = []


# ---------------------------------------------------------------------------
# Checkout & orders
# ---------------------------------------------------------------------------
class QuoteRequest(BaseModel):
    seller_id: str
    buyer_address: str


class QuoteResponse(BaseModel):
    delivery_fee: int
    quotation_id: str
    is_mock: bool


class CheckoutLine(BaseModel):
    product_id: str
    quantity: int = Field(ge=1)
    name: str | None = None
    price: int | None = None


class PlaceOrderRequest(BaseModel):
    seller_id: str
    buyer_name: str
    buyer_phone: str
    buyer_address: str
    cart: list[CheckoutLine]
    subtotal: int
    delivery_fee: int | None = Field(default=None, ge=0)
    total_amount: int | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "seller_id": "c0a8012e-0000-4000-8000-000000000001",
                    "buyer_name": "Somchai",
                    "buyer_phone": "081-234-5678",
                    "buyer_address": "99/1 Sukhumvit Soi 11, Khlong Toei, Bangkok 10110",
                    "cart": [{"product_id": "c0a8012e-0000-4000-8000-000000000002", "quantity": 2}],
                    "subtotal": 500,
                    "delivery_fee": 60,
                    "total_amount": 560,
                }
            ]
        }
    }


class OrderIdResponse(BaseModel):
    order_id: str
    order_number: str


class OrderLineResponse(BaseModel):
    product_id: str
    name: str
    price: int
    quantity: int


class TimelineStep(BaseModel):
    step: str
    label: str
    done: bool


class OrderResponse(BaseModel):
    id: str
    order_number: str
    seller_id: str
    buyer_name: str
    buyer_phone: str
    buyer_address: str
    items: list[OrderLineResponse]
    subtotal: int
    delivery_fee: int
    total_amount: int
    payment_method: str
    payment_status: str
    order_status: str
    status_label: str
    delivery_cost: int | None = None
    profit: int | None = None
    carrier_booking_id: str | None = None
    tracking_link: str | None = None
    is_mock_delivery: bool = False
    cancellation_reason: str | None = None
    created_at: datetime | None = None


class PublicOrderResponse(BaseModel):
    order_number: str
    shop_name: str
    items: list[OrderLineResponse]
    subtotal: int
    delivery_fee: int
    total_amount: int
    order_status: str
    status_label: str
    status_message: str
    timeline: list[TimelineStep]
    tracking_link: str | None = None
    promptpay_id: str | None = None


class CancelOrderRequest(BaseModel):
    reason: str | None = None


# ---------------------------------------------------------------------------
# Delivery
# ---------------------------------------------------------------------------
class BookDeliveryRequest(BaseModel):
    order_id: str


class BookDeliveryResponse(BaseModel):
    lalamove_order_id: str | None = None
    share_link: str | None = None
    delivery_cost: int | None = None
    delivery_fee: int
    profit: int | None = None
    is_mock: bool
