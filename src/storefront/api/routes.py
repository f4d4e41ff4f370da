"""FastAPI endpoints for the Storefront domain."""

from fastapi import APIRouter, Depends, Header, Request
from fastapi.concurrency import run_in_threadpool
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.api.dependencies import (
    cart_session_id,
    current_seller_id,
    get_booking_service,
    get_cart_store,
    get_checkout_service,
    get_quote_service,
    get_status_service,
)
from storefront.api.schemas import (
    BookDeliveryRequest,
    BookDeliveryResponse,
    CancelOrderRequest,
    CartItemRequest,
    CartQuantityRequest,
    CartResponse,
    CreateProductRequest,
    LinkMessagingRequest,
    OrderIdResponse,
    OrderResponse,
    PlaceOrderRequest,
    ProductIdResponse,
    ProductResponse,
    PublicOrderResponse,
    QuoteRequest,
    QuoteResponse,
    RegisterSellerRequest,
    SellerIdResponse,
    SellerResponse,
    SetVisibilityRequest,
    ShopResponse,
    StatusResponse,
    UpdateProductRequest,
    UpdateShopSettingsRequest,
)
from storefront.cart.store import CartStore, load_cart, save_cart
from storefront.delivery.booking import DeliveryBookingService
from storefront.delivery.quoting import QuoteService
from storefront.delivery.tracking import CarrierStatusService
from storefront.order.cancellation import CancelOrder
from storefront.order.checkout import CheckoutService
from storefront.order.completion import MarkDelivered
from storefront.order.confirmation import ConfirmPayment
from storefront.order.order import Order
from storefront.order.status import display_for, timeline
from storefront.product.management import AddProduct, DeleteProduct, SetProductVisibility, UpdateProduct
from storefront.product.product import Product
from storefront.seller.onboarding import RegisterSeller
from storefront.seller.seller import Seller
from storefront.seller.settings import LinkMessagingAccount, UnlinkMessagingAccount, UpdateShopSettings

seller_router = APIRouter(prefix="/sellers", tags=["sellers"])
product_router = APIRouter(prefix="/products", tags=["products"])
shop_router = APIRouter(prefix="/shops", tags=["shops"])
order_router = APIRouter(prefix="/orders", tags=["orders"])
delivery_router = APIRouter(prefix="/delivery", tags=["delivery"])


# ---------------------------------------------------------------------------
# Serializers
# ---------------------------------------------------------------------------
def _seller_response(seller: Seller) -> SellerResponse:
    return SellerResponse(
        id=str(seller.id),
        shop_name=seller.shop_name,
        shop_slug=seller.shop_slug,
        phone=seller.phone,
        promptpay_id=seller.promptpay_id,
        pickup_address=seller.pickup_address,
        pickup_lat=seller.pickup_lat,
        pickup_lng=seller.pickup_lng,
        profile_image_url=seller.profile_image_url,
        messaging_linked=bool(seller.messaging_account_id),
        can_ship=seller.can_ship,
    )


def _product_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=str(product.id),
        name=product.name,
        description=product.description,
        price=product.price,
        image_url=product.image_url,
        is_active=bool(product.is_active),
        sort_order=product.sort_order or 0,
    )


def _order_lines(order: Order) -> list[dict]:
    return [
        {"product_id": str(item.product_id), "name": item.name, "price": item.price, "quantity": item.quantity}
        for item in order.items
    ]


def _order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=str(order.id),
        order_number=order.order_number,
        seller_id=str(order.seller_id),
        buyer_name=order.buyer_name,
        buyer_phone=order.buyer_phone,
        buyer_address=order.buyer_address,
        items=_order_lines(order),
        subtotal=order.subtotal,
        delivery_fee=order.delivery_fee,
        total_amount=order.total_amount,
        payment_method=order.payment_method,
        payment_status=order.payment_status,
        order_status=order.order_status,
        status_label=display_for(order.order_status).label,
        delivery_cost=order.delivery_cost,
        profit=order.profit,
        carrier_booking_id=order.carrier_booking_id,
        tracking_link=order.tracking_link,
        is_mock_delivery=bool(order.is_mock_delivery),
        cancellation_reason=order.cancellation_reason,
        created_at=order.created_at,
    )


# ---------------------------------------------------------------------------
# Sellers
# ---------------------------------------------------------------------------
@seller_router.post("", status_code=201, response_model=SellerIdResponse)
async def register_seller(body: RegisterSellerRequest) -> SellerIdResponse:
    command = RegisterSeller(
        shop_name=body.shop_name,
        phone=body.phone,
        promptpay_id=body.promptpay_id,
        pickup_address=body.pickup_address,
    )
    seller_id = current_domain.process(command, asynchronous=False)
    seller = current_domain.repository_for(Seller).get(seller_id)
    return SellerIdResponse(seller_id=seller_id, shop_slug=seller.shop_slug)


@seller_router.get("/me", response_model=SellerResponse)
async def get_my_shop(seller_id: str = Depends(current_seller_id)) -> SellerResponse:
    return _seller_response(current_domain.repository_for(Seller).get(seller_id))


@seller_router.put("/me", response_model=StatusResponse)
async def update_my_shop(
    body: UpdateShopSettingsRequest,
    seller_id: str = Depends(current_seller_id),
) -> StatusResponse:
    command = UpdateShopSettings(seller_id=seller_id, **body.model_dump(exclude_none=True))
    current_domain.process(command, asynchronous=False)
    return StatusResponse(status="ok")


@seller_router.put("/me/messaging", response_model=StatusResponse)
async def link_messaging(
    body: LinkMessagingRequest,
    seller_id: str = Depends(current_seller_id),
) -> StatusResponse:
    current_domain.process(LinkMessagingAccount(seller_id=seller_id, account_id=body.account_id), asynchronous=False)
    return StatusResponse(status="linked")


@seller_router.delete("/me/messaging", response_model=StatusResponse)
async def unlink_messaging(seller_id: str = Depends(current_seller_id)) -> StatusResponse:
    current_domain.process(UnlinkMessagingAccount(seller_id=seller_id), asynchronous=False)
    return StatusResponse(status="unlinked")


# ---------------------------------------------------------------------------
# Products (seller dashboard)
# ---------------------------------------------------------------------------
@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def add_product(
    body: CreateProductRequest,
    seller_id: str = Depends(current_seller_id),
) -> ProductIdResponse:
    command = AddProduct(
        seller_id=seller_id,
        name=body.name,
        price=body.price,
        description=body.description,
        image_url=body.image_url,
        sort_order=body.sort_order,
        is_active=body.is_active,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.get("", response_model=list[ProductResponse])
async def list_my_products(seller_id: str = Depends(current_seller_id)) -> list[ProductResponse]:
    products = current_domain.repository_for(Product).for_seller(seller_id)
    return [_product_response(p) for p in products]


@product_router.put("/{product_id}", response_model=StatusResponse)
async def update_product(
    product_id: str,
    body: UpdateProductRequest,
    seller_id: str = Depends(current_seller_id),
) -> StatusResponse:
    command = UpdateProduct(seller_id=seller_id, product_id=product_id, **body.model_dump(exclude_none=True))
    current_domain.process(command, asynchronous=False)
    return StatusResponse(status="ok")


@product_router.put("/{product_id}/visibility", response_model=StatusResponse)
async def set_product_visibility(
    product_id: str,
    body: SetVisibilityRequest,
    seller_id: str = Depends(current_seller_id),
) -> StatusResponse:
    command = SetProductVisibility(seller_id=seller_id, product_id=product_id, is_active=body.is_active)
    current_domain.process(command, asynchronous=False)
    return StatusResponse(status="active" if body.is_active else "hidden")


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str, seller_id: str = Depends(current_seller_id)) -> StatusResponse:
    current_domain.process(DeleteProduct(seller_id=seller_id, product_id=product_id), asynchronous=False)
    return StatusResponse(status="deleted")


# ---------------------------------------------------------------------------
# Public storefront
# ---------------------------------------------------------------------------
def _shop(slug: str) -> Seller:
    return current_domain.repository_for(Seller).get_by_slug(slug)


@shop_router.get("/{slug}", response_model=ShopResponse)
async def get_shop(slug: str) -> ShopResponse:
    seller = _shop(slug)
    products = current_domain.repository_for(Product).active_for_seller(seller.id)
    return ShopResponse(
        seller_id=str(seller.id),
        shop_name=seller.shop_name,
        shop_slug=seller.shop_slug,
        profile_image_url=seller.profile_image_url,
        promptpay_id=seller.promptpay_id,
        products=[_product_response(p) for p in products],
    )


@shop_router.get("/{slug}/orders/{order_number}", response_model=PublicOrderResponse)
async def get_public_order(slug: str, order_number: str) -> PublicOrderResponse:
    seller = _shop(slug)
    order = current_domain.repository_for(Order).find_by_number(order_number)
    if order is None or not order.belongs_to(seller.id):
        raise ObjectNotFoundError(f"Order `{order_number}` was not found")

    display = display_for(order.order_status)
    return PublicOrderResponse(
        order_number=order.order_number,
        shop_name=seller.shop_name,
        items=_order_lines(order),
        subtotal=order.subtotal,
        delivery_fee=order.delivery_fee,
        total_amount=order.total_amount,
        order_status=order.order_status,
        status_label=display.label,
        status_message=display.message,
        timeline=timeline(order.order_status),
        tracking_link=order.tracking_link,
        promptpay_id=seller.promptpay_id,
    )


def _cart_response(cart, dropped=None) -> CartResponse:
    return CartResponse(**cart.to_dict(), dropped=dropped or [])


@shop_router.get("/{slug}/cart", response_model=CartResponse)
async def get_cart(
    slug: str,
    session_id: str = Depends(cart_session_id),
    store: CartStore = Depends(get_cart_store),
) -> CartResponse:
    seller = _shop(slug)
    cart = load_cart(store, session_id, seller.id)
    dropped = cart.revalidate(current_domain.repository_for(Product).active_for_seller(seller.id))
    save_cart(store, session_id, cart)
    return _cart_response(cart, dropped)


@shop_router.post("/{slug}/cart/items", response_model=CartResponse)
async def add_to_cart(
    slug: str,
    body: CartItemRequest,
    session_id: str = Depends(cart_session_id),
    store: CartStore = Depends(get_cart_store),
) -> CartResponse:
    seller = _shop(slug)
    active = {str(p.id): p for p in current_domain.repository_for(Product).active_for_seller(seller.id)}
    product = active.get(body.product_id)
    if product is None:
        raise ValidationError({"product_id": ["This product is not available"]})

    cart = load_cart(store, session_id, seller.id)
    cart.add(product)
    save_cart(store, session_id, cart)
    return _cart_response(cart)


@shop_router.put("/{slug}/cart/items/{product_id}", response_model=CartResponse)
async def set_cart_quantity(
    slug: str,
    product_id: str,
    body: CartQuantityRequest,
    session_id: str = Depends(cart_session_id),
    store: CartStore = Depends(get_cart_store),
) -> CartResponse:
    seller = _shop(slug)
    cart = load_cart(store, session_id, seller.id)
    cart.set_quantity(product_id, body.quantity)
    save_cart(store, session_id, cart)
    return _cart_response(cart)


@shop_router.delete("/{slug}/cart/items/{product_id}", response_model=CartResponse)
async def remove_from_cart(
    slug: str,
    product_id: str,
    session_id: str = Depends(cart_session_id),
    store: CartStore = Depends(get_cart_store),
) -> CartResponse:
    seller = _shop(slug)
    cart = load_cart(store, session_id, seller.id)
    cart.remove(product_id)
    save_cart(store, session_id, cart)
    return _cart_response(cart)


@shop_router.delete("/{slug}/cart", response_model=StatusResponse)
async def clear_cart(
    slug: str,
    session_id: str = Depends(cart_session_id),
    store: CartStore = Depends(get_cart_store),
) -> StatusResponse:
    seller = _shop(slug)
    cart = load_cart(store, session_id, seller.id)
    cart.clear()
    save_cart(store, session_id, cart)
    return StatusResponse(status="cleared")


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@order_router.post("", status_code=201, response_model=OrderIdResponse)
async def place_order(
    body: PlaceOrderRequest,
    checkout: CheckoutService = Depends(get_checkout_service),
) -> OrderIdResponse:
    order = await run_in_threadpool(
        checkout.place_order,
        seller_id=body.seller_id,
        buyer_name=body.buyer_name,
        buyer_phone=body.buyer_phone,
        buyer_address=body.buyer_address,
        cart=[line.model_dump() for line in body.cart],
        subtotal=body.subtotal,
        delivery_fee=body.delivery_fee,
        total_amount=body.total_amount,
    )
    return OrderIdResponse(order_id=str(order.id), order_number=order.order_number)


@order_router.get("", response_model=list[OrderResponse])
async def list_my_orders(
    status: str | None = None,
    seller_id: str = Depends(current_seller_id),
) -> list[OrderResponse]:
    orders = current_domain.repository_for(Order).for_seller(seller_id, status=status)
    return [_order_response(o) for o in orders]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, seller_id: str = Depends(current_seller_id)) -> OrderResponse:
    return _order_response(current_domain.repository_for(Order).get_for_seller(order_id, seller_id))


@order_router.put("/{order_id}/confirm-payment", response_model=StatusResponse)
async def confirm_payment(order_id: str, seller_id: str = Depends(current_seller_id)) -> StatusResponse:
    current_domain.process(ConfirmPayment(order_id=order_id, seller_id=seller_id), asynchronous=False)
    return StatusResponse(status="confirmed")


@order_router.put("/{order_id}/cancel", response_model=StatusResponse)
async def cancel_order(
    order_id: str,
    body: CancelOrderRequest | None = None,
    seller_id: str = Depends(current_seller_id),
) -> StatusResponse:
    command = CancelOrder(order_id=order_id, seller_id=seller_id, reason=body.reason if body else None)
    current_domain.process(command, asynchronous=False)
    return StatusResponse(status="cancelled")


@order_router.put("/{order_id}/deliver", response_model=StatusResponse)
async def mark_delivered(order_id: str, seller_id: str = Depends(current_seller_id)) -> StatusResponse:
    current_domain.process(MarkDelivered(order_id=order_id, seller_id=seller_id), asynchronous=False)
    return StatusResponse(status="delivered")


# ---------------------------------------------------------------------------
# Delivery
# ---------------------------------------------------------------------------
@delivery_router.post("/quote", response_model=QuoteResponse)
async def quote_delivery(
    body: QuoteRequest,
    quotes: QuoteService = Depends(get_quote_service),
) -> QuoteResponse:
    quote = await run_in_threadpool(quotes.quote, body.seller_id, body.buyer_address)
    return QuoteResponse(**quote.to_dict())


@delivery_router.post("/book", response_model=BookDeliveryResponse)
async def book_delivery(
    body: BookDeliveryRequest,
    seller_id: str = Depends(current_seller_id),
    booking: DeliveryBookingService = Depends(get_booking_service),
) -> BookDeliveryResponse:
    result = await run_in_threadpool(booking.ship, body.order_id, seller_id=seller_id)
    return BookDeliveryResponse(**result.to_dict())


@delivery_router.post("/webhook", response_model=StatusResponse)
async def carrier_webhook(
    request: Request,
    x_carrier_signature: str = Header(default=""),
    tracking: CarrierStatusService = Depends(get_status_service),
) -> StatusResponse:
    payload = (await request.body()).decode()
    tracking.handle_callback(payload, x_carrier_signature)
    return StatusResponse(status="processed")
