"""Checkout — turns a buyer's cart into a pending order.

The cart submitted by the buyer is only trusted for product ids and
quantities. Names and prices are snapshotted from the seller's live, active
products, and the buyer's subtotal must agree with that snapshot. Once the
order is stored with the buyer phone in its plain local form, the seller is
notified in the background.
"""

import structlog
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.notification.dispatch import NotificationDispatcher
from storefront.order.numbering import generate_order_number
from storefront.order.order import Order
from storefront.product.product import Product
from storefront.seller.seller import Seller
from storefront.shared.validation import normalize_phone, validate_address, validate_phone

logger = structlog.get_logger(__name__)

MAX_ORDER_NUMBER_ATTEMPTS = 5


def _required(value) -> bool:
    return value is not None and (not isinstance(value, str) or value.strip() != "")


def snapshot_items(seller_id, cart: list[dict]) -> list[dict]:
    """Price the cart against the seller's active products. Repeated product ids are merged."""
    live = {str(p.id): p for p in current_domain.repository_for(Product).active_for_seller(seller_id)}

    quantities: dict[str, int] = {}
    for line in cart:
        product_id = str(line.get("product_id") or line.get("id") or "")
        quantity = line.get("quantity")
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
            raise ValidationError({"cart": [f"Invalid quantity for product {product_id}"]})
        if product_id not in live:
            raise ValidationError({"cart": ["Some items are no longer available. Please review your cart."]})
        quantities[product_id] = quantities.get(product_id, 0) + quantity

    return [
        {
            "product_id": product_id,
            "name": live[product_id].name,
            "price": live[product_id].price,
            "quantity": quantity,
        }
        for product_id, quantity in quantities.items()
    ]


class CheckoutService:
    def __init__(self, dispatcher: NotificationDispatcher | None = None):
        self.dispatcher = dispatcher

    def place_order(
        self,
        seller_id,
        buyer_name: str,
        buyer_phone: str,
        buyer_address: str,
        cart: list[dict],
        subtotal: int,
        delivery_fee: int | None = None,
        total_amount: int | None = None,
    ) -> Order:
        if not all(_required(v) for v in (seller_id, buyer_name, buyer_phone, buyer_address)) or not cart:
            raise ValidationError({"order": ["Missing required fields"]})
        validate_phone(buyer_phone)
        validate_address(buyer_address)

        delivery_fee = delivery_fee or 0
        if delivery_fee < 0:
            raise ValidationError({"delivery_fee": ["Delivery fee cannot be negative"]})

        seller = current_domain.repository_for(Seller).get(seller_id)
        items = snapshot_items(seller_id, cart)

        expected_subtotal = sum(item["price"] * item["quantity"] for item in items)
        if subtotal != expected_subtotal:
            raise ValidationError({"subtotal": ["Prices have changed. Please review your cart."]})
        if total_amount is not None and total_amount != expected_subtotal + delivery_fee:
            raise ValidationError({"total_amount": ["Total must equal subtotal plus delivery fee"]})

        order = self._store(
            seller_id=str(seller.id),
            buyer_name=buyer_name.strip(),
            buyer_phone=normalize_phone(buyer_phone),
            buyer_address=buyer_address.strip(),
            items=items,
            delivery_fee=delivery_fee,
        )
        logger.info(
            "Order placed",
            order_id=str(order.id),
            order_number=order.order_number,
            seller_id=str(seller.id),
            total_amount=order.total_amount,
        )

        self._notify(order, seller)
        return order

    def _store(self, seller_id, buyer_name, buyer_phone, buyer_address, items, delivery_fee) -> Order:
        repo = current_domain.repository_for(Order)
        for attempt in range(1, MAX_ORDER_NUMBER_ATTEMPTS + 1):
            order_number = generate_order_number()
            if repo.number_taken(order_number):
                logger.warning("Order number collision", order_number=order_number, attempt=attempt)
                continue

            order = Order.place(
                order_number=order_number,
                seller_id=seller_id,
                buyer_name=buyer_name,
                buyer_phone=buyer_phone,
                buyer_address=buyer_address,
                items_data=items,
                delivery_fee=delivery_fee,
            )
            try:
                return repo.add(order)
            except ValidationError as exc:
                # Unique constraint on order_number lost a race with another checkout
                if "order_number" not in exc.messages:
                    raise
                logger.warning("Order number collision on write", order_number=order_number, attempt=attempt)

        raise ValidationError({"order_number": ["Could not allocate an order number, please try again"]})

    def _notify(self, order: Order, seller: Seller) -> None:
        if self.dispatcher is None:
            return
        try:
            self.dispatcher.notify_new_order(order, seller)
        except Exception as exc:
            logger.error("Could not queue new-order notification", order_number=order.order_number, error=str(exc))
