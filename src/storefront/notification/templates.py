"""Message templates for seller notifications."""

from storefront.shared.validation import format_phone


def _baht(amount: int) -> str:
    return f"฿{amount:,}"


def render_new_order(order) -> str:
    """New-order summary pushed to the seller's linked messaging account."""
    items = "\n".join(
        f"  - {item.name} x{item.quantity} ({_baht(item.price * item.quantity)})" for item in order.items
    )
    return (
        f"🛒 New Order! #{order.order_number}\n"
        "\n"
        "📦 Items:\n"
        f"{items}\n"
        "\n"
        "💰 Payment:\n"
        f"  Subtotal: {_baht(order.subtotal)}\n"
        f"  Delivery: {_baht(order.delivery_fee)} (COD)\n"
        f"  Total: {_baht(order.total_amount)}\n"
        "\n"
        "📍 Deliver to:\n"
        f"  {order.buyer_name}\n"
        f"  {format_phone(order.buyer_phone)}\n"
        f"  {order.buyer_address}\n"
        "\n"
        "👉 Go to your dashboard to confirm payment and ship!"
    )
