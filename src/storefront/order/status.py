"""Buyer- and seller-facing presentation of order status."""

from dataclasses import dataclass

from storefront.order.order import OrderStatus


@dataclass(frozen=True)
class StatusDisplay:
    label: str
    message: str
    color: str


STATUS_DISPLAY = {
    OrderStatus.PENDING.value: StatusDisplay(
        label="Awaiting payment check",
        message="The shop is checking your transfer.",
        color="yellow",
    ),
    OrderStatus.CONFIRMED.value: StatusDisplay(
        label="Payment confirmed",
        message="Payment received. The shop is preparing your order.",
        color="blue",
    ),
    OrderStatus.SHIPPED.value: StatusDisplay(
        label="Out for delivery",
        message="A courier is on the way. Please have cash ready for the delivery fee.",
        color="purple",
    ),
    OrderStatus.DELIVERED.value: StatusDisplay(
        label="Delivered",
        message="Your order has been delivered.",
        color="green",
    ),
    OrderStatus.CANCELLED.value: StatusDisplay(
        label="Cancelled",
        message="This order was cancelled.",
        color="red",
    ),
}

_TIMELINE = [
    (OrderStatus.PENDING, "Order placed"),
    (OrderStatus.CONFIRMED, "Payment confirmed"),
    (OrderStatus.SHIPPED, "Out for delivery"),
    (OrderStatus.DELIVERED, "Delivered"),
]


def display_for(status: str | None) -> StatusDisplay:
    """Presentation for ``status``. Unknown values show as pending."""
    return STATUS_DISPLAY.get(status, STATUS_DISPLAY[OrderStatus.PENDING.value])


def timeline(status: str | None) -> list[dict]:
    """Buyer timeline steps with a ``done`` flag. Cancelled orders show no progress past placement."""
    try:
        current = OrderStatus(status)
    except ValueError:
        current = OrderStatus.PENDING

    if current == OrderStatus.CANCELLED:
        reached = 0
    else:
        reached = [step for step, _ in _TIMELINE].index(current)

    return [{"step": step.value, "label": label, "done": index <= reached} for index, (step, label) in enumerate(_TIMELINE)]
