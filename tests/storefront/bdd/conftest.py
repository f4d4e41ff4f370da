"""Shared BDD fixtures and step definitions for the order lifecycle."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then
from storefront.errors import PreconditionError
from storefront.order.events import OrderCancelled, OrderDelivered, OrderPlaced, OrderShipped, PaymentConfirmed
from storefront.order.order import Order

_ORDER_EVENT_CLASSES = {
    "OrderPlaced": OrderPlaced,
    "PaymentConfirmed": PaymentConfirmed,
    "OrderShipped": OrderShipped,
    "OrderDelivered": OrderDelivered,
    "OrderCancelled": OrderCancelled,
}


@pytest.fixture()
def error():
    """Container for the error a When step ran into."""
    return {"exc": None}


def _settled(order):
    order._events.clear()
    return order


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(
    parsers.cfparse("a pending order for {quantity:d} cakes at {price:d} baht with a {fee:d} baht delivery fee"),
    target_fixture="order",
)
def pending_order(quantity, price, fee):
    return _placed(quantity, price, fee)


@given("a pending order", target_fixture="order")
def default_pending_order():
    return _placed(quantity=2, price=150, fee=60)


def _placed(quantity, price, fee):
    order = Order.place(
        order_number="TS-20260101-BDD1",
        seller_id="seller-001",
        buyer_name="Somchai",
        buyer_phone="0812345678",
        buyer_address="99/1 Sukhumvit Soi 11, Bangkok 10110",
        items_data=[{"product_id": "prod-001", "name": "Pandan Cake", "price": price, "quantity": quantity}],
        delivery_fee=fee,
    )
    return _settled(order)


@given("the payment was confirmed", target_fixture="order")
def payment_was_confirmed(order):
    order.confirm_payment()
    return _settled(order)


@given("the order was shipped by courier", target_fixture="order")
def order_was_shipped(order):
    order.ship(carrier_booking_id="LLM-001", tracking_link="https://share.test/LLM-001", delivery_cost=52)
    return _settled(order)


@given("the order was delivered", target_fixture="order")
def order_was_delivered(order):
    order.mark_delivered()
    return _settled(order)


@given("the order was cancelled", target_fixture="order")
def order_was_cancelled(order):
    order.cancel(reason="Out of stock")
    return _settled(order)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order, status):
    assert order.order_status == status


@then(parsers.cfparse('the payment status is "{status}"'))
def payment_status_is(order, status):
    assert order.payment_status == status


@then(parsers.cfparse("the order total is {total:d} baht"))
def order_total_is(order, total):
    assert order.total_amount == total


@then(parsers.cfparse("a {event_type} event is raised"))
def event_is_raised(order, event_type):
    assert len(order._events) == 1
    assert isinstance(order._events[0], _ORDER_EVENT_CLASSES[event_type])


@then("no event is raised")
def no_event_is_raised(order):
    assert order._events == []


@then("the action is refused")
def action_is_refused(error):
    assert isinstance(error["exc"], PreconditionError)


@then(parsers.cfparse('the action is refused with "{message}"'))
def action_is_refused_with(error, message):
    assert isinstance(error["exc"], ValidationError)
    assert message in error["exc"].messages["order_status"][0]
