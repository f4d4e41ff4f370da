"""Tests for the Order aggregate and its lifecycle state machine."""

import pytest
from protean.exceptions import ValidationError
from storefront.errors import PreconditionError
from storefront.order.events import (
    OrderCancelled,
    OrderDelivered,
    OrderPlaced,
    OrderShipped,
    PaymentConfirmed,
)
from storefront.order.order import Order, OrderStatus, PaymentStatus


def _make_order(delivery_fee=60):
    return Order.place(
        order_number="TS-20260101-AB12",
        seller_id="seller-001",
        buyer_name="Somchai",
        buyer_phone="0812345678",
        buyer_address="99/1 Sukhumvit Soi 11, Bangkok 10110",
        items_data=[
            {"product_id": "prod-1", "name": "Pandan Cake", "price": 150, "quantity": 2},
            {"product_id": "prod-2", "name": "Butter Cookies", "price": 100, "quantity": 2},
        ],
        delivery_fee=delivery_fee,
    )


def _confirmed():
    order = _make_order()
    order.confirm_payment()
    return order


def _shipped():
    order = _confirmed()
    order.ship(carrier_booking_id="LLM-1", tracking_link="https://track/1", delivery_cost=52)
    return order


class TestOrderPlacement:
    def test_amounts_are_derived_from_items(self):
        order = _make_order()
        assert order.subtotal == 500
        assert order.delivery_fee == 60
        assert order.total_amount == 560

    def test_starts_pending_with_promptpay(self):
        order = _make_order()
        assert order.order_status == OrderStatus.PENDING.value
        assert order.payment_status == PaymentStatus.PENDING.value
        assert order.payment_method == "promptpay"
        assert order.delivery_cost is None

    def test_items_are_snapshotted(self):
        order = _make_order()
        assert len(order.items) == 2
        assert {item.name for item in order.items} == {"Pandan Cake", "Butter Cookies"}

    def test_raises_order_placed(self):
        order = _make_order()
        assert len(order._events) == 1
        event = order._events[0]
        assert isinstance(event, OrderPlaced)
        assert event.total_amount == 560

    def test_empty_order_is_rejected(self):
        with pytest.raises(ValidationError):
            Order.place(
                order_number="TS-20260101-0000",
                seller_id="seller-001",
                buyer_name="Somchai",
                buyer_phone="0812345678",
                buyer_address="99/1 Sukhumvit Soi 11, Bangkok 10110",
                items_data=[],
                delivery_fee=60,
            )

    def test_total_invariant_guards_tampering(self):
        order = _make_order()
        with pytest.raises(ValidationError):
            order.total_amount = 1


class TestValidTransitions:
    def test_pending_to_confirmed(self):
        order = _make_order()
        order.confirm_payment()
        assert order.order_status == OrderStatus.CONFIRMED.value
        assert order.payment_status == PaymentStatus.CONFIRMED.value
        assert isinstance(order._events[-1], PaymentConfirmed)

    def test_confirmed_to_shipped(self):
        order = _shipped()
        assert order.order_status == OrderStatus.SHIPPED.value
        assert order.carrier_booking_id == "LLM-1"
        assert order.delivery_cost == 52
        assert order.profit == 8
        event = order._events[-1]
        assert isinstance(event, OrderShipped)
        assert event.from_status == "confirmed"
        assert event.to_status == "shipped"

    def test_shipped_to_delivered(self):
        order = _shipped()
        order.mark_delivered()
        assert order.order_status == OrderStatus.DELIVERED.value
        assert isinstance(order._events[-1], OrderDelivered)

    @pytest.mark.parametrize("build", [_make_order, _confirmed, _shipped])
    def test_cancel_from_any_non_terminal_state(self, build):
        order = build()
        order.cancel("Buyer changed their mind")
        assert order.order_status == OrderStatus.CANCELLED.value
        assert order.cancellation_reason == "Buyer changed their mind"
        assert isinstance(order._events[-1], OrderCancelled)

    def test_profit_may_be_negative(self):
        order = _confirmed()
        order.ship(carrier_booking_id="LLM-2", delivery_cost=75)
        assert order.profit == -15


class TestInvalidTransitions:
    def test_pending_cannot_ship(self):
        order = _make_order()
        with pytest.raises(PreconditionError) as exc:
            order.ship(carrier_booking_id="LLM-1")
        assert "must be confirmed before shipping" in str(exc.value)
        assert order.order_status == OrderStatus.PENDING.value

    def test_cannot_ship_twice(self):
        order = _shipped()
        with pytest.raises(PreconditionError):
            order.ship(carrier_booking_id="LLM-2")
        assert order.carrier_booking_id == "LLM-1"

    def test_cannot_confirm_twice(self):
        order = _confirmed()
        with pytest.raises(PreconditionError):
            order.confirm_payment()

    def test_pending_cannot_be_delivered(self):
        with pytest.raises(PreconditionError):
            _make_order().mark_delivered()

    def test_delivered_is_terminal(self):
        order = _shipped()
        order.mark_delivered()
        with pytest.raises(PreconditionError):
            order.cancel()

    def test_cancelled_is_terminal(self):
        order = _make_order()
        order.cancel()
        for transition in (order.confirm_payment, order.mark_delivered, order.cancel):
            with pytest.raises(PreconditionError):
                transition()

    def test_precondition_error_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            _make_order().mark_delivered()
