from datetime import UTC, datetime

from storefront.order.numbering import generate_order_number
from storefront.order.status import display_for, timeline


class TestStatusDisplay:
    def test_known_status(self):
        assert display_for("shipped").label == "Out for delivery"

    def test_unknown_status_falls_back_to_pending(self):
        assert display_for("teleported") == display_for("pending")
        assert display_for(None) == display_for("pending")


class TestTimeline:
    def test_confirmed_marks_first_two_steps(self):
        steps = timeline("confirmed")
        assert [s["done"] for s in steps] == [True, True, False, False]

    def test_delivered_marks_every_step(self):
        assert all(s["done"] for s in timeline("delivered"))

    def test_cancelled_and_unknown_show_only_placement(self):
        assert [s["done"] for s in timeline("cancelled")] == [True, False, False, False]
        assert [s["done"] for s in timeline("bogus")] == [True, False, False, False]


class TestOrderNumber:
    def test_format(self):
        number = generate_order_number(now=datetime(2026, 3, 9, tzinfo=UTC))
        prefix, date, suffix = number.split("-")
        assert prefix == "TS"
        assert date == "20260309"
        assert len(suffix) == 4
        assert suffix == suffix.upper()
        assert suffix.isalnum()

    def test_prefix_from_environment(self, monkeypatch):
        monkeypatch.setenv("ORDER_NUMBER_PREFIX", "SHOP")
        assert generate_order_number().startswith("SHOP-")
