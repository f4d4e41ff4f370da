"""Tests for the Seller and Product aggregates."""

from datetime import UTC, datetime, timedelta

import pytest
from protean.exceptions import ValidationError
from storefront.product.product import Product, listing_order
from storefront.seller.seller import Seller


def _seller(**overrides):
    data = {"shop_name": "Baan Khanom", "shop_slug": "baan-khanom"}
    data.update(overrides)
    return Seller.register(**data)


class TestSeller:
    def test_register(self):
        seller = _seller(pickup_address="  123 Sukhumvit Road, Bangkok 10110  ")
        assert seller.shop_slug == "baan-khanom"
        assert seller.pickup_address == "123 Sukhumvit Road, Bangkok 10110"
        assert seller.can_ship

    def test_cannot_ship_without_pickup_address(self):
        assert not _seller().can_ship

    def test_slug_must_be_url_safe(self):
        with pytest.raises(ValidationError):
            _seller(shop_slug="Baan Khanom")

    def test_promptpay_must_be_valid(self):
        with pytest.raises(ValidationError):
            _seller(promptpay_id="12345")

    def test_update_settings_never_changes_slug(self):
        seller = _seller()
        seller.update_settings(shop_name="Baan Khanom Thai")
        assert seller.shop_name == "Baan Khanom Thai"
        assert seller.shop_slug == "baan-khanom"

    def test_pickup_coordinates(self):
        seller = _seller()
        assert seller.pickup_coordinates is None
        seller.update_settings(pickup_lat=13.74, pickup_lng=100.56)
        assert seller.pickup_coordinates == {"lat": 13.74, "lng": 100.56}

    def test_messaging_link_and_unlink(self):
        seller = _seller()
        seller.link_messaging_account("U123")
        assert seller.messaging_account_id == "U123"
        seller.unlink_messaging_account()
        assert seller.messaging_account_id is None


class TestProduct:
    def test_create_defaults(self):
        product = Product.create(seller_id="seller-1", name=" Pandan Cake ", price=150)
        assert product.name == "Pandan Cake"
        assert product.is_active is True
        assert product.sort_order == 0

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            Product.create(seller_id="seller-1", name="   ", price=150)

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            Product.create(seller_id="seller-1", name="Cake", price=-1)

    def test_visibility_toggle(self):
        product = Product.create(seller_id="seller-1", name="Cake", price=150)
        product.set_visibility(False)
        assert product.is_active is False

    def test_listing_order_sort_order_then_newest(self):
        now = datetime.now(UTC)
        older = Product.create(seller_id="s", name="Older", price=1, sort_order=1)
        older.created_at = now - timedelta(days=1)
        newer = Product.create(seller_id="s", name="Newer", price=1, sort_order=1)
        newer.created_at = now
        first = Product.create(seller_id="s", name="First", price=1, sort_order=0)
        first.created_at = now - timedelta(days=5)

        assert [p.name for p in listing_order([older, first, newer])] == ["First", "Newer", "Older"]
