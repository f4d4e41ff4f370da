"""Tests for cart persistence per (session, seller)."""

from storefront.cart.cart import Cart
from storefront.cart.store import MemoryCartStore, cart_key, load_cart, save_cart


def test_missing_cart_loads_empty():
    cart = load_cart(MemoryCartStore(), "sess-1", "seller-1")
    assert cart.is_empty
    assert cart.seller_id == "seller-1"


def test_round_trip_through_store(products):
    store = MemoryCartStore()
    cart = Cart(seller_id=str(products["cake"].seller_id))
    cart.add(products["cake"])
    cart.add(products["cake"])
    save_cart(store, "sess-1", cart)

    loaded = load_cart(store, "sess-1", cart.seller_id)
    assert loaded.count == 2
    assert loaded.total == 300


def test_carts_are_kept_per_seller(products):
    store = MemoryCartStore()
    cart = Cart(seller_id=str(products["cake"].seller_id))
    cart.add(products["cake"])
    save_cart(store, "sess-1", cart)

    assert load_cart(store, "sess-1", "another-seller").is_empty
    assert load_cart(store, "sess-2", cart.seller_id).is_empty


def test_emptied_cart_is_removed(products):
    store = MemoryCartStore()
    cart = Cart(seller_id=str(products["cake"].seller_id))
    cart.add(products["cake"])
    save_cart(store, "sess-1", cart)

    cart.clear()
    save_cart(store, "sess-1", cart)
    assert store.get(cart_key("sess-1", cart.seller_id)) is None
