"""Cart store port and the in-memory adapter.

Carts are kept per (buyer session, seller): a buyer holds at most one
in-progress cart per shop and carts for different shops are never merged.
"""

import threading
from abc import ABC, abstractmethod

from storefront.cart.cart import Cart


def cart_key(session_id: str, seller_id) -> str:
    return f"{session_id}:{seller_id}"


class CartStore(ABC):
    """Abstract key-value store for buyer carts."""

    @abstractmethod
    def get(self, key: str) -> dict | None:
        ...

    @abstractmethod
    def set(self, key: str, value: dict) -> None:
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        ...


class MemoryCartStore(CartStore):
    """Process-local store, suitable for development and tests."""

    def __init__(self) -> None:
        self._data: dict[str, dict] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> dict | None:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: dict) -> None:
        with self._lock:
            self._data[key] = value

    def remove(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)


def load_cart(store: CartStore, session_id: str, seller_id) -> Cart:
    data = store.get(cart_key(session_id, seller_id))
    if data is None:
        return Cart(seller_id=str(seller_id))
    return Cart.from_dict(data)


def save_cart(store: CartStore, session_id: str, cart: Cart) -> None:
    key = cart_key(session_id, cart.seller_id)
    if cart.is_empty:
        store.remove(key)
    else:
        store.set(key, cart.to_dict())


_current_store: CartStore | None = None


def get_cart_store() -> CartStore:
    """Return the active cart store. Defaults to an in-memory store."""
    global _current_store
    if _current_store is None:
        _current_store = MemoryCartStore()
    return _current_store


def set_cart_store(store: CartStore) -> None:
    global _current_store
    _current_store = store


def reset_cart_store() -> None:
    global _current_store
    _current_store = None
