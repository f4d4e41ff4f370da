"""Storefront API package."""

from storefront.api.routes import delivery_router, order_router, product_router, seller_router, shop_router

ROUTERS = [seller_router, product_router, shop_router, order_router, delivery_router]

__all__ = ["seller_router", "product_router", "shop_router", "order_router", "delivery_router", "ROUTERS"]
