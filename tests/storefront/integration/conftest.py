import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from storefront.api import ROUTERS
from storefront.api.errors import register_storefront_exception_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    for router in ROUTERS:
        app.include_router(router)
    register_storefront_exception_handlers(app)
    return TestClient(app)


@pytest.fixture()
def shop(client):
    """A seller registered through the API, with two products."""
    response = client.post(
        "/sellers",
        json={
            "shop_name": "Baan Khanom",
            "phone": "0812345678",
            "promptpay_id": "0812345678",
            "pickup_address": "123 Sukhumvit Road, Khlong Toei, Bangkok 10110",
        },
    )
    body = response.json()
    headers = {"X-Seller-Id": body["seller_id"]}
    cake = client.post("/products", json={"name": "Pandan Cake", "price": 250}, headers=headers).json()
    cookies = client.post("/products", json={"name": "Butter Cookies", "price": 100}, headers=headers).json()
    return {
        "seller_id": body["seller_id"],
        "slug": body["shop_slug"],
        "headers": headers,
        "cake": cake["product_id"],
        "cookies": cookies["product_id"],
    }
