"""Integration tests for seller onboarding and product management endpoints."""


class TestSellerEndpoints:
    def test_register_returns_slug(self, client):
        response = client.post("/sellers", json={"shop_name": "Baan Khanom"})
        assert response.status_code == 201
        assert response.json()["shop_slug"].startswith("baan-khanom")

    def test_slugs_stay_unique(self, client):
        first = client.post("/sellers", json={"shop_name": "Baan Khanom"}).json()
        second = client.post("/sellers", json={"shop_name": "Baan Khanom"}).json()
        assert first["shop_slug"] != second["shop_slug"]

    def test_invalid_promptpay_id(self, client):
        response = client.post("/sellers", json={"shop_name": "Baan Khanom", "promptpay_id": "12345"})
        assert response.status_code == 400

    def test_me_requires_identity(self, client):
        assert client.get("/sellers/me").status_code == 401

    def test_update_settings(self, client, shop):
        response = client.put(
            "/sellers/me",
            json={"shop_name": "Baan Khanom Silom", "pickup_lat": 13.72, "pickup_lng": 100.53},
            headers=shop["headers"],
        )
        assert response.status_code == 200

        me = client.get("/sellers/me", headers=shop["headers"]).json()
        assert me["shop_name"] == "Baan Khanom Silom"
        assert me["pickup_lat"] == 13.72
        assert me["can_ship"] is True

    def test_link_and_unlink_messaging(self, client, shop):
        client.put("/sellers/me/messaging", json={"account_id": "U123"}, headers=shop["headers"])
        assert client.get("/sellers/me", headers=shop["headers"]).json()["messaging_linked"] is True

        client.delete("/sellers/me/messaging", headers=shop["headers"])
        assert client.get("/sellers/me", headers=shop["headers"]).json()["messaging_linked"] is False


class TestProductEndpoints:
    def test_list_own_products(self, client, shop):
        products = client.get("/products", headers=shop["headers"]).json()
        assert {p["name"] for p in products} == {"Pandan Cake", "Butter Cookies"}

    def test_update_product(self, client, shop):
        response = client.put(f"/products/{shop['cake']}", json={"price": 280}, headers=shop["headers"])
        assert response.status_code == 200
        products = {p["id"]: p for p in client.get("/products", headers=shop["headers"]).json()}
        assert products[shop["cake"]]["price"] == 280

    def test_negative_price_rejected_at_the_edge(self, client, shop):
        response = client.post("/products", json={"name": "Free Cake", "price": -1}, headers=shop["headers"])
        assert response.status_code == 422

    def test_hidden_product_leaves_storefront(self, client, shop):
        client.put(f"/products/{shop['cake']}/visibility", json={"is_active": False}, headers=shop["headers"])
        public = client.get(f"/shops/{shop['slug']}").json()
        assert [p["id"] for p in public["products"]] == [shop["cookies"]]

    def test_other_seller_cannot_edit(self, client, shop):
        response = client.put(
            f"/products/{shop['cake']}", json={"price": 1}, headers={"X-Seller-Id": "someone-else"}
        )
        assert response.status_code == 404

    def test_delete_product(self, client, shop):
        assert client.delete(f"/products/{shop['cake']}", headers=shop["headers"]).status_code == 200
        assert len(client.get("/products", headers=shop["headers"]).json()) == 1
