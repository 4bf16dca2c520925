"""
Storefront Backend — API Endpoint Tests
=========================================

What:  End-to-end tests through the FastAPI app with HTTPX AsyncClient.
How:   The seeded SQLite Database is attached to app.state; no server runs.

What we test:
    ✅ Products: list, create (201), duplicate (400), update, unknown id (404)
    ✅ Orders: placed (201), missing fields (400), unknown product (404),
       insufficient inventory (400), listing
    ✅ Search: results, inventory + text union, leading integers, missing query (400)
    ✅ Integers beyond the INTEGER column range give 400/404, never 500
    ✅ Static: index page, public files, images, plain-text 404s
    ✅ Health check and X-Request-ID header
"""

import pytest

from storefront.routes.static import resolve_inside


class TestProductEndpoints:

    @pytest.mark.asyncio
    async def test_list_products(self, test_client):
        response = await test_client.get("/products")

        assert response.status_code == 200
        body = response.json()
        assert [p["id"] for p in body] == [1, 2, 3]
        assert body[0]["availableInventory"] == 5
        assert body[0]["image"] == "math.png"

    @pytest.mark.asyncio
    async def test_create_product(self, test_client):
        response = await test_client.post(
            "/products",
            json={
                "id": 4,
                "title": "Drama",
                "description": "Stage acting",
                "location": "Soho",
                "price": 60,
                "availableInventory": 10,
            },
        )

        assert response.status_code == 201
        assert response.json() == {"success": True, "productId": 4}

        listed = (await test_client.get("/products")).json()
        assert listed[-1]["title"] == "Drama"
        assert listed[-1]["availableInventory"] == 10

    @pytest.mark.asyncio
    async def test_create_duplicate_product(self, test_client):
        response = await test_client.post(
            "/products",
            json={"id": 1, "title": "Again", "price": 1, "availableInventory": 1},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_create_product_missing_fields(self, test_client):
        response = await test_client.post("/products", json={"id": 9})

        assert response.status_code == 400
        fields = {e["field"] for e in response.json()["details"]["errors"]}
        assert {"title", "price", "availableInventory"} <= fields

    @pytest.mark.asyncio
    async def test_update_product(self, test_client):
        response = await test_client.put("/products/3", json={"availableInventory": 12})

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Product updated successfully"}
        listed = {p["id"]: p for p in (await test_client.get("/products")).json()}
        assert listed[3]["availableInventory"] == 12
        assert listed[3]["title"] == "Music Lessons"

    @pytest.mark.asyncio
    async def test_update_unknown_product(self, test_client):
        response = await test_client.put("/products/77", json={"title": "Nope"})

        assert response.status_code == 404
        assert response.json()["message"] == "Product with ID 77 not found"

    @pytest.mark.asyncio
    async def test_update_id_beyond_column_range(self, test_client):
        response = await test_client.put(
            "/products/99999999999999999999", json={"title": "Nope"}
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_create_product_id_beyond_column_range(self, test_client):
        response = await test_client.post(
            "/products",
            json={"id": 3000000000, "title": "Big", "price": 1, "availableInventory": 1},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_update_rejects_unknown_field(self, test_client):
        response = await test_client.put("/products/1", json={"colour": "red"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_update_rejects_null_title(self, test_client):
        response = await test_client.put("/products/1", json={"title": None})

        assert response.status_code == 400


class TestOrderEndpoints:

    @pytest.mark.asyncio
    async def test_place_order(self, test_client, inventory_of):
        response = await test_client.post(
            "/orders",
            json={"productIDs": [1, 3], "quantities": [2, 1], "name": "Ada", "phone": "0770"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["orderId"]
        assert await inventory_of(1) == 3
        assert await inventory_of(3) == 4

        orders = (await test_client.get("/orders")).json()
        assert len(orders) == 1
        assert orders[0]["id"] == body["orderId"]
        assert orders[0]["productIDs"] == [1, 3]
        assert orders[0]["quantities"] == [2, 1]

    @pytest.mark.asyncio
    async def test_missing_fields(self, test_client):
        response = await test_client.post(
            "/orders",
            json={"productIDs": [1], "quantities": [1], "name": "Ada"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_empty_line_items(self, test_client, order_count):
        response = await test_client.post(
            "/orders",
            json={"productIDs": [], "quantities": [], "name": "Ada", "phone": "0770"},
        )

        assert response.status_code == 400
        assert await order_count() == 0

    @pytest.mark.asyncio
    async def test_mismatched_lengths(self, test_client):
        response = await test_client.post(
            "/orders",
            json={"productIDs": [1, 2], "quantities": [1], "name": "Ada", "phone": "0770"},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_product(self, test_client, inventory_of, order_count):
        response = await test_client.post(
            "/orders",
            json={"productIDs": [1, 99], "quantities": [1, 1], "name": "Ada", "phone": "0770"},
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Product with ID 99 not found"
        assert await inventory_of(1) == 5
        assert await order_count() == 0

    @pytest.mark.asyncio
    async def test_insufficient_inventory(self, test_client, inventory_of, order_count):
        response = await test_client.post(
            "/orders",
            json={"productIDs": [2], "quantities": [4], "name": "Ada", "phone": "0770"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "insufficient_inventory"
        assert body["message"] == "Insufficient inventory for product ID 2"
        assert await inventory_of(2) == 3
        assert await order_count() == 0

    @pytest.mark.asyncio
    async def test_product_id_beyond_column_range(self, test_client, order_count):
        response = await test_client.post(
            "/orders",
            json={
                "productIDs": [99999999999999999999],
                "quantities": [1],
                "name": "Ada",
                "phone": "0770",
            },
        )

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"
        assert await order_count() == 0

    @pytest.mark.asyncio
    async def test_list_orders_empty(self, test_client):
        response = await test_client.get("/orders")

        assert response.status_code == 200
        assert response.json() == []


class TestSearchEndpoint:

    @pytest.mark.asyncio
    async def test_search(self, test_client):
        response = await test_client.get("/search", params={"q": "london"})

        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [1]

    @pytest.mark.asyncio
    async def test_search_by_inventory(self, test_client):
        response = await test_client.get("/search", params={"q": "3"})

        assert [p["id"] for p in response.json()] == [2]

    @pytest.mark.asyncio
    async def test_search_integer_and_text_union(self, test_client):
        created = await test_client.post(
            "/products",
            json={"id": 4, "title": "Art", "price": 15.0, "availableInventory": 3},
        )
        assert created.status_code == 201

        response = await test_client.get("/search", params={"q": "5"})

        assert [p["id"] for p in response.json()] == [1, 3, 4]

    @pytest.mark.asyncio
    async def test_search_leading_integer(self, test_client):
        response = await test_client.get("/search", params={"q": "5 units"})

        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [1, 3]

    @pytest.mark.asyncio
    async def test_search_integer_beyond_column_range(self, test_client):
        response = await test_client.get("/search", params={"q": "99999999999999999999"})

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["", None])
    async def test_search_requires_query(self, test_client, query):
        params = {"q": query} if query is not None else {}
        response = await test_client.get("/search", params=params)

        assert response.status_code == 400
        assert response.json()["message"] == "Search query is required"


class TestStaticAndFallback:

    @pytest.mark.asyncio
    async def test_index_page(self, test_client, static_dirs):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert "Storefront" in response.text

    @pytest.mark.asyncio
    async def test_public_file(self, test_client, static_dirs):
        response = await test_client.get("/app.js")

        assert response.status_code == 200
        assert "storefront" in response.text

    @pytest.mark.asyncio
    async def test_image(self, test_client, static_dirs):
        response = await test_client.get("/images/math.png")

        assert response.status_code == 200
        assert response.content.startswith(b"\x89PNG")

    @pytest.mark.asyncio
    async def test_missing_image(self, test_client, static_dirs):
        response = await test_client.get("/images/nothing.png")

        assert response.status_code == 404
        assert response.text == "Image not found!"

    @pytest.mark.asyncio
    async def test_unmatched_route(self, test_client, static_dirs):
        response = await test_client.get("/does/not/exist")

        assert response.status_code == 404
        assert response.text == "Page not found!"
        assert response.headers["content-type"].startswith("text/plain")

    @pytest.mark.asyncio
    async def test_unmatched_method(self, test_client, static_dirs):
        response = await test_client.delete("/products")

        assert response.status_code == 404
        assert response.text == "Page not found!"

    def test_resolve_inside_rejects_escape(self, static_dirs):
        public, _ = static_dirs

        assert resolve_inside(str(public), "../secret.txt") is None
        assert resolve_inside(str(public), "app.js") == (public / "app.js").resolve()


class TestHealthAndHeaders:

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_request_id_header(self, test_client):
        response = await test_client.get("/products", headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"
