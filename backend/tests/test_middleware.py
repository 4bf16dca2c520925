"""
Storefront Backend — Middleware Tests
=======================================

What we test:
    ✅ Well-formed client request IDs are kept, others replaced
    ✅ Request ID appears in JSON error bodies
    ✅ Access-log level follows the status class; /health is not logged
"""

import logging

import pytest

from storefront.middleware.logging import level_for_status
from storefront.middleware.request_id import accept_request_id


class TestRequestId:

    def test_well_formed_id_kept(self):
        assert accept_request_id("order-42.retry_1") == "order-42.retry_1"

    @pytest.mark.parametrize("candidate", [None, "", "a b", "x" * 65, "id\nforged"])
    def test_malformed_id_replaced(self, candidate):
        rid = accept_request_id(candidate)

        assert rid != candidate
        assert len(rid) == 12

    @pytest.mark.asyncio
    async def test_malformed_header_replaced_in_response(self, test_client):
        response = await test_client.get("/products", headers={"X-Request-ID": "bad id!"})

        assert response.headers["X-Request-ID"] != "bad id!"
        assert len(response.headers["X-Request-ID"]) == 12

    @pytest.mark.asyncio
    async def test_error_body_carries_request_id(self, test_client):
        response = await test_client.get("/search", headers={"X-Request-ID": "trace-7"})

        assert response.status_code == 400
        assert response.json()["request_id"] == "trace-7"


class TestAccessLog:

    @pytest.mark.parametrize(
        "status, level",
        [(200, logging.INFO), (201, logging.INFO), (404, logging.WARNING), (503, logging.ERROR)],
    )
    def test_level_for_status(self, status, level):
        assert level_for_status(status) == level

    @pytest.mark.asyncio
    async def test_order_request_logged(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="storefront.access"):
            await test_client.post(
                "/orders",
                json={"productIDs": [1], "quantities": [1], "name": "Ada", "phone": "0770"},
                headers={"X-Request-ID": "order-1"},
            )

        lines = [r.getMessage() for r in caplog.records if r.name == "storefront.access"]
        assert len(lines) == 1
        assert lines[0].startswith("POST /orders 201 ")
        assert "[order-1]" in lines[0]
        assert "Ada" not in lines[0]

    @pytest.mark.asyncio
    async def test_health_not_logged(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="storefront.access"):
            await test_client.get("/health")

        assert not [r for r in caplog.records if r.name == "storefront.access"]
