"""Unit tests for CartHttpRepository request shapes and parsing."""

from __future__ import annotations

import json

import httpx
import pytest

from storefront.modules.cart.repositories import CartHttpRepository
from storefront.modules.core.exceptions import MalformedResponse
from storefront.modules.core.http import ApiClient

pytestmark = pytest.mark.unit


def _repository(handler) -> CartHttpRepository:
    client = ApiClient(
        base_url="http://api.test",
        access_token="",
        transport=httpx.MockTransport(handler),
    )
    return CartHttpRepository(client)


@pytest.mark.asyncio
async def test_fetch_all_parses_populated_lines():
    def handler(request):
        assert request.url.path == "/api/cart/get"
        return httpx.Response(
            200,
            json={
                "success": True,
                "data": [
                    {
                        "_id": "L1",
                        "productId": {"_id": "P1", "name": "Mug", "price": 300},
                        "quantity": 2,
                    }
                ],
            },
        )

    lines = await _repository(handler).fetch_all()
    assert [(line.line_id, line.product_id, line.quantity) for line in lines] == [
        ("L1", "P1", 2)
    ]


@pytest.mark.asyncio
async def test_fetch_all_rejects_zero_quantity_line():
    def handler(request):
        return httpx.Response(
            200,
            json={"success": True, "data": [{"_id": "L1", "productId": "P1", "quantity": 0}]},
        )

    with pytest.raises(MalformedResponse):
        await _repository(handler).fetch_all()


@pytest.mark.asyncio
async def test_update_quantity_payload():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"success": True, "message": "Update cart"})

    result = await _repository(handler).update_quantity("L1", 2)

    assert seen == {"method": "PUT", "path": "/api/cart/update-qty", "body": {"_id": "L1", "qty": 2}}
    assert result.message == "Update cart"


@pytest.mark.asyncio
async def test_add_product_payload():
    seen = {}

    def handler(request):
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"success": True})

    await _repository(handler).add_product("P7")
    assert seen == {"path": "/api/cart/create", "body": {"productId": "P7"}}
