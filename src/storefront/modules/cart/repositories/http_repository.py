"""HTTP implementation of the Cart repository.

Satisfies ``ICartRepository`` on top of ``ApiClient``.  Payload keys
follow the storefront API (``_id``, ``qty``, ``productId``).
"""

from __future__ import annotations

from typing import List

import structlog
from pydantic import ValidationError

from storefront.modules.cart.dtos import CartLine, CartSnapshot
from storefront.modules.cart.repositories.interfaces import ICartRepository
from storefront.modules.core.exceptions import MalformedResponse
from storefront.modules.core.http import ApiClient, RemoteResult

logger = structlog.get_logger(__name__)


class CartHttpRepository(ICartRepository):
    """Concrete Cart repository backed by the storefront REST API."""

    GET_CART_URL = "/api/cart/get"
    ADD_TO_CART_URL = "/api/cart/create"
    UPDATE_QUANTITY_URL = "/api/cart/update-qty"
    DELETE_LINE_URL = "/api/cart/delete-cart-item"

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def fetch_all(self) -> List[CartLine]:
        result = await self._client.get(self.GET_CART_URL)
        try:
            snapshot = CartSnapshot.from_payload(result.data)
        except ValidationError as exc:
            logger.warning("cart.malformed_snapshot", errors=exc.error_count())
            raise MalformedResponse("Unexpected cart data from server") from exc
        return list(snapshot.lines)

    async def add_product(self, product_id: str) -> RemoteResult:
        return await self._client.post(
            self.ADD_TO_CART_URL, {"productId": product_id}
        )

    async def update_quantity(self, line_id: str, quantity: int) -> RemoteResult:
        return await self._client.put(
            self.UPDATE_QUANTITY_URL, {"_id": line_id, "qty": quantity}
        )

    async def delete_line(self, line_id: str) -> RemoteResult:
        return await self._client.delete(self.DELETE_LINE_URL, {"_id": line_id})
