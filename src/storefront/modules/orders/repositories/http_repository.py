"""HTTP implementation of the Order repository.

Satisfies ``IOrderRepository`` on top of ``ApiClient``.  One instance
reads either the signed-in customer's orders or, for administrators,
every order (``OrderScope``).
"""

from __future__ import annotations

from typing import Any, List
from urllib.parse import quote

import structlog
from pydantic import TypeAdapter, ValidationError

from storefront.modules.core.exceptions import MalformedResponse
from storefront.modules.core.http import ApiClient, RemoteResult
from storefront.modules.orders.constants import OrderScope
from storefront.modules.orders.dtos import CancelOrderDTO, Order, OrderNumber
from storefront.modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)

_ORDER_LIST = TypeAdapter(List[Order])


class OrderHttpRepository(IOrderRepository):
    """Concrete Order repository backed by the storefront REST API."""

    LIST_URLS = {
        OrderScope.CUSTOMER: "/api/order/order-list",
        OrderScope.ADMIN: "/api/order/all-orders",
    }
    CANCEL_URL = "/api/order/cancel-order"
    DELETE_URL = "/api/order/delete-order/{order_id}"

    def __init__(self, client: ApiClient, scope: OrderScope = OrderScope.CUSTOMER) -> None:
        self._client = client
        self.scope = scope

    async def fetch_all(self) -> List[Order]:
        result = await self._client.get(self.LIST_URLS[self.scope])
        return parse_orders(result.data)

    async def cancel(self, dto: CancelOrderDTO) -> RemoteResult:
        return await self._client.post(self.CANCEL_URL, dto.to_payload())

    async def delete(self, order_id: OrderNumber) -> RemoteResult:
        return await self._client.delete(
            self.DELETE_URL.format(order_id=quote(order_id, safe=""))
        )


def parse_orders(data: Any) -> List[Order]:
    """Parse the ``data`` field of an order-list envelope."""
    try:
        return _ORDER_LIST.validate_python(data or [])
    except ValidationError as exc:
        logger.warning("order.malformed_list", errors=exc.error_count())
        raise MalformedResponse("Unexpected order data from server") from exc
