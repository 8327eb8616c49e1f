"""Shared fixtures: in-memory repositories standing in for the storefront API.

The fakes keep server state in the API's own payload shape, so every
``fetch_all`` goes through the same parsing as the HTTP repositories.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

import pytest

from storefront.config.settings import configure_logging
from storefront.modules.cart.dtos import CartLine, CartSnapshot
from storefront.modules.cart.repositories.interfaces import ICartRepository
from storefront.modules.cart.services import CartService
from storefront.modules.core.exceptions import RemoteNotFound
from storefront.modules.core.http import RemoteResult
from storefront.modules.orders.dtos import CancelOrderDTO, Order, OrderNumber
from storefront.modules.orders.repositories.http_repository import parse_orders
from storefront.modules.orders.repositories.interfaces import IOrderRepository
from storefront.modules.orders.services import OrderAdminService, OrderService
from storefront.shared.infrastructure.bus import InMemoryEventBus

configure_logging()


class RecordingRepositoryMixin:
    """Records calls and raises queued errors once per method.

    ``gate`` holds every mutation until set; ``fetch_gate`` does the same
    for ``fetch_all``.
    """

    def _init_recording(self) -> None:
        self.calls: List[tuple] = []
        self.errors: Dict[str, Exception] = {}
        self.gate: Optional[asyncio.Event] = None
        self.fetch_gate: Optional[asyncio.Event] = None

    async def _enter(self, name: str, *args: Any) -> None:
        self.calls.append((name, *args))
        gate = self.fetch_gate if name == "fetch_all" else self.gate
        if gate is not None:
            await gate.wait()
        exc = self.errors.pop(name, None)
        if exc is not None:
            raise exc

    def mutations(self) -> List[tuple]:
        return [call for call in self.calls if call[0] != "fetch_all"]


class FakeCartRepository(RecordingRepositoryMixin, ICartRepository):
    def __init__(self, lines: Optional[List[dict]] = None) -> None:
        self._init_recording()
        self.lines: List[dict] = [dict(line) for line in lines or []]
        self._next_id = 100

    async def fetch_all(self) -> List[CartLine]:
        await self._enter("fetch_all")
        return list(CartSnapshot.from_payload(self.lines).lines)

    async def add_product(self, product_id: str) -> RemoteResult:
        await self._enter("add_product", product_id)
        self._next_id += 1
        self.lines.append(
            {"_id": f"L{self._next_id}", "productId": product_id, "quantity": 1}
        )
        return RemoteResult(message="Item add successfully")

    async def update_quantity(self, line_id: str, quantity: int) -> RemoteResult:
        await self._enter("update_quantity", line_id, quantity)
        for line in self.lines:
            if line["_id"] == line_id:
                line["quantity"] = quantity
                return RemoteResult(message="Update cart")
        raise RemoteNotFound("Cart item not found", status_code=404)

    async def delete_line(self, line_id: str) -> RemoteResult:
        await self._enter("delete_line", line_id)
        for line in self.lines:
            if line["_id"] == line_id:
                self.lines.remove(line)
                return RemoteResult(message="Item remove")
        raise RemoteNotFound("Cart item not found", status_code=404)


class FakeOrderRepository(RecordingRepositoryMixin, IOrderRepository):
    CANCELLED_AT = "2026-03-02T09:30:00Z"

    def __init__(self, orders: Optional[List[dict]] = None) -> None:
        self._init_recording()
        self.orders: List[dict] = [dict(order) for order in orders or []]

    async def fetch_all(self) -> List[Order]:
        await self._enter("fetch_all")
        return parse_orders(self.orders)

    async def cancel(self, dto: CancelOrderDTO) -> RemoteResult:
        await self._enter("cancel", dto.order_id, dto.cancellation_reason)
        for order in self.orders:
            if order["orderId"] == dto.order_id:
                order.update(
                    isCancelled=True,
                    cancellationReason=dto.cancellation_reason,
                    cancellationDate=self.CANCELLED_AT,
                )
                return RemoteResult(message="Order cancelled successfully")
        raise RemoteNotFound("Order not found", status_code=404)

    async def delete(self, order_id: OrderNumber) -> RemoteResult:
        await self._enter("delete", order_id)
        for order in self.orders:
            if order["orderId"] == order_id:
                self.orders.remove(order)
                return RemoteResult(message="Order deleted successfully")
        raise RemoteNotFound("Order not found", status_code=404)


def make_order(
    storage_id: str = "665f1c2e9b1d8a0012a4f001",
    order_id: str = "ORD-1001",
    tracking_status: str = "Placed",
    **overrides: Any,
) -> dict:
    order = {
        "_id": storage_id,
        "orderId": order_id,
        "tracking_status": tracking_status,
        "isCancelled": False,
        "payment_status": "CASH ON DELIVERY",
        "totalAmt": 1499,
        "product_details": {"name": "Cotton Kurta", "image": ["kurta.jpg"]},
        "delivery_address": {
            "address_line": "12 MG Road",
            "city": "Pune",
            "state": "Maharashtra",
            "pincode": 411001,
            "country": "India",
            "mobile": 9876543210,
        },
        "userId": {"_id": "u-1", "name": "Asha Rao", "email": "asha@example.com"},
        "createdAt": "2026-03-01T08:00:00Z",
    }
    order.update(overrides)
    return order


@pytest.fixture()
def bus():
    return InMemoryEventBus()


@pytest.fixture()
def cart_repo():
    return FakeCartRepository(
        [
            {"_id": "L1", "productId": "P9", "quantity": 3},
            {"_id": "L2", "productId": "P2", "quantity": 1},
        ]
    )


@pytest.fixture()
def cart_service(cart_repo, bus):
    return CartService(cart_repo, bus=bus)


@pytest.fixture()
def order_repo():
    return FakeOrderRepository(
        [
            make_order("s-1", "ORD-1", "Placed"),
            make_order("s-2", "ORD-2", "Packed"),
            make_order("s-3", "ORD-3", "Shipped"),
            make_order("s-4", "ORD-4", "Delivered"),
            make_order(
                "s-5",
                "ORD-5",
                "Placed",
                isCancelled=True,
                cancellationReason="Changed my mind",
                cancellationDate="2026-02-20T12:00:00Z",
            ),
        ]
    )


@pytest.fixture()
def order_service(order_repo, bus):
    return OrderService(order_repo, bus=bus)


@pytest.fixture()
def admin_service(order_repo, bus):
    return OrderAdminService(order_repo, bus=bus)


@pytest.fixture()
def order_factory():
    return make_order
