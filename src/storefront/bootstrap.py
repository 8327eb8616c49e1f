"""Wiring for a storefront client session.

Builds one ``ApiClient`` and the services on top of it, and subscribes
the module handlers to the event bus.  The returned ``Storefront`` owns
the process-wide caches (cart snapshot, order lists).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx

from storefront.modules.cart import apps as cart_apps
from storefront.modules.cart.repositories import CartHttpRepository
from storefront.modules.cart.services import CartService
from storefront.modules.core.http import ApiClient
from storefront.modules.orders import apps as orders_apps
from storefront.modules.orders.constants import OrderScope
from storefront.modules.orders.repositories import OrderHttpRepository
from storefront.modules.orders.services import OrderAdminService, OrderService
from storefront.shared.domain.bus import IEventBus
from storefront.shared.infrastructure.bus import event_bus


@dataclass
class Storefront:
    client: ApiClient
    cart: CartService
    orders: OrderService
    admin_orders: OrderAdminService

    async def aclose(self) -> None:
        await self.client.aclose()


def build_storefront(
    base_url: Optional[str] = None,
    access_token: Optional[str] = None,
    bus: Optional[IEventBus] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Storefront:
    bus = bus or event_bus
    cart_apps.ready(bus)
    orders_apps.ready(bus)

    client = ApiClient(base_url=base_url, access_token=access_token, transport=transport)
    return Storefront(
        client=client,
        cart=CartService(CartHttpRepository(client), bus=bus),
        orders=OrderService(OrderHttpRepository(client, OrderScope.CUSTOMER), bus=bus),
        admin_orders=OrderAdminService(
            OrderHttpRepository(client, OrderScope.ADMIN), bus=bus
        ),
    )
