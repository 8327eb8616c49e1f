"""Orders module wiring."""

from __future__ import annotations

from typing import Optional

from storefront.shared.domain.bus import IEventBus


def ready(bus: Optional[IEventBus] = None) -> None:
    """Subscribe the order handlers to ``bus`` (the global bus by default)."""
    from storefront.modules.orders.events import (
        OrderCancelled,
        OrderCollectionReplaced,
        OrderDeleted,
    )
    from storefront.modules.orders.handlers import (
        order_cancelled_handler,
        order_collection_replaced_handler,
        order_deleted_handler,
    )
    from storefront.shared.infrastructure.bus import event_bus

    bus = bus or event_bus
    bus.subscribe(OrderCollectionReplaced, order_collection_replaced_handler)
    bus.subscribe(OrderCancelled, order_cancelled_handler)
    bus.subscribe(OrderDeleted, order_deleted_handler)
