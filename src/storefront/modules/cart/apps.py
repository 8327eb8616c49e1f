"""Cart module wiring."""

from __future__ import annotations

from typing import Optional

from storefront.shared.domain.bus import IEventBus


def ready(bus: Optional[IEventBus] = None) -> None:
    """Subscribe the cart handlers to ``bus`` (the global bus by default)."""
    from storefront.modules.cart.events import CartLineRemoved, CartSnapshotReplaced
    from storefront.modules.cart.handlers import (
        cart_line_removed_handler,
        cart_snapshot_replaced_handler,
    )
    from storefront.shared.infrastructure.bus import event_bus

    bus = bus or event_bus
    bus.subscribe(CartSnapshotReplaced, cart_snapshot_replaced_handler)
    bus.subscribe(CartLineRemoved, cart_line_removed_handler)
