"""Event handlers for Cart domain events.

The services publish; these handlers are where the events are logged.
"""

from __future__ import annotations

import structlog

from storefront.modules.cart.events import CartLineRemoved, CartSnapshotReplaced
from storefront.shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class CartSnapshotReplacedHandler(IEventHandler[CartSnapshotReplaced]):
    def handle(self, event: CartSnapshotReplaced) -> None:
        logger.info("cart.snapshot_replaced", line_count=event.line_count)


class CartLineRemovedHandler(IEventHandler[CartLineRemoved]):
    def handle(self, event: CartLineRemoved) -> None:
        logger.info("cart.line_removed", line_id=event.aggregate_id)


cart_snapshot_replaced_handler = CartSnapshotReplacedHandler()
cart_line_removed_handler = CartLineRemovedHandler()
