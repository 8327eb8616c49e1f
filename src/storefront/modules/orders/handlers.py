"""Event handlers for Orders domain events.

The services publish; these handlers are where the events are logged.
"""

from __future__ import annotations

import structlog

from storefront.modules.orders.events import (
    OrderCancelled,
    OrderCollectionReplaced,
    OrderDeleted,
)
from storefront.shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class OrderCollectionReplacedHandler(IEventHandler[OrderCollectionReplaced]):
    def handle(self, event: OrderCollectionReplaced) -> None:
        logger.info(
            "order.collection_replaced",
            collection=event.aggregate_id,
            order_count=event.order_count,
        )


class OrderCancelledHandler(IEventHandler[OrderCancelled]):
    def handle(self, event: OrderCancelled) -> None:
        logger.info("order.cancelled", order_id=event.aggregate_id, reason=event.reason)


class OrderDeletedHandler(IEventHandler[OrderDeleted]):
    def handle(self, event: OrderDeleted) -> None:
        logger.info("order.deleted", order_id=event.aggregate_id)


order_collection_replaced_handler = OrderCollectionReplacedHandler()
order_cancelled_handler = OrderCancelledHandler()
order_deleted_handler = OrderDeletedHandler()
