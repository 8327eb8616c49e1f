"""Unit tests for Orders event handlers and their wiring."""

from __future__ import annotations

import logging

import pytest

from storefront.modules.orders import apps
from storefront.modules.orders.events import (
    OrderCancelled,
    OrderCollectionReplaced,
    OrderDeleted,
)
from storefront.modules.orders.handlers import (
    OrderCancelledHandler,
    OrderCollectionReplacedHandler,
    OrderDeletedHandler,
)
from storefront.shared.infrastructure.bus import InMemoryEventBus

pytestmark = pytest.mark.unit

HANDLERS_LOGGER = "storefront.modules.orders.handlers"


def test_collection_replaced_handler_logs(caplog):
    event = OrderCollectionReplaced(aggregate_id="all-orders", order_count=7)

    with caplog.at_level(logging.INFO, logger=HANDLERS_LOGGER):
        OrderCollectionReplacedHandler().handle(event)

    assert any(
        "order.collection_replaced" in record.getMessage()
        and "'order_count': 7" in record.getMessage()
        for record in caplog.records
    )


def test_order_cancelled_handler_logs(caplog):
    event = OrderCancelled(aggregate_id="ORD-1", reason="Changed my mind")

    with caplog.at_level(logging.INFO, logger=HANDLERS_LOGGER):
        OrderCancelledHandler().handle(event)

    assert any(
        "order.cancelled" in record.getMessage() and "ORD-1" in record.getMessage()
        for record in caplog.records
    )


def test_order_deleted_handler_logs(caplog):
    with caplog.at_level(logging.INFO, logger=HANDLERS_LOGGER):
        OrderDeletedHandler().handle(OrderDeleted(aggregate_id="ORD-9"))

    assert any(
        "order.deleted" in record.getMessage() and "ORD-9" in record.getMessage()
        for record in caplog.records
    )


def test_ready_subscribes_handlers_once(caplog):
    bus = InMemoryEventBus()
    apps.ready(bus)
    apps.ready(bus)

    with caplog.at_level(logging.INFO, logger=HANDLERS_LOGGER):
        bus.publish(OrderDeleted(aggregate_id="ORD-3"))

    messages = [record.getMessage() for record in caplog.records]
    assert sum("order.deleted" in message for message in messages) == 1
