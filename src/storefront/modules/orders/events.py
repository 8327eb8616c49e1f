"""Domain events for the Orders context."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.shared.domain.events import DomainEvent


@dataclass(frozen=True)
class OrderCollectionReplaced(DomainEvent):
    """Raised when a cached order list is replaced by a fresh fetch."""

    order_count: int = 0


@dataclass(frozen=True)
class OrderCancelled(DomainEvent):
    """Raised when the server accepted a cancellation."""

    reason: str = ""


@dataclass(frozen=True)
class OrderDeleted(DomainEvent):
    """Raised when the server accepted an administrative delete."""
