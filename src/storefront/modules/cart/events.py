"""Domain events for the Cart context."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.shared.domain.events import DomainEvent


@dataclass(frozen=True)
class CartSnapshotReplaced(DomainEvent):
    """Raised when the cached cart is replaced by a fresh fetch."""

    line_count: int = 0


@dataclass(frozen=True)
class CartLineRemoved(DomainEvent):
    """Raised when a line is deleted (explicitly or by decrement from 1)."""
