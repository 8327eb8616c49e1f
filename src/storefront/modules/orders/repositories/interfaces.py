"""Order repository interface.

Extends ``ISnapshotRepository[Order]`` with the two order mutations.
Both are addressed by the business order number, never by the storage
identifier.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Sequence

from storefront.modules.core.repositories.interfaces import ISnapshotRepository

if TYPE_CHECKING:
    from storefront.modules.core.http import RemoteResult
    from storefront.modules.orders.dtos import CancelOrderDTO, Order, OrderNumber


class IOrderRepository(ISnapshotRepository["Order"]):
    """Repository contract for server-owned orders."""

    @abstractmethod
    async def fetch_all(self) -> Sequence[Order]:
        """Fetch the complete order list, newest first as the server sends it."""

    @abstractmethod
    async def cancel(self, dto: CancelOrderDTO) -> RemoteResult:
        """Ask the server to cancel an order with the given reason."""

    @abstractmethod
    async def delete(self, order_id: OrderNumber) -> RemoteResult:
        """Permanently delete an order (administrative)."""
