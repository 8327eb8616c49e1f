"""Cart repository interface.

Extends ``ISnapshotRepository[CartLine]`` with the three cart mutations.
None of them is atomic with the refresh that follows it; the service
layer always issues that refresh itself.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Sequence

from storefront.modules.core.repositories.interfaces import ISnapshotRepository

if TYPE_CHECKING:
    from storefront.modules.cart.dtos import CartLine
    from storefront.modules.core.http import RemoteResult


class ICartRepository(ISnapshotRepository["CartLine"]):
    """Repository contract for the server-owned cart."""

    @abstractmethod
    async def fetch_all(self) -> Sequence[CartLine]:
        """Fetch every line of the current user's cart."""

    @abstractmethod
    async def add_product(self, product_id: str) -> RemoteResult:
        """Create a line for ``product_id`` (server starts it at quantity 1)."""

    @abstractmethod
    async def update_quantity(self, line_id: str, quantity: int) -> RemoteResult:
        """Set the quantity of an existing line.  ``quantity`` is always >= 1."""

    @abstractmethod
    async def delete_line(self, line_id: str) -> RemoteResult:
        """Delete a line.  Raises ``RemoteNotFound`` if it is already gone."""
