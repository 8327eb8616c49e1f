"""Cart service layer: the quantity ledger.

Holds the cached ``CartSnapshot`` and exposes the cart mutations.  The
server is the only source of truth:

- no mutation is applied locally; every successful call ends with a full
  refetch that replaces the cached snapshot (never patched in place);
- a failed call leaves the snapshot exactly as it was and propagates
  the error;
- quantity 0 is never sent; a decrement from 1 is a delete.

Mutations addressed to the same line are serialized on a per-line
``asyncio.Lock``, so read-modify-write on a quantity cannot interleave.
A mutation that had to wait for another one on its line works from the
refreshed quantity, never from the value the caller saw before queueing.
Locks live only while a line has callers.
"""

from __future__ import annotations

import asyncio
from collections import Counter
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator, Dict, Optional, Set

import structlog

from storefront.modules.cart.constants import CART_COLLECTION, MIN_LINE_QUANTITY
from storefront.modules.cart.dtos import (
    CartLine,
    CartMembership,
    CartSnapshot,
    CartSummary,
)
from storefront.modules.cart.events import CartLineRemoved, CartSnapshotReplaced
from storefront.modules.cart.exceptions import (
    CartLineNotFound,
    InvalidQuantity,
    ProductAlreadyInCart,
)
from storefront.modules.cart.selectors import find_cart_line, summarize_cart
from storefront.modules.core.exceptions import RemoteNotFound, SubmissionInProgress
from storefront.shared.infrastructure.bus import event_bus

if TYPE_CHECKING:
    from storefront.modules.cart.repositories.interfaces import ICartRepository
    from storefront.shared.domain.bus import IEventBus

logger = structlog.get_logger(__name__)


class CartService:
    """Application service for cart use-cases.

    Receives an ``ICartRepository`` via constructor injection (DIP).
    """

    def __init__(
        self,
        repository: ICartRepository,
        bus: Optional[IEventBus] = None,
    ) -> None:
        self._repo = repository
        self._bus = bus or event_bus
        self._snapshot = CartSnapshot()
        self._line_locks: Dict[str, asyncio.Lock] = {}
        self._line_users: Counter = Counter()
        self._adding: Set[str] = set()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> CartSnapshot:
        return self._snapshot

    def quantity_of(self, line_id: str) -> int:
        """Displayed quantity of a line; 0 when the line is not in the cart."""
        line = self._snapshot.get_line(line_id)
        return line.quantity if line else 0

    def membership(self, product_id: str) -> CartMembership:
        return find_cart_line(self._snapshot, product_id)

    def summary(self) -> CartSummary:
        return summarize_cart(self._snapshot)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def refresh(self) -> CartSnapshot:
        """Fetch the whole cart and replace the cached snapshot."""
        lines = await self._repo.fetch_all()
        self._snapshot = CartSnapshot(lines=tuple(lines))
        self._bus.publish(
            CartSnapshotReplaced(
                aggregate_id=CART_COLLECTION, line_count=len(self._snapshot.lines)
            )
        )
        return self._snapshot

    def reset(self) -> None:
        """Drop the cached snapshot, e.g. after the session lapsed."""
        self._snapshot = CartSnapshot()
        logger.info("cart.snapshot_reset")

    async def add_to_cart(self, product_id: str) -> CartMembership:
        """Add a product that is not in the cart yet.

        The product stays claimed until the refetch has landed, so a
        repeated add cannot slip through while the cache is still stale.

        Raises:
            ProductAlreadyInCart: the product already has a line.
            SubmissionInProgress: an add for this product is in flight.
        """
        if product_id in self._adding:
            raise SubmissionInProgress(f"Product {product_id} is already being added.")
        if self.membership(product_id).is_present:
            raise ProductAlreadyInCart(f"Product {product_id} is already in the cart.")

        self._adding.add(product_id)
        try:
            await self._repo.add_product(product_id)
            logger.info("cart.product_added", product_id=product_id)
            await self.refresh()
        finally:
            self._adding.discard(product_id)
        return self.membership(product_id)

    async def increment(self, line_id: str) -> int:
        """Request quantity + 1 for an existing line.

        Returns the refreshed quantity.

        Raises:
            CartLineNotFound: the line is not in the cached snapshot.
        """
        async with self._hold_line(line_id):
            line = self._require_line(line_id)
            new_quantity = line.quantity + 1
            await self._repo.update_quantity(line_id, new_quantity)
            logger.info("cart.line_incremented", line_id=line_id, quantity=new_quantity)
            await self.refresh()
            return self.quantity_of(line_id)

    async def decrement(self, line_id: str, current_quantity: Optional[int] = None) -> int:
        """Request quantity - 1, or delete the line when it is at 1.

        ``current_quantity`` is the quantity the caller displays.  It is
        used only when no other mutation of the line was pending; otherwise,
        or when it is omitted, the cached quantity is read once the per-line
        lock is held.  Returns the refreshed quantity (0 once the line is
        gone).

        Raises:
            InvalidQuantity: ``current_quantity`` is below 1.
            CartLineNotFound: quantity > 1 but the line is not cached.
        """
        async with self._hold_line(line_id) as queued:
            if queued:
                line = self._snapshot.get_line(line_id)
                if line is None:
                    logger.info(
                        "cart.remove_noop", line_id=line_id, reason="removed_while_queued"
                    )
                    return 0
                current_quantity = line.quantity
            elif current_quantity is None:
                current_quantity = self._require_line(line_id).quantity
            if current_quantity < MIN_LINE_QUANTITY:
                raise InvalidQuantity(
                    f"Cannot decrement line {line_id} from quantity {current_quantity}."
                )

            if current_quantity == MIN_LINE_QUANTITY:
                await self._remove_line(line_id)
                return self.quantity_of(line_id)

            self._require_line(line_id)
            new_quantity = current_quantity - 1
            await self._repo.update_quantity(line_id, new_quantity)
            logger.info("cart.line_decremented", line_id=line_id, quantity=new_quantity)
            await self.refresh()
            return self.quantity_of(line_id)

    async def remove(self, line_id: str) -> bool:
        """Delete a line entirely.

        Returns ``True`` when a delete was issued, ``False`` when the line
        was already gone (a successful no-op, not an error).
        """
        async with self._hold_line(line_id):
            return await self._remove_line(line_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def _hold_line(self, line_id: str) -> AsyncIterator[bool]:
        """Hold the lock of ``line_id``; yields whether another caller came first."""
        queued = self._line_users[line_id] > 0
        self._line_users[line_id] += 1
        lock = self._line_locks.setdefault(line_id, asyncio.Lock())
        try:
            async with lock:
                yield queued
        finally:
            self._line_users[line_id] -= 1
            if not self._line_users[line_id]:
                del self._line_users[line_id]
                del self._line_locks[line_id]

    def _require_line(self, line_id: str) -> CartLine:
        line = self._snapshot.get_line(line_id)
        if line is None:
            raise CartLineNotFound(f"Cart line {line_id} not found.")
        return line

    async def _remove_line(self, line_id: str) -> bool:
        """Delete ``line_id``; the caller holds the line lock."""
        if self._snapshot.get_line(line_id) is None:
            logger.info("cart.remove_noop", line_id=line_id, reason="absent_locally")
            return False

        try:
            await self._repo.delete_line(line_id)
        except RemoteNotFound:
            # Removed concurrently elsewhere.
            logger.info("cart.remove_noop", line_id=line_id, reason="absent_remotely")
            await self.refresh()
            return False

        self._bus.publish(CartLineRemoved(aggregate_id=line_id))
        await self.refresh()
        return True
