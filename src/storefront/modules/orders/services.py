"""Order service layer (Use Cases).

Holds a cached order collection and runs the two guarded mutations:

- ``OrderService.cancel``: customer cancellation, gated by
  ``CancellationGuard``;
- ``OrderAdminService.confirm_deletion``: administrative delete, gated
  by ``DeletionGuard``.

Rules enforced:
- Guards run before any network call; a rejection changes nothing.
- A failed call leaves the cached collection untouched.
- Every successful mutation is followed by a full re-fetch that replaces
  the collection (tracking and cancellation fields are server-owned and
  may change as a side effect, e.g. restocking).
- The same order cannot be submitted twice while its call, or the
  re-fetch that follows it, is still pending.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Set, Tuple

import structlog

from storefront.modules.core.exceptions import StorefrontError, SubmissionInProgress
from storefront.modules.orders.dtos import (
    CancellationRequest,
    CancelOrderDTO,
    DeletionConfirmation,
    InvoiceDTO,
    Order,
    OrderNumber,
    OrderStorageId,
)
from storefront.modules.orders.events import (
    OrderCancelled,
    OrderCollectionReplaced,
    OrderDeleted,
)
from storefront.modules.orders.exceptions import OrderNotFound
from storefront.modules.orders.guards import CancellationGuard, DeletionGuard
from storefront.modules.orders.invoices import build_invoice
from storefront.shared.infrastructure.bus import event_bus

if TYPE_CHECKING:
    from storefront.modules.core.http import RemoteResult
    from storefront.modules.orders.repositories.interfaces import IOrderRepository
    from storefront.shared.domain.bus import IEventBus

logger = structlog.get_logger(__name__)


class BaseOrderService:
    """Cached order collection shared by the customer and admin services.

    Receives an ``IOrderRepository`` via constructor injection (DIP).
    """

    collection_name = "orders"

    def __init__(
        self,
        repository: IOrderRepository,
        bus: Optional[IEventBus] = None,
    ) -> None:
        self._repo = repository
        self._bus = bus or event_bus
        self._orders: Tuple[Order, ...] = ()
        self._in_flight: Set[OrderNumber] = set()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def orders(self) -> Tuple[Order, ...]:
        return self._orders

    def get_order(self, order_id: OrderNumber) -> Order:
        """Find an order by its business order number.

        Raises:
            OrderNotFound: not in the cached collection.
        """
        for order in self._orders:
            if order.order_id == order_id:
                return order
        raise OrderNotFound(f"Order {order_id} not found.")

    def get_by_storage_id(self, storage_id: OrderStorageId) -> Order:
        """Find an order by its storage key (the key list rows render with)."""
        for order in self._orders:
            if order.id == storage_id:
                return order
        raise OrderNotFound(f"Order with storage id {storage_id} not found.")

    def invoice(self, order_id: OrderNumber) -> InvoiceDTO:
        return build_invoice(self.get_order(order_id))

    def is_submitting(self, order_id: OrderNumber) -> bool:
        """Whether a mutation for ``order_id`` is in flight (disable its control)."""
        return order_id in self._in_flight

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def refresh(self) -> Tuple[Order, ...]:
        """Fetch the whole order list and replace the cached collection."""
        self._orders = tuple(await self._repo.fetch_all())
        self._bus.publish(
            OrderCollectionReplaced(
                aggregate_id=self.collection_name, order_count=len(self._orders)
            )
        )
        return self._orders

    def _claim(self, order_id: OrderNumber) -> None:
        if order_id in self._in_flight:
            raise SubmissionInProgress(f"Order {order_id} is already being processed.")
        self._in_flight.add(order_id)


class OrderService(BaseOrderService):
    """Customer use-cases: own order list and cancellation."""

    collection_name = "orders"

    def __init__(
        self,
        repository: IOrderRepository,
        bus: Optional[IEventBus] = None,
        guard: Optional[CancellationGuard] = None,
    ) -> None:
        super().__init__(repository, bus)
        self._guard = guard or CancellationGuard()

    def can_cancel(self, order_id: OrderNumber) -> bool:
        return self._guard.can_cancel(self.get_order(order_id))

    def begin_cancellation(self, order_id: OrderNumber) -> CancellationRequest:
        """Open the cancel dialog: an empty request for a cancellable order.

        Raises:
            OrderNotFound: not in the cached collection.
            OrderNotCancellable: shipped, delivered or already cancelled.
        """
        self._guard.ensure_cancellable(self.get_order(order_id))
        return CancellationRequest(order_id=order_id)

    async def cancel(self, request: CancellationRequest) -> RemoteResult:
        """Submit a cancellation and re-fetch the order list on success.

        Raises:
            OrderNotFound: not in the cached collection.
            OrderNotCancellable: shipped, delivered or already cancelled.
            CancellationReasonRequired: missing reason or blank "Other" text.
            SubmissionInProgress: a cancellation for this order is in flight.
            RemoteCallFailed / SessionExpired: the call failed; nothing changed.
        """
        order = self.get_order(request.order_id)
        self._guard.ensure_cancellable(order)
        reason = self._guard.resolve_reason(request)
        dto = CancelOrderDTO(order_id=order.order_id, cancellation_reason=reason)

        log = logger.bind(order_id=order.order_id)
        self._claim(order.order_id)
        try:
            try:
                result = await self._repo.cancel(dto)
            except StorefrontError as exc:
                log.warning("order.cancel_failed", error=exc.message)
                raise
            self._bus.publish(OrderCancelled(aggregate_id=order.order_id, reason=reason))
            await self.refresh()
        finally:
            self._in_flight.discard(order.order_id)
        return result


class OrderAdminService(BaseOrderService):
    """Administrative use-cases: the full order list and guarded deletion."""

    collection_name = "all-orders"

    def __init__(
        self,
        repository: IOrderRepository,
        bus: Optional[IEventBus] = None,
        guard: Optional[DeletionGuard] = None,
    ) -> None:
        super().__init__(repository, bus)
        self._guard = guard or DeletionGuard()

    def open_deletion(self, storage_id: OrderStorageId) -> DeletionConfirmation:
        """Open the deletion dialog for the row keyed by ``storage_id``."""
        return self._guard.open(self.get_by_storage_id(storage_id))

    def close_deletion(self, confirmation: DeletionConfirmation) -> None:
        """Discard the dialog state, whatever the outcome."""
        confirmation.is_open = False
        confirmation.typed_name = ""
        confirmation.last_error = None

    async def confirm_deletion(
        self, confirmation: DeletionConfirmation, typed_name: str
    ) -> RemoteResult:
        """Delete the order once ``typed_name`` confirms the owner.

        The delete is addressed by the business order number.  On success
        the dialog is closed and the full list re-fetched.  On failure the
        dialog stays open with ``last_error`` set; the typed name is kept
        for one retry and cleared after a second consecutive failure.

        Raises:
            SubmissionInProgress: this confirmation is already submitting.
            ConfirmationClosed / ConfirmationNameRequired / OwnerNameMismatch:
                rejected locally, no call made.
            RemoteCallFailed / SessionExpired: the call failed.
        """
        if confirmation.is_submitting:
            raise SubmissionInProgress(
                f"Order {confirmation.order_id} is already being deleted."
            )
        confirmation.typed_name = typed_name
        try:
            self._guard.authorize(confirmation, typed_name)
        except StorefrontError as exc:
            confirmation.last_error = exc.message
            raise

        order_id = confirmation.order_id
        log = logger.bind(order_id=order_id)
        self._claim(order_id)
        confirmation.is_submitting = True
        try:
            try:
                result = await self._repo.delete(order_id)
            except StorefrontError as exc:
                confirmation.last_error = exc.message
                confirmation.failed_attempts += 1
                if confirmation.failed_attempts >= 2:
                    confirmation.typed_name = ""
                    confirmation.failed_attempts = 0
                log.warning("order.delete_failed", error=exc.message)
                raise
            self.close_deletion(confirmation)
            self._bus.publish(OrderDeleted(aggregate_id=order_id))
            await self.refresh()
        finally:
            confirmation.is_submitting = False
            self._in_flight.discard(order_id)
        return result
