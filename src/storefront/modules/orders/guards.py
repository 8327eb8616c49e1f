"""Order guards: pure decisions taken before any network call.

``CancellationGuard`` encodes which orders may be cancelled and which
reasons may be submitted.  ``DeletionGuard`` encodes the identity
confirmation required before an administrative delete.

Neither guard is the sole enforcement point: the server re-checks both
rules.  The guards exist so that a doomed request is never sent.
"""

from __future__ import annotations

import structlog

from storefront.modules.orders.constants import CANCELLABLE_STATUSES, CancellationReason
from storefront.modules.orders.dtos import CancellationRequest, DeletionConfirmation, Order
from storefront.modules.orders.exceptions import (
    CancellationReasonRequired,
    ConfirmationClosed,
    ConfirmationNameRequired,
    OrderNotCancellable,
    OwnerNameMismatch,
    OwnerNameUnavailable,
)

logger = structlog.get_logger(__name__)


class CancellationGuard:
    """Cancellation state machine over ``tracking_status x is_cancelled``.

    Allowed: status Placed or Packed and not yet cancelled.  Everything
    else (Shipped, Delivered, already cancelled) is rejected.  The
    transition is one-way; nothing here un-cancels an order.
    """

    def can_cancel(self, order: Order) -> bool:
        return not order.is_cancelled and order.tracking_status in CANCELLABLE_STATUSES

    def ensure_cancellable(self, order: Order) -> None:
        """Raises ``OrderNotCancellable`` unless ``can_cancel(order)``."""
        if not self.can_cancel(order):
            logger.info(
                "order.cancel_not_allowed",
                order_id=order.order_id,
                tracking_status=order.tracking_status.value,
                is_cancelled=order.is_cancelled,
            )
            raise OrderNotCancellable("Cannot cancel this order")

    def resolve_reason(self, request: CancellationRequest) -> str:
        """Return the reason text to submit.

        The enumerated text for fixed reasons, the stripped custom text
        for "Other".

        Raises:
            CancellationReasonRequired: no reason chosen, or "Other" with
                blank custom text.
        """
        if request.reason_code is None:
            raise CancellationReasonRequired(
                "Please select or enter a cancellation reason"
            )
        if request.reason_code is CancellationReason.OTHER:
            reason = request.custom_reason_text.strip()
            if not reason:
                raise CancellationReasonRequired("reason required")
            return reason
        return request.reason_code.value


def names_match(expected: str, typed: str) -> bool:
    """Case-insensitive comparison after trimming surrounding whitespace."""
    return typed.strip().lower() == expected.strip().lower()


class DeletionGuard:
    """Identity confirmation before an irreversible order delete."""

    def open(self, order: Order) -> DeletionConfirmation:
        """Start a confirmation for ``order``, capturing its owner's name.

        Raises:
            OwnerNameUnavailable: the order has no owner name to type.
        """
        if not order.owner_name.strip():
            raise OwnerNameUnavailable(
                f"Order {order.order_id} has no owner name to confirm against"
            )
        return DeletionConfirmation(order=order, expected_owner_name=order.owner_name)

    def authorize(self, confirmation: DeletionConfirmation, typed_name: str) -> None:
        """Raise unless ``typed_name`` confirms the owner's identity."""
        if not confirmation.is_open:
            raise ConfirmationClosed("This confirmation has already been closed")
        if not typed_name.strip():
            raise ConfirmationNameRequired("Please type the user's name to confirm")
        if not names_match(confirmation.expected_owner_name, typed_name):
            logger.info("order.delete_name_mismatch", order_id=confirmation.order_id)
            raise OwnerNameMismatch("The entered name does not match the user's name")
