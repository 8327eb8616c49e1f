"""Order domain constants.

Defines tracking statuses, the fixed cancellation reasons and the
cancellation eligibility rule.
"""

from enum import Enum


class TrackingStatus(str, Enum):
    PLACED = "Placed"
    PACKED = "Packed"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"

    @property
    def step(self) -> int:
        """1-based position in the tracking timeline."""
        return TRACKING_SEQUENCE.index(self) + 1


TRACKING_SEQUENCE: tuple[TrackingStatus, ...] = (
    TrackingStatus.PLACED,
    TrackingStatus.PACKED,
    TrackingStatus.SHIPPED,
    TrackingStatus.DELIVERED,
)

# Cancellation is only possible before the parcel leaves the warehouse.
CANCELLABLE_STATUSES: frozenset[TrackingStatus] = frozenset(
    {TrackingStatus.PLACED, TrackingStatus.PACKED}
)


class CancellationReason(str, Enum):
    CHANGED_MY_MIND = "Changed my mind"
    BETTER_ALTERNATIVE = "Found a better alternative"
    PLACED_BY_MISTAKE = "Order placed by mistake"
    OTHER = "Other"


class OrderScope(str, Enum):
    """Which order list a repository reads."""

    CUSTOMER = "customer"
    ADMIN = "admin"


INVOICE_PREFIX = "INV"

NOT_AVAILABLE = "N/A"
