"""Order domain exceptions.

Raised by the guards and the Service Layer before any network call.
"""

from __future__ import annotations

from storefront.modules.core.exceptions import GuardRejected


class OrderNotFound(GuardRejected):
    """The order is not in the cached order collection."""


class OrderNotCancellable(GuardRejected):
    """The order is shipped, delivered or already cancelled."""


class CancellationReasonRequired(GuardRejected):
    """No reason chosen, or "Other" chosen with no custom text."""


class OwnerNameUnavailable(GuardRejected):
    """The order carries no owner name to confirm a deletion against."""


class ConfirmationNameRequired(GuardRejected):
    """The operator submitted the deletion without typing a name."""


class OwnerNameMismatch(GuardRejected):
    """The typed name does not match the order owner's name."""


class ConfirmationClosed(GuardRejected):
    """The deletion confirmation was already closed."""
