"""Cart domain exceptions.

Raised by ``CartService`` before any network call when a mutation is
invalid for the cached snapshot.
"""

from __future__ import annotations

from storefront.modules.core.exceptions import GuardRejected


class CartLineNotFound(GuardRejected):
    """The cart line is not present in the cached snapshot."""


class ProductAlreadyInCart(GuardRejected):
    """The product already has a line; use increment instead."""


class InvalidQuantity(GuardRejected):
    """A displayed quantity below 1 was passed to a mutation."""
