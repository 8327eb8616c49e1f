"""Cart repositories package."""

from storefront.modules.cart.repositories.http_repository import CartHttpRepository
from storefront.modules.cart.repositories.interfaces import ICartRepository

__all__ = ["ICartRepository", "CartHttpRepository"]
