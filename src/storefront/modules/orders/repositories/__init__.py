"""Order repositories package."""

from storefront.modules.orders.repositories.http_repository import OrderHttpRepository
from storefront.modules.orders.repositories.interfaces import IOrderRepository

__all__ = ["IOrderRepository", "OrderHttpRepository"]
