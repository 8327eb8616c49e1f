"""Generic remote repository interface (Dependency Inversion Principle).

Provides ``ISnapshotRepository[T]``, the base abstract class that the
cart and order repository interfaces extend.  Service-layer code depends
on this abstraction, never on the HTTP transport directly.

The server owns every entity; the client only ever reads a whole
collection at once, which is why the sole shared read is ``fetch_all``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


class ISnapshotRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the entity managed by the repository
    (e.g. ``CartLine``, ``Order``).
    """

    @abstractmethod
    async def fetch_all(self) -> Sequence[T]:
        """Fetch the complete, server-authoritative collection.

        Idempotent and safe to call repeatedly.
        """
