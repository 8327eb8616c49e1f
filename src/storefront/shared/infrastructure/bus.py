"""In-memory event bus implementation.

The UI layer subscribes here to learn that a cache was replaced and
must be re-rendered.
"""

from __future__ import annotations

from typing import Dict, List, Type

from storefront.shared.domain.bus import IEventBus, IEventHandler
from storefront.shared.domain.events import DomainEvent


class InMemoryEventBus(IEventBus):
    """Simple in-process event bus."""

    def __init__(self) -> None:
        self._handlers: Dict[Type[DomainEvent], List[IEventHandler]] = {}

    def subscribe(self, event_class: Type[DomainEvent], handler: IEventHandler) -> None:
        handlers = self._handlers.setdefault(event_class, [])
        if handler not in handlers:
            handlers.append(handler)

    def unsubscribe(self, event_class: Type[DomainEvent], handler: IEventHandler) -> None:
        handlers = self._handlers.get(event_class, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event: DomainEvent) -> None:
        for handler in list(self._handlers.get(type(event), [])):
            handler.handle(event)


# Global bus instance (singleton)

event_bus = InMemoryEventBus()
