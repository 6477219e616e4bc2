"""
Marketplace domain events.

Services call ``publish(event)``; listeners registered in
``marketplace.infra.events.listeners`` receive ``event.to_dict()``.
A failing listener is logged and never breaks the publishing request.
"""

import logging

from django.dispatch import Signal

from .base import DomainEvent
from .catalog_events import ProductCreatedEvent
from .order_events import OrderReservedEvent, OrderStatusChangedEvent


logger = logging.getLogger(__name__)

marketplace_event = Signal()  # sender=event class, event=DomainEvent


def publish(event: DomainEvent):
    logger.info(f"[EVENT] {event.event_type} ({event.event_id}): {event.payload}")
    for receiver, response in marketplace_event.send_robust(sender=event.__class__, event=event):
        if isinstance(response, Exception):
            logger.error(f"Receiver {receiver} failed for {event.event_type}: {response}", exc_info=response)


__all__ = [
    "DomainEvent",
    "ProductCreatedEvent",
    "OrderReservedEvent",
    "OrderStatusChangedEvent",
    "marketplace_event",
    "publish",
]
