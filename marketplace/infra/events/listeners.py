import logging

from django.db import transaction

from marketplace.domain.events import marketplace_event
from marketplace.infra.observability.metrics import (
    order_transitions_total,
    orders_reserved_total,
    products_created_total,
)


logger = logging.getLogger(__name__)


def handle_product_created(event_data):
    """Handle product.created event."""
    payload = event_data.get("payload", {})
    products_created_total.labels(category=payload.get("category", "Other")).inc()
    logger.info(f"[Marketplace Listener] Product created: {payload.get('product_id')}")


def handle_order_reserved(event_data):
    """Count the reservation and notify the shopkeeper after commit."""
    from marketplace.tasks import send_order_reserved_email_task

    payload = event_data.get("payload", {})
    order_id = payload.get("order_id")
    orders_reserved_total.inc()
    transaction.on_commit(lambda: send_order_reserved_email_task.delay(order_id))
    logger.info(f"[Marketplace Listener] Order reserved: {order_id}")


def handle_order_status_changed(event_data):
    """Count the transition; buyers are emailed when their order is ready."""
    from marketplace.tasks import send_order_ready_email_task

    payload = event_data.get("payload", {})
    order_id = payload.get("order_id")
    new_status = payload.get("new_status")
    order_transitions_total.labels(from_status=payload.get("old_status"), to_status=new_status).inc()
    if new_status == "ready":
        transaction.on_commit(lambda: send_order_ready_email_task.delay(order_id))
    logger.info(f"[Marketplace Listener] Order {order_id} -> {new_status}")


HANDLERS = {
    "product.created": handle_product_created,
    "order.reserved": handle_order_reserved,
    "order.status_changed": handle_order_status_changed,
}


def dispatch_marketplace_event(sender, event, **kwargs):
    handler = HANDLERS.get(event.event_type)
    if handler is None:
        logger.debug(f"No {event.aggregate} handler for {event.event_type}")
        return
    handler(event.to_dict())


def register_marketplace_listeners():
    """
    Register all event listeners for marketplace context.
    Called when Django app starts.
    """
    marketplace_event.connect(dispatch_marketplace_event, dispatch_uid="marketplace.dispatch_event")
    logger.info("Marketplace event listeners registered")
