"""
Celery Tasks for order notifications.

Emails go through the infrastructure email service (SMTP in production, mock in tests).
"""

import logging

from celery import shared_task
from django.conf import settings

from infrastructure.container import container
from infrastructure.email import EmailCategory, EmailMessage


logger = logging.getLogger(__name__)


def _send(order_id: str, category: str, subject: str, body: str, recipient: str) -> bool:
    try:
        sent = container.email().send(EmailMessage(subject, body, [recipient], category=category))
    except Exception as e:
        logger.error(f"Failed to send order email for order {order_id}: {e}", exc_info=True)
        return False
    logger.info(f"Order email '{subject}' sent={sent} for order {order_id}")
    return sent


@shared_task(name="send_order_reserved_email", queue="marketplace_tasks")
def send_order_reserved_email_task(order_id: str) -> bool:
    """Tell the shopkeeper a buyer reserved one of their products."""
    from marketplace.models import Order

    order = Order.objects.select_related("product", "seller__user", "buyer__profile").filter(id=order_id).first()
    if order is None:
        logger.warning(f"Order {order_id} vanished before reservation email could be sent")
        return False

    body = (
        f"Hi {order.seller.owner_name},\n\n"
        f"{order.buyer.display_name} reserved \"{order.product.title}\".\n"
        f"Ask for the pickup code when they visit {order.shop_name}.\n\n"
        f"Manage your orders: {settings.FRONTEND_URL}/seller/orders\n"
    )
    recipient = order.seller.email or order.seller.user.email
    return _send(order_id, EmailCategory.ORDER_RESERVED, "New reservation on Sellora", body, recipient)


@shared_task(name="send_order_ready_email", queue="marketplace_tasks")
def send_order_ready_email_task(order_id: str) -> bool:
    """Tell the buyer their order is ready for pickup."""
    from marketplace.models import Order

    order = Order.objects.select_related("product", "buyer").filter(id=order_id).first()
    if order is None:
        logger.warning(f"Order {order_id} vanished before ready email could be sent")
        return False

    body = (
        f"Your order for \"{order.product.title}\" is ready for pickup at {order.shop_name}.\n"
        f"Address: {order.shop_address}\n"
        f"Show your pickup code at the counter.\n"
    )
    return _send(order_id, EmailCategory.ORDER_READY, "Your Sellora order is ready", body, order.buyer.email)
