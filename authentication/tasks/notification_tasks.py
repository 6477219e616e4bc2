"""
Celery Tasks for shopkeeper notifications.

Emails go through the infrastructure email service (SMTP in production, mock in tests).
"""

import logging

from celery import shared_task
from django.conf import settings

from infrastructure.container import container
from infrastructure.email import EmailCategory, EmailMessage


logger = logging.getLogger(__name__)

STATUS_SUBJECTS = {
    "approved": "Your Sellora shop is approved",
    "rejected": "Your Sellora shop application was not approved",
    "blocked": "Your Sellora shop has been blocked",
}

STATUS_BODIES = {
    "approved": (
        "Hi {owner},\n\nGood news! {shop} is now live on Sellora. "
        "You can add products from your seller dashboard: {url}/seller\n"
    ),
    "rejected": (
        "Hi {owner},\n\nWe could not approve {shop} at this time.\n"
        "Reason: {reason}\n\nYou can update your details and apply again: {url}/become-seller\n"
    ),
    "blocked": (
        "Hi {owner},\n\n{shop} has been blocked by the Sellora team and its listings are hidden.\n"
        "Reply to this email if you believe this is a mistake.\n"
    ),
}


@shared_task(name="send_seller_status_email", queue="notification_tasks")
def send_seller_status_email_task(seller_id: int, status: str, reason: str = "") -> bool:
    """
    Email a shopkeeper after a moderation decision.

    Args:
        seller_id: Seller primary key
        status: The new seller status
        reason: Rejection reason (rejections only)

    Returns:
        True when an email was sent
    """
    from authentication.models import Seller

    if status not in STATUS_SUBJECTS:
        logger.debug(f"No notification for seller status '{status}'")
        return False

    try:
        seller = Seller.objects.select_related("user").get(id=seller_id)
    except Seller.DoesNotExist:
        logger.warning(f"Seller {seller_id} vanished before status email could be sent")
        return False

    recipient = seller.email or seller.user.email
    body = STATUS_BODIES[status].format(
        owner=seller.owner_name,
        shop=seller.shop_name,
        reason=reason or "Not specified",
        url=settings.FRONTEND_URL,
    )

    try:
        sent = container.email().send(
            EmailMessage(STATUS_SUBJECTS[status], body, [recipient], category=EmailCategory.SELLER_STATUS)
        )
    except Exception as e:
        logger.error(f"Failed to send seller status email for seller {seller_id}: {e}", exc_info=True)
        return False

    logger.info(f"Seller status email ({status}) sent={sent} for seller {seller_id}")
    return sent
