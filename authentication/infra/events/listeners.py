import logging

from django.db import transaction

from authentication.domain import events
from authentication.infra.observability.metrics import (
    login_failed,
    login_total,
    seller_applications_total,
    seller_transitions_total,
)

logger = logging.getLogger(__name__)


def register_authentication_listeners():
    """
    Register all event listeners for authentication context.
    Called when Django app starts.
    """
    events.user_login_successful.connect(record_login_success, dispatch_uid="auth.record_login_success")
    events.user_login_failed.connect(record_login_failure, dispatch_uid="auth.record_login_failure")
    events.seller_application_submitted.connect(count_seller_application, dispatch_uid="auth.count_application")
    events.seller_status_changed.connect(handle_seller_status_changed, dispatch_uid="auth.seller_status_changed")

    logger.info("Authentication event listeners registered")


def record_login_success(sender, event, **kwargs):
    from authentication.models import LoginEvent

    LoginEvent.objects.create(
        user=event.user,
        email=event.email,
        success=True,
        ip_address=event.ip_address,
        user_agent=event.user_agent[:255],
    )
    login_total.labels(status="success").inc()


def record_login_failure(sender, event, **kwargs):
    from authentication.models import LoginEvent

    LoginEvent.objects.create(
        user=event.user,
        email=event.email,
        success=False,
        failure_reason=event.reason,
        ip_address=event.ip_address,
        user_agent=event.user_agent[:255],
    )
    login_total.labels(status="failed").inc()
    login_failed.labels(reason=event.reason).inc()


def count_seller_application(sender, seller, is_resubmission, **kwargs):
    seller_applications_total.labels(resubmission=str(is_resubmission).lower()).inc()
    logger.info(f"[LISTENER] Shopkeeper application from {seller.user_id}: {seller.shop_name}")


def handle_seller_status_changed(sender, event, **kwargs):
    """Count the transition and email the shopkeeper once the transaction commits."""
    from authentication.tasks.notification_tasks import send_seller_status_email_task

    seller_transitions_total.labels(from_status=event.old_status, to_status=event.new_status).inc()

    seller_id = event.seller.id
    new_status = event.new_status
    reason = event.reason
    transaction.on_commit(lambda: send_seller_status_email_task.delay(seller_id, new_status, reason))
    logger.info(f"[LISTENER] Seller {seller_id} moved {event.old_status} -> {new_status}")
