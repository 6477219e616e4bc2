"""
Signal Handlers for Authentication Events.

Audit logging receivers for the domain events. Side effects with state (login
history rows, metrics, emails) live in ``authentication.infra.events.listeners``.

Imported from apps.py ready().
"""

import logging

from django.dispatch import receiver

from utils.logging_utils import mask_value

from .domain.events import (
    profile_updated,
    seller_application_submitted,
    seller_status_changed,
    user_login_failed,
    user_login_successful,
    user_registered,
)


logger = logging.getLogger(__name__)


# ===== Authentication Event Handlers =====


@receiver(user_registered)
def handle_user_registered(sender, user, ip_address=None, **kwargs):
    logger.info(f"[SIGNAL] User registered: {mask_value(user.email)} from IP {ip_address or 'unknown'}")


@receiver(user_login_successful)
def handle_user_login_successful(sender, event, **kwargs):
    logger.info(f"[SIGNAL] Login successful: {mask_value(event.email)}")


@receiver(user_login_failed)
def handle_user_login_failed(sender, event, **kwargs):
    logger.warning(
        f"[SIGNAL] Login failed: {mask_value(event.email)} - {event.reason} from IP {event.ip_address or 'unknown'}"
    )


# ===== Seller Event Handlers =====


@receiver(seller_application_submitted)
def handle_seller_application_submitted(sender, seller, is_resubmission, **kwargs):
    logger.info(
        f"[SIGNAL] Shop {'resubmitted' if is_resubmission else 'submitted'}: {seller.shop_name} (seller={seller.id})"
    )


@receiver(seller_status_changed)
def handle_seller_status_changed(sender, event, **kwargs):
    logger.info(
        f"[SIGNAL] Seller {event.seller.id} {event.old_status} -> {event.new_status} "
        f"(admin={getattr(event.admin_user, 'id', None)})"
    )


# ===== Profile Event Handlers =====


@receiver(profile_updated)
def handle_profile_updated(sender, user, updated_fields, **kwargs):
    logger.info(f"[SIGNAL] Profile updated for user {user.id}: {', '.join(updated_fields)}")
