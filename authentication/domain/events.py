"""
Domain Events for Authentication.

Domain events represent important business occurrences that other parts of the
system might want to react to (notifications, metrics, audit logging).

Events are dispatched using Django signals. Receivers are connected in
``authentication.signals`` and ``authentication.infra.events.listeners``.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from django.dispatch import Signal


logger = logging.getLogger(__name__)

# ===== Event Signals =====

# Authentication Events
user_registered = Signal()  # sender=user class, user, ip_address
user_login_successful = Signal()  # sender=user class, user, ip_address, user_agent
user_login_failed = Signal()  # email, reason, ip_address, user_agent

# Seller Events
seller_application_submitted = Signal()  # sender=Seller, seller, is_resubmission
seller_status_changed = Signal()  # sender=Seller, seller, old_status, new_status, admin_user, reason

# Profile Events
profile_updated = Signal()  # sender=user class, user, updated_fields


# ===== Event Data Classes =====


@dataclass
class UserLoginEvent:
    """Event data for a login attempt."""

    email: str
    user: Any = None  # CustomUser instance when known
    ip_address: Optional[str] = None
    user_agent: str = ""
    reason: str = ""


@dataclass
class SellerStatusChangedEvent:
    """Event data for a moderation transition."""

    seller: Any  # Seller instance
    old_status: str
    new_status: str
    admin_user: Any = None
    reason: str = ""


# ===== Event Dispatcher Helper =====


def _send(signal: Signal, event_name: str, **kwargs):
    """Send to every receiver; a failing receiver is logged and never breaks the caller."""
    for receiver, response in signal.send_robust(**kwargs):
        if isinstance(response, Exception):
            logger.error(f"Receiver {receiver} failed for {event_name}: {response}", exc_info=response)


class EventDispatcher:
    """
    Helper class for dispatching domain events.

    Centralizes event dispatching logic and provides logging.
    """

    @staticmethod
    def dispatch_user_registered(user, ip_address: Optional[str] = None):
        logger.info(f"[EVENT] User registered: {user.email}")
        _send(user_registered, "user.registered", sender=user.__class__, user=user, ip_address=ip_address)

    @staticmethod
    def dispatch_user_login_successful(user, ip_address: Optional[str] = None, user_agent: str = ""):
        logger.info(f"[EVENT] User login successful: {user.email}")
        _send(
            user_login_successful,
            "user.login_successful",
            sender=user.__class__,
            event=UserLoginEvent(email=user.email, user=user, ip_address=ip_address, user_agent=user_agent),
        )

    @staticmethod
    def dispatch_user_login_failed(
        email: str, reason: str, ip_address: Optional[str] = None, user_agent: str = "", user=None
    ):
        logger.warning(f"[EVENT] Login failed: {email} - {reason}")
        _send(
            user_login_failed,
            "user.login_failed",
            sender=None,
            event=UserLoginEvent(email=email, user=user, ip_address=ip_address, user_agent=user_agent, reason=reason),
        )

    @staticmethod
    def dispatch_seller_application_submitted(seller, is_resubmission: bool):
        logger.info(
            f"[EVENT] Seller application submitted: {seller.shop_name} "
            f"(user={seller.user_id}, resubmission={is_resubmission})"
        )
        _send(
            seller_application_submitted,
            "seller.application_submitted",
            sender=seller.__class__,
            seller=seller,
            is_resubmission=is_resubmission,
        )

    @staticmethod
    def dispatch_seller_status_changed(seller, old_status: str, admin_user=None, reason: str = ""):
        logger.info(
            f"[EVENT] Seller {seller.id} status {old_status} -> {seller.status} "
            f"by admin {getattr(admin_user, 'id', None)}"
        )
        _send(
            seller_status_changed,
            "seller.status_changed",
            sender=seller.__class__,
            event=SellerStatusChangedEvent(
                seller=seller,
                old_status=old_status,
                new_status=seller.status,
                admin_user=admin_user,
                reason=reason,
            ),
        )

    @staticmethod
    def dispatch_profile_updated(user, updated_fields: list):
        logger.info(f"[EVENT] Profile updated: {user.email} fields={updated_fields}")
        _send(profile_updated, "profile.updated", sender=user.__class__, user=user, updated_fields=updated_fields)
