"""
SellerService - Shopkeeper Onboarding and Moderation.

Handles the become-shopkeeper form, status queries and the admin moderation
transitions. Every status change goes through ``Seller.TRANSITIONS`` so the
admin action endpoints and the direct PATCH endpoint behave identically.
"""

import logging
from typing import Any, Dict, Optional

from django.db import transaction
from django.utils import timezone

from authentication.domain.events import EventDispatcher
from authentication.models import Seller, UserRole
from utils.rbac import ROLE_SHOPKEEPER, invalidate_role_cache

from .results import Result


logger = logging.getLogger(__name__)

SELLER_FORM_FIELDS = (
    "shop_name",
    "business_type",
    "years_in_business",
    "owner_name",
    "phone_number",
    "alternate_phone",
    "whatsapp_number",
    "email",
    "address",
    "city",
    "state",
    "country",
    "pincode",
    "instagram_url",
    "website_url",
)


class SellerService:
    """
    Seller service encapsulating the shopkeeper workflow.

    Handles application submission, status queries and admin transitions.
    """

    @transaction.atomic
    def submit_application(self, user, application_data: Dict[str, Any]) -> Result:
        """
        Create a seller row or resubmit a rejected one.

        Business Logic:
        1. No row: create it as pending
        2. Rejected row: move it back to pending and clear the review data
        3. Pending, approved or blocked row: refuse
        4. Grant the shopkeeper role row

        Args:
            user: CustomUser instance
            application_data: Validated form data (see SellerApplicationSerializer)

        Returns:
            Result with seller in data["seller"]
        """
        values = {key: application_data[key] for key in SELLER_FORM_FIELDS if key in application_data}

        existing = Seller.objects.select_for_update().filter(user=user).first()

        if existing is not None and existing.status != Seller.STATUS_REJECTED:
            return Result(
                success=False,
                message=f"You already have a shop registered (status: {existing.status}).",
                error="seller_already_exists",
            )

        is_resubmission = existing is not None
        if is_resubmission:
            seller = existing
            for key, value in values.items():
                setattr(seller, key, value)
            seller.status = Seller.STATUS_PENDING
            seller.rejection_reason = ""
            seller.reviewed_at = None
            seller.reviewed_by = None
            seller.save()
            logger.info(f"Seller {seller.id} resubmitted by user {user.id}")
        else:
            seller = Seller.objects.create(user=user, status=Seller.STATUS_PENDING, **values)
            logger.info(f"Seller {seller.id} created for user {user.id}")

        UserRole.objects.get_or_create(user=user, role=ROLE_SHOPKEEPER)
        invalidate_role_cache(user)

        EventDispatcher.dispatch_seller_application_submitted(seller=seller, is_resubmission=is_resubmission)

        return Result(
            success=True,
            message="Your shop has been submitted for review.",
            data={"seller": seller, "is_resubmission": is_resubmission},
        )

    def get_status(self, user) -> Dict[str, Any]:
        seller = Seller.objects.filter(user=user).first()
        if seller is None:
            return {
                "has_application": False,
                "status": None,
                "rejection_reason": "",
                "shop_name": "",
                "submitted_at": None,
            }
        return {
            "has_application": True,
            "status": seller.status,
            "rejection_reason": seller.rejection_reason,
            "shop_name": seller.shop_name,
            "submitted_at": seller.created_at,
        }

    def get_seller(self, seller_id) -> Optional[Seller]:
        return Seller.objects.select_related("user", "user__profile", "reviewed_by").filter(id=seller_id).first()

    # ===== Admin moderation =====

    def approve(self, seller_id, admin_user) -> Result:
        return self.set_status(seller_id, Seller.STATUS_APPROVED, admin_user)

    def reject(self, seller_id, admin_user, reason: str = "") -> Result:
        return self.set_status(seller_id, Seller.STATUS_REJECTED, admin_user, reason=reason)

    def block(self, seller_id, admin_user, reason: str = "") -> Result:
        return self.set_status(seller_id, Seller.STATUS_BLOCKED, admin_user, reason=reason)

    def unblock(self, seller_id, admin_user) -> Result:
        return self.set_status(
            seller_id, Seller.STATUS_APPROVED, admin_user, expected_from={Seller.STATUS_BLOCKED}
        )

    @transaction.atomic
    def set_status(
        self,
        seller_id,
        new_status: str,
        admin_user,
        reason: str = "",
        expected_from: Optional[set] = None,
    ) -> Result:
        """
        Apply a moderation transition under a row lock.

        Args:
            seller_id: Seller primary key
            new_status: Target status
            admin_user: Reviewer recorded on the row
            reason: Stored as rejection_reason on reject
            expected_from: Optional extra restriction on the current status

        Returns:
            Result with seller in data["seller"], or error
            seller_not_found / invalid_transition
        """
        seller = Seller.objects.select_for_update().filter(id=seller_id).first()
        if seller is None:
            return Result(success=False, message=f"Seller {seller_id} does not exist.", error="seller_not_found")

        old_status = seller.status
        allowed = seller.can_transition_to(new_status)
        if expected_from is not None and old_status not in expected_from:
            allowed = False

        if not allowed:
            logger.warning(f"Rejected seller transition {old_status} -> {new_status} for seller {seller.id}")
            return Result(
                success=False,
                message=f"Cannot change seller status from {old_status} to {new_status}.",
                error="invalid_transition",
            )

        seller.status = new_status
        seller.reviewed_by = admin_user
        seller.reviewed_at = timezone.now()
        if new_status == Seller.STATUS_REJECTED:
            seller.rejection_reason = reason or ""
        elif new_status == Seller.STATUS_APPROVED:
            seller.rejection_reason = ""
        seller.save(update_fields=["status", "reviewed_by", "reviewed_at", "rejection_reason", "updated_at"])

        logger.info(
            f"Seller {seller.id} moved {old_status} -> {new_status} by admin {getattr(admin_user, 'id', None)}"
        )
        EventDispatcher.dispatch_seller_status_changed(
            seller=seller, old_status=old_status, admin_user=admin_user, reason=reason
        )

        return Result(
            success=True,
            message=f"Seller status changed to {new_status}.",
            data={"seller": seller, "old_status": old_status},
        )
