"""
ProfileService - Profile Management Business Logic.
"""

import logging
from typing import Any, Dict

from authentication.domain.events import EventDispatcher
from authentication.models import LoginEvent

from .results import Result


logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("full_name", "phone_number", "bio", "avatar_url")

LOGIN_HISTORY_LIMIT = 50


class ProfileService:
    """Profile updates and login history for the current user."""

    def update_profile(self, user, profile_data: Dict[str, Any]) -> Result:
        """
        Update the editable profile fields.

        Unknown keys are ignored; an empty update succeeds without writing.
        """
        profile = user.profile
        updated_fields = []
        for key in EDITABLE_FIELDS:
            if key in profile_data and getattr(profile, key) != profile_data[key]:
                setattr(profile, key, profile_data[key])
                updated_fields.append(key)

        if updated_fields:
            profile.save(update_fields=updated_fields + ["updated_at"])
            EventDispatcher.dispatch_profile_updated(user, updated_fields)
            logger.info(f"Profile updated for user {user.id}: {updated_fields}")

        return Result(
            success=True,
            message="Profile updated successfully" if updated_fields else "No changes",
            data={"profile": profile, "updated_fields": updated_fields},
        )

    def login_history(self, user, limit: int = LOGIN_HISTORY_LIMIT):
        return list(LoginEvent.objects.filter(user=user).order_by("-created_at")[:limit])
