from __future__ import annotations

from typing import Iterable

from rest_framework.permissions import BasePermission

from utils.rbac import ROLE_ADMIN, has_any_role, is_approved_seller


class RoleRequired(BasePermission):
    """Base permission that enforces required roles after DB re-validation."""

    required_roles: Iterable[str] = ()

    def has_permission(self, request, view) -> bool:
        user = getattr(request, "user", None)
        if user is None or not getattr(user, "is_authenticated", False):
            return False

        required = tuple(self.required_roles)
        if not required:
            return True
        return has_any_role(user, required)

    def has_object_permission(self, request, view, obj) -> bool:
        return self.has_permission(request, view)


class AdminRequired(RoleRequired):
    required_roles = (ROLE_ADMIN,)


class ApprovedSellerRequired(BasePermission):
    """Selling features need an approved seller row, not just the shopkeeper role."""

    message = "An approved shop is required for this action."

    def has_permission(self, request, view) -> bool:
        user = getattr(request, "user", None)
        if user is None or not getattr(user, "is_authenticated", False):
            return False
        return is_approved_seller(user)
