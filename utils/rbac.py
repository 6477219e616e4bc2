import logging
from typing import Iterable, Optional, Set

from django.conf import settings
from django.core.exceptions import PermissionDenied

# Canonical role names
ROLE_USER = "user"
ROLE_SHOPKEEPER = "shopkeeper"
ROLE_ADMIN = "admin"

# Highest first
ROLE_PRIORITY = (ROLE_ADMIN, ROLE_SHOPKEEPER, ROLE_USER)

logger = logging.getLogger(__name__)


def is_admin_email(email: Optional[str]) -> bool:
    if not email:
        return False
    return email.strip().lower() in getattr(settings, "SELLORA_ADMIN_EMAILS", [])


def pick_highest_role(roles: Iterable[str]) -> str:
    """Return the most privileged role of ``roles`` (``user`` when empty)."""
    role_set = set(roles)
    for role in ROLE_PRIORITY:
        if role in role_set:
            return role
    return ROLE_USER


def get_seller(user):
    """Fetch the seller row of ``user`` from the database, or None."""
    if not getattr(user, "is_authenticated", False):
        return None
    from authentication.models import Seller

    return Seller.objects.filter(user_id=user.pk).first()


def build_role_set(user) -> Set[str]:
    """Compute the full role set for the given user, verified against the database.

    Sources: role rows, an existing seller row (accounts that predate role rows),
    superuser/staff flags and the configured admin emails.
    """
    cached = getattr(user, "_cached_role_set", None)
    if cached is not None:
        return cached

    roles: Set[str] = set()
    if not getattr(user, "is_authenticated", False):
        return roles

    from authentication.models import Seller, UserRole

    roles.add(ROLE_USER)
    roles.update(UserRole.objects.filter(user_id=user.pk).values_list("role", flat=True))

    if ROLE_SHOPKEEPER not in roles and Seller.objects.filter(user_id=user.pk).exists():
        roles.add(ROLE_SHOPKEEPER)

    if getattr(user, "is_superuser", False) or getattr(user, "is_staff", False) or is_admin_email(user.email):
        roles.add(ROLE_ADMIN)

    setattr(user, "_cached_role_set", roles)
    return roles


def invalidate_role_cache(user) -> None:
    if hasattr(user, "_cached_role_set"):
        delattr(user, "_cached_role_set")


def highest_role(user) -> str:
    return pick_highest_role(build_role_set(user))


def has_role(user, role: str) -> bool:
    return role in build_role_set(user)


def has_any_role(user, roles: Iterable[str]) -> bool:
    return any(has_role(user, r) for r in roles)


def is_admin(user) -> bool:
    """Consistent admin check across the codebase."""
    return has_role(user, ROLE_ADMIN)


def is_shopkeeper(user) -> bool:
    """True when the user holds the shopkeeper role, whatever the seller status."""
    return has_role(user, ROLE_SHOPKEEPER)


def is_approved_seller(user) -> bool:
    """Selling capabilities require an approved seller row."""
    seller = get_seller(user)
    return bool(seller and seller.is_approved)


def require_role(user, roles: Iterable[str]):
    """Raise PermissionDenied unless the user has one of the roles."""
    roles = list(roles)
    if not has_any_role(user, roles):
        logger.warning(
            "RBAC denial: user_id=%s required=%s",
            getattr(user, "id", None),
            roles,
        )
        raise PermissionDenied("Insufficient role to access this resource.")


def require_admin(user):
    require_role(user, [ROLE_ADMIN])
