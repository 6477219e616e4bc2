from rest_framework_simplejwt.serializers import TokenObtainPairSerializer
from rest_framework_simplejwt.tokens import RefreshToken

from utils.rbac import ROLE_ADMIN, ROLE_SHOPKEEPER, build_role_set, pick_highest_role


def add_role_claims(token, user):
    """Role claims for the frontend; the API itself re-checks roles in the database."""
    roles = build_role_set(user)
    token["role"] = pick_highest_role(roles)
    token["is_shopkeeper"] = ROLE_SHOPKEEPER in roles
    token["is_admin"] = ROLE_ADMIN in roles
    token["full_name"] = user.display_name if user.display_name != user.email else ""
    return token


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    """Custom JWT serializer that includes user role in token"""

    @classmethod
    def get_token(cls, user):
        return add_role_claims(super().get_token(user), user)


class CustomRefreshToken(RefreshToken):
    """Custom refresh token that includes user role"""

    @classmethod
    def for_user(cls, user):
        """Create refresh token with custom claims"""
        return add_role_claims(super().for_user(user), user)
