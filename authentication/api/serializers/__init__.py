from .auth_serializers import LoginSerializer, MeSerializer, UserRegistrationSerializer, UserSerializer
from .profile_serializers import LoginEventSerializer, ProfileSerializer, ProfileUpdateSerializer
from .seller_serializers import (
    SellerActionSerializer,
    SellerAdminDetailSerializer,
    SellerApplicationSerializer,
    SellerSerializer,
    SellerStatusSerializer,
    SellerStatusUpdateSerializer,
)


__all__ = [
    "UserSerializer",
    "MeSerializer",
    "LoginSerializer",
    "UserRegistrationSerializer",
    "ProfileSerializer",
    "ProfileUpdateSerializer",
    "LoginEventSerializer",
    "SellerApplicationSerializer",
    "SellerSerializer",
    "SellerAdminDetailSerializer",
    "SellerStatusSerializer",
    "SellerActionSerializer",
    "SellerStatusUpdateSerializer",
]
