from .auth_views import LoginAPIView, MeView, RegisterAPIView
from .profile_views import LoginHistoryView, ProfileUpdateView
from .seller_views import BecomeShopkeeperView, SellerAdminViewSet, SellerStatusView


__all__ = [
    "LoginAPIView",
    "RegisterAPIView",
    "MeView",
    "ProfileUpdateView",
    "LoginHistoryView",
    "BecomeShopkeeperView",
    "SellerStatusView",
    "SellerAdminViewSet",
]
