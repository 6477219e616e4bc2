"""Account, profile and shopkeeper onboarding rules, kept out of the views."""

from .auth_service import AuthService
from .profile_service import ProfileService
from .results import AuthResult, Result
from .seller_service import SellerService


__all__ = ["AuthResult", "AuthService", "ProfileService", "Result", "SellerService"]
