from authentication.domain.models.profile import Profile
from authentication.domain.models.seller import Seller
from authentication.domain.models.user import CustomUser, LoginEvent, UserRole


__all__ = [
    "CustomUser",
    "Profile",
    "UserRole",
    "LoginEvent",
    "Seller",
]
