from .profile import Profile
from .seller import Seller
from .user import CustomUser, LoginEvent, UserRole

__all__ = [
    "CustomUser",
    "Profile",
    "UserRole",
    "LoginEvent",
    "Seller",
]
