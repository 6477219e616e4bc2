"""
Outcomes returned by the authentication services.

Views turn failures into ``{"error", "detail"}`` bodies through
``authentication.api.views.common.error_response``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class AuthResult:
    """Login or registration outcome; tokens are set only on success."""

    success: bool
    user: Optional[Any] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    error: Optional[str] = None
    errors: Optional[Dict[str, List[str]]] = None
    message: str = ""

    @classmethod
    def failed(cls, error: str, message: str, field_name: str = None) -> "AuthResult":
        errors = {field_name: [message]} if field_name else None
        return cls(success=False, error=error, errors=errors, message=message)

    @classmethod
    def authenticated(cls, user, refresh, message: str) -> "AuthResult":
        return cls(
            success=True,
            user=user,
            access_token=str(refresh.access_token),
            refresh_token=str(refresh),
            message=message,
        )


@dataclass
class Result:
    """Outcome of seller and profile operations; ``data`` holds the affected objects."""

    success: bool
    message: str
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
