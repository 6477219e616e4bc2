"""Custom middleware helpers for the Sellora backend."""

from __future__ import annotations

from typing import Callable


class JWTCSRFBypassMiddleware:
    """Skip CSRF enforcement for stateless JWT authenticated requests.

    Django's ``CsrfViewMiddleware`` checks every mutating request, whether or
    not the client uses cookies. API clients authenticate with an
    ``Authorization: Bearer`` header, so those requests are marked exempt while
    session-based endpoints (the Django admin) stay protected.
    """

    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request):
        authorization = request.META.get("HTTP_AUTHORIZATION", "")
        if authorization.lower().startswith("bearer "):
            request._dont_enforce_csrf_checks = True  # type: ignore[attr-defined]
            request.META.setdefault("CSRF_SKIP_REASON", "jwt-bearer")
        return self.get_response(request)
