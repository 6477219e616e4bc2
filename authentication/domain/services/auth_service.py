"""
AuthService - Core Authentication Business Logic.

Keeps registration and login rules out of the views so they can be tested
without HTTP. Coordinates between domain models, JWT issuing and events.
"""

import logging
import re
import time
from typing import Optional

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from django.db import transaction

from authentication.api.serializers.jwt_serializers import CustomRefreshToken
from authentication.domain.events import EventDispatcher
from authentication.infra.observability.metrics import login_duration, registration_total
from authentication.models import UserRole
from utils.rbac import ROLE_USER

from .results import AuthResult


User = get_user_model()
logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service encapsulating registration and login.

    Tokens carry role claims for the frontend; permissions never trust them and
    re-read roles from the database (see ``utils.rbac``).
    """

    def register(self, email: str, password: str, full_name: str = "", request=None) -> AuthResult:
        """
        Create an account and log it in.

        Business Logic:
        1. Reject duplicate emails (case-insensitive)
        2. Run Django password validation
        3. Create user, fill the auto-created profile, write the baseline role row
        4. Dispatch user_registered and issue tokens

        Returns:
            AuthResult with tokens on success, or an error code
        """
        email = (email or "").strip().lower()
        full_name = (full_name or "").strip()

        if User.objects.filter(email__iexact=email).exists():
            registration_total.labels(status="duplicate").inc()
            return AuthResult.failed("email_taken", "An account with this email already exists.", "email")

        try:
            validate_password(password, user=User(email=email))
        except ValidationError as e:
            registration_total.labels(status="invalid_password").inc()
            return AuthResult(
                success=False,
                error="invalid_password",
                errors={"password": list(e.messages)},
                message="Password does not meet the requirements.",
            )

        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    username=self._unique_username(email),
                    email=email,
                    password=password,
                )
                profile = user.profile
                profile.full_name = full_name
                profile.save(update_fields=["full_name", "updated_at"])
                UserRole.objects.get_or_create(user=user, role=ROLE_USER)
        except Exception as e:
            logger.exception(f"Registration error for email {email}: {e}")
            registration_total.labels(status="error").inc()
            return AuthResult.failed("internal_error", "Registration failed. Please try again.")

        registration_total.labels(status="success").inc()
        EventDispatcher.dispatch_user_registered(user, ip_address=self.get_client_ip(request))

        return AuthResult.authenticated(user, CustomRefreshToken.for_user(user), "Registration successful")

    def login(self, email: str, password: str, request=None) -> AuthResult:
        """
        Authenticate user with email/password.

        Unknown emails and wrong passwords share one error code so the response
        does not reveal which accounts exist. Every attempt is recorded as a
        LoginEvent by the login listeners.
        """
        start = time.time()
        email = (email or "").strip().lower()
        ip_address = self.get_client_ip(request)
        user_agent = self.get_user_agent(request)

        try:
            if not email or not password:
                return AuthResult.failed("invalid_credentials", "Email and password are required.")

            user = User.objects.filter(email__iexact=email).first()
            if user is None:
                EventDispatcher.dispatch_user_login_failed(
                    email=email, reason="user_not_found", ip_address=ip_address, user_agent=user_agent
                )
                return AuthResult.failed("invalid_credentials", "Invalid email or password.")

            if not user.check_password(password):
                EventDispatcher.dispatch_user_login_failed(
                    email=email, reason="wrong_password", ip_address=ip_address, user_agent=user_agent, user=user
                )
                return AuthResult.failed("invalid_credentials", "Invalid email or password.")

            if not user.is_active:
                EventDispatcher.dispatch_user_login_failed(
                    email=email, reason="inactive", ip_address=ip_address, user_agent=user_agent, user=user
                )
                return AuthResult.failed("account_inactive", "This account has been disabled.")

            EventDispatcher.dispatch_user_login_successful(user=user, ip_address=ip_address, user_agent=user_agent)
            return AuthResult.authenticated(user, CustomRefreshToken.for_user(user), "Login successful")
        finally:
            login_duration.observe(time.time() - start)

    def _unique_username(self, email: str) -> str:
        base = re.sub(r"[^\w.+-]", "", email.split("@")[0])[:140] or "user"
        username = base
        suffix = 1
        while User.objects.filter(username=username).exists():
            suffix += 1
            username = f"{base}{suffix}"
        return username

    @staticmethod
    def get_client_ip(request) -> Optional[str]:
        """Helper to extract IP from request."""
        if not request:
            return None
        x_forwarded_for = request.META.get("HTTP_X_FORWARDED_FOR")
        if x_forwarded_for:
            return x_forwarded_for.split(",")[0].strip()
        return request.META.get("REMOTE_ADDR")

    @staticmethod
    def get_user_agent(request) -> str:
        if not request:
            return ""
        return request.META.get("HTTP_USER_AGENT", "")[:255]
