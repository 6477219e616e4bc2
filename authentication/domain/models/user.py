import uuid

from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.db import models


class CustomUser(AbstractUser):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    first_name = models.CharField(max_length=30, blank=True)
    last_name = models.CharField(max_length=30, blank=True)
    date_joined = models.DateTimeField(auto_now_add=True)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    class Meta:
        app_label = "authentication"

    @property
    def display_name(self) -> str:
        """Profile full name, falling back to the email address."""
        profile = getattr(self, "profile", None)
        if profile is not None and profile.full_name:
            return profile.full_name
        return self.email

    def __str__(self):
        return self.email


class UserRole(models.Model):
    """One row per granted role; a user's effective role is the highest one."""

    ROLE_CHOICES = [
        ("user", "User"),
        ("shopkeeper", "Shopkeeper"),
        ("admin", "Admin"),
    ]

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="role_rows")
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default="user")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = "authentication"
        constraints = [models.UniqueConstraint(fields=["user", "role"], name="unique_user_role")]

    def __str__(self):
        return f"{self.user_id}:{self.role}"


class LoginEvent(models.Model):
    """Login history entry (successful and failed attempts)."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="login_events",
    )
    email = models.EmailField()
    success = models.BooleanField(default=False)
    failure_reason = models.CharField(max_length=50, blank=True)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = "authentication"
        ordering = ["-created_at"]
        indexes = [models.Index(fields=["user", "-created_at"], name="auth_login_user_created_idx")]

    def __str__(self):
        outcome = "success" if self.success else f"failed ({self.failure_reason})"
        return f"{self.email} {outcome} at {self.created_at}"
