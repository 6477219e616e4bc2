from django.conf import settings
from django.core.validators import RegexValidator
from django.db import models


phone_validator = RegexValidator(r"^\d{10}$", "Enter a valid 10-digit phone number.")
pincode_validator = RegexValidator(r"^\d{6}$", "Enter a valid 6-digit pincode.")


class Seller(models.Model):
    """Shopkeeper account and its moderation status."""

    STATUS_PENDING = "pending"
    STATUS_APPROVED = "approved"
    STATUS_REJECTED = "rejected"
    STATUS_BLOCKED = "blocked"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending Review"),
        (STATUS_APPROVED, "Approved"),
        (STATUS_REJECTED, "Rejected"),
        (STATUS_BLOCKED, "Blocked"),
    ]

    # Admin moderation: current status -> allowed next statuses
    TRANSITIONS = {
        STATUS_PENDING: {STATUS_APPROVED, STATUS_REJECTED},
        STATUS_APPROVED: {STATUS_BLOCKED},
        STATUS_BLOCKED: {STATUS_APPROVED},
        STATUS_REJECTED: set(),
    }

    BUSINESS_TYPE_CHOICES = [
        ("Individual", "Individual"),
        ("Partnership", "Partnership"),
        ("Private Limited", "Private Limited"),
        ("Proprietorship", "Proprietorship"),
        ("LLP", "LLP"),
        ("Other", "Other"),
    ]

    YEARS_IN_BUSINESS_CHOICES = [
        ("Less than 1 year", "Less than 1 year"),
        ("1-3 years", "1-3 years"),
        ("3-5 years", "3-5 years"),
        ("5-10 years", "5-10 years"),
        ("More than 10 years", "More than 10 years"),
    ]

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="seller")

    # Shop
    shop_name = models.CharField(max_length=200)
    business_type = models.CharField(max_length=30, choices=BUSINESS_TYPE_CHOICES)
    years_in_business = models.CharField(max_length=30, choices=YEARS_IN_BUSINESS_CHOICES, blank=True)

    # Owner / contact
    owner_name = models.CharField(max_length=150)
    phone_number = models.CharField(max_length=10, validators=[phone_validator])
    alternate_phone = models.CharField(max_length=10, blank=True, validators=[phone_validator])
    whatsapp_number = models.CharField(max_length=10, blank=True, validators=[phone_validator])
    email = models.EmailField(blank=True)

    # Address
    address = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=100)
    country = models.CharField(max_length=100, default="India")
    pincode = models.CharField(max_length=6, validators=[pincode_validator])

    # Online presence
    instagram_url = models.URLField(blank=True)
    website_url = models.URLField(blank=True)

    # Moderation
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    rejection_reason = models.TextField(blank=True)
    reviewed_at = models.DateTimeField(null=True, blank=True)
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reviewed_sellers",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "authentication"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "-created_at"], name="auth_seller_status_idx"),
            models.Index(fields=["city"], name="auth_seller_city_idx"),
        ]

    def __str__(self):
        return f"{self.shop_name} ({self.status})"

    @property
    def is_approved(self) -> bool:
        return self.status == self.STATUS_APPROVED

    @property
    def full_address(self) -> str:
        """Pickup address snapshot copied onto orders."""
        parts = [self.address, self.city, self.state, self.pincode]
        return ", ".join(part for part in parts if part)

    def can_transition_to(self, new_status: str) -> bool:
        return new_status in self.TRANSITIONS.get(self.status, set())
