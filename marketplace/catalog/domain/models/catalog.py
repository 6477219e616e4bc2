import uuid

from django.core.validators import MinValueValidator
from django.db import models


class Product(models.Model):
    CATEGORY_CHOICES = [
        ("Electronics", "Electronics"),
        ("Fashion", "Fashion"),
        ("Home & Living", "Home & Living"),
        ("Vehicles", "Vehicles"),
        ("Services", "Services"),
        ("Other", "Other"),
    ]

    # Basic Information
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)

    # Seller and Category
    seller = models.ForeignKey("authentication.Seller", on_delete=models.CASCADE, related_name="products")
    category = models.CharField(max_length=30, choices=CATEGORY_CHOICES, default="Other")

    # Pricing
    price = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(0.01)])

    # Location and contact shown on the listing
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    phone_number = models.CharField(max_length=15, blank=True)

    # Images: primary URL plus the ordered list (primary first)
    image_url = models.URLField(max_length=500, blank=True)
    images = models.JSONField(default=list, blank=True)

    # Status and Visibility
    is_active = models.BooleanField(default=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Metrics
    views = models.PositiveIntegerField(default=0)
    clicks = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["is_active", "-created_at"], name="mkt_product_active_idx"),
            models.Index(fields=["category", "is_active", "-created_at"], name="mkt_product_category_idx"),
            models.Index(fields=["seller", "-created_at"], name="mkt_product_seller_idx"),
        ]

    def __str__(self):
        return self.title

    @property
    def owner_id(self):
        """User id of the owning shopkeeper."""
        return self.seller.user_id
