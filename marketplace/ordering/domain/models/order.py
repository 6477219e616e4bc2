import secrets
import uuid

from django.conf import settings
from django.db import models

from marketplace.catalog.domain.models.catalog import Product


def generate_pickup_code() -> str:
    """Random 4-digit code in 1000..9999."""
    return str(1000 + secrets.randbelow(9000))


class Order(models.Model):
    STATUS_PENDING = "pending"
    STATUS_READY = "ready"
    STATUS_COMPLETED = "completed"
    STATUS_CANCELLED = "cancelled"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_READY, "Ready for pickup"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    # Seller-driven transitions
    TRANSITIONS = {
        STATUS_PENDING: {STATUS_READY, STATUS_COMPLETED, STATUS_CANCELLED},
        STATUS_READY: {STATUS_COMPLETED, STATUS_CANCELLED},
        STATUS_COMPLETED: set(),
        STATUS_CANCELLED: set(),
    }

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="orders")
    buyer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="orders")
    seller = models.ForeignKey("authentication.Seller", on_delete=models.CASCADE, related_name="orders")

    # Order Details
    pickup_code = models.CharField(max_length=4, default=generate_pickup_code)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)

    # Shop snapshot at reservation time
    shop_name = models.CharField(max_length=200)
    shop_address = models.CharField(max_length=500, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["buyer", "-created_at"], name="mkt_order_buyer_idx"),
            models.Index(fields=["seller", "status"], name="mkt_order_seller_idx"),
        ]

    def __str__(self):
        return f"Order {self.id} - {self.status}"

    def can_transition_to(self, new_status: str) -> bool:
        return new_status in self.TRANSITIONS.get(self.status, set())
