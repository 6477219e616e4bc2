import uuid

from django.conf import settings
from django.db import models


class Message(models.Model):
    """Buyer/shopkeeper message about one product."""

    MAX_CONTENT_LENGTH = 2000

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    sender = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="sent_messages")
    receiver = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="received_messages"
    )
    product = models.ForeignKey("marketplace.Product", on_delete=models.CASCADE, related_name="messages")

    content = models.TextField(max_length=MAX_CONTENT_LENGTH)
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = "chat"
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["product", "created_at"], name="chat_msg_product_idx"),
            models.Index(fields=["receiver", "is_read"], name="chat_msg_receiver_read_idx"),
            models.Index(fields=["sender", "-created_at"], name="chat_msg_sender_idx"),
        ]

    def __str__(self):
        return f"Message {self.id} from {self.sender_id} to {self.receiver_id}"

    def to_payload(self) -> dict:
        """JSON-safe form used for broadcasts and websocket frames."""
        return {
            "id": str(self.id),
            "sender_id": str(self.sender_id),
            "receiver_id": str(self.receiver_id),
            "product_id": str(self.product_id),
            "content": self.content,
            "is_read": self.is_read,
            "created_at": self.created_at.isoformat(),
        }
