"""
ChatService - Buyer/Shopkeeper Messaging

A conversation is the set of messages between two users about one product.
Messages are persisted first and then broadcast on the channel layer to the
conversation group both participants join from their websocket.
"""

import hashlib
from typing import Any, Dict, List, Optional

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.paginator import Paginator
from django.db.models import Count, Q
from django.utils import timezone

from chat.domain.models import Message
from chat.infra.observability.metrics import (
    chat_broadcast_failures_total,
    chat_messages_read_total,
    chat_messages_sent_total,
)
from marketplace.catalog.domain.models.catalog import Product
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


User = get_user_model()


def conversation_group(product_id, user_a, user_b) -> str:
    """
    Channel group shared by both participants of a product conversation.

    The user pair is digested so the name stays under the channel layer's
    100-character limit: ``chat_{product hex}_{pair digest}``.
    """
    low, high = sorted([str(user_a), str(user_b)])
    pair = hashlib.blake2b(f"{low}:{high}".encode(), digest_size=16).hexdigest()
    product = str(product_id).replace("-", "")
    return f"chat_{product}_{pair}"


class ChatService(BaseService):
    """
    Service for product conversations.

    Responsibilities:
    - Send a message (validate, persist, broadcast)
    - Conversation history, oldest first
    - Read receipts
    - Conversation list and unread counter for the inbox
    """

    def __init__(self, channel_layer=None):
        super().__init__()
        self.channel_layer = channel_layer or get_channel_layer()

    def _broadcast(self, group: str, event: Dict[str, Any]):
        """Deliver to the group; the message is already stored, so failures are logged only."""
        if self.channel_layer is None:
            return
        try:
            async_to_sync(self.channel_layer.group_send)(group, event)
        except Exception as e:
            chat_broadcast_failures_total.inc()
            self.logger.error(f"Broadcast to {group} failed: {e}", exc_info=True)

    @staticmethod
    def conversation_messages(user_id, peer_id, product_id):
        return Message.objects.filter(product_id=product_id).filter(
            Q(sender_id=user_id, receiver_id=peer_id) | Q(sender_id=peer_id, receiver_id=user_id)
        )

    @BaseService.log_performance
    def send(self, sender, receiver_id, product_id, content: str, transport: str = "http") -> ServiceResult[Message]:
        """
        Persist a message and broadcast it to the conversation group.

        Returns:
            ServiceResult with the Message, or empty_message / message_too_long /
            invalid_receiver / product_not_found
        """
        if content is not None and not isinstance(content, str):
            return service_err(ErrorCodes.VALIDATION_ERROR, "Message content must be text")
        content = (content or "").strip()
        if not content:
            return service_err(ErrorCodes.EMPTY_MESSAGE, "Message cannot be empty")
        if len(content) > Message.MAX_CONTENT_LENGTH:
            return service_err(
                ErrorCodes.MESSAGE_TOO_LONG, f"Message is longer than {Message.MAX_CONTENT_LENGTH} characters"
            )

        if str(receiver_id) == str(sender.id):
            return service_err(ErrorCodes.INVALID_RECEIVER, "You cannot message yourself")
        receiver = User.objects.filter(id=receiver_id).first()
        if receiver is None:
            return service_err(ErrorCodes.INVALID_RECEIVER, f"User {receiver_id} not found")

        if not Product.objects.filter(id=product_id).exists():
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")

        message = Message.objects.create(sender=sender, receiver=receiver, product_id=product_id, content=content)
        chat_messages_sent_total.labels(transport=transport).inc()
        self.logger.info(f"Message {message.id} from {sender.id} to {receiver.id} about product {product_id}")

        self._broadcast(
            conversation_group(product_id, sender.id, receiver.id),
            {"type": "chat.message", "message": message.to_payload()},
        )
        return service_ok(message)

    def history(
        self, user, peer_id, product_id, page: int = 1, page_size: Optional[int] = None
    ) -> ServiceResult[Dict[str, Any]]:
        """Messages between ``user`` and ``peer_id`` about one product, oldest first."""
        page_size = page_size or settings.SELLORA_CHAT_PAGE_SIZE
        queryset = self.conversation_messages(user.id, peer_id, product_id).order_by("created_at")
        paginator = Paginator(queryset, page_size)
        page_obj = paginator.get_page(page)
        return service_ok(
            {
                "results": list(page_obj.object_list),
                "count": paginator.count,
                "page": page_obj.number,
                "page_size": page_size,
                "num_pages": paginator.num_pages,
                "has_next": page_obj.has_next(),
                "has_previous": page_obj.has_previous(),
            }
        )

    @BaseService.log_performance
    def mark_read(self, user, peer_id, product_id) -> ServiceResult[int]:
        """Mark what ``user`` received from ``peer_id`` about the product as read."""
        updated = Message.objects.filter(
            product_id=product_id, sender_id=peer_id, receiver_id=user.id, is_read=False
        ).update(is_read=True)

        if updated:
            chat_messages_read_total.inc(updated)
            self._broadcast(
                conversation_group(product_id, user.id, peer_id),
                {
                    "type": "chat.read",
                    "receipt": {
                        "reader_id": str(user.id),
                        "product_id": str(product_id),
                        "count": updated,
                        "read_at": timezone.now().isoformat(),
                    },
                },
            )
        return service_ok(updated)

    @BaseService.log_performance
    def conversations(self, user) -> ServiceResult[List[Dict[str, Any]]]:
        """
        One entry per (peer, product), most recent conversation first.

        Each entry carries the last message, the peer's display name and email,
        the product title and the count of unread messages ``user`` received.
        """
        unread = {
            (str(row["sender_id"]), str(row["product_id"])): row["count"]
            for row in Message.objects.filter(receiver=user, is_read=False)
            .values("sender_id", "product_id")
            .annotate(count=Count("id"))
        }

        messages = (
            Message.objects.filter(Q(sender=user) | Q(receiver=user))
            .select_related("product", "sender__profile", "receiver__profile")
            .order_by("-created_at")
        )

        entries: Dict[tuple, Dict[str, Any]] = {}
        for message in messages.iterator():
            peer = message.receiver if message.sender_id == user.id else message.sender
            key = (str(peer.id), str(message.product_id))
            if key in entries:
                continue
            entries[key] = {
                "peer_id": key[0],
                "peer_name": peer.display_name,
                "peer_email": peer.email,
                "product_id": key[1],
                "product_title": message.product.title,
                "last_message": message.to_payload(),
                "unread_count": unread.get(key, 0),
            }

        return service_ok(list(entries.values()))

    def unread_count(self, user) -> int:
        return Message.objects.filter(receiver=user, is_read=False).count()
