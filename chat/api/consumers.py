import json
import logging
from collections import OrderedDict

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer
from django.contrib.auth import get_user_model

from chat.domain.services.chat_service import conversation_group
from chat.infra.observability.metrics import chat_ws_active_connections, chat_ws_connections_total
from infrastructure.container import container
from marketplace.catalog.domain.models.catalog import Product


logger = logging.getLogger(__name__)

User = get_user_model()

CLOSE_UNAUTHENTICATED = 4001
CLOSE_SELF_CHAT = 4003
CLOSE_NOT_FOUND = 4004

DELIVERED_IDS_LIMIT = 500


class ChatConsumer(AsyncWebsocketConsumer):
    """
    One product conversation between the connected user and a peer.

    Client frames: ``chat.message`` (payload.content), ``chat.read``, ``ping``.
    Server frames: ``chat.message``, ``chat.read``, ``pong``, ``error``.
    """

    async def connect(self):
        self.user = self.scope.get("user")
        # Most recent ids only, oldest dropped past DELIVERED_IDS_LIMIT
        self.delivered_ids = OrderedDict()

        # 1. Validation: User must be authenticated
        if self.user is None or not self.user.is_authenticated:
            logger.warning(f"Unauthenticated connection attempt to {self.channel_name}")
            chat_ws_connections_total.labels(result="unauthenticated").inc()
            await self.close(code=CLOSE_UNAUTHENTICATED)
            return

        kwargs = self.scope["url_route"]["kwargs"]
        self.product_id = kwargs["product_id"]
        self.peer_id = kwargs["peer_id"]

        # 2. Peer must be someone else
        if str(self.peer_id) == str(self.user.id):
            chat_ws_connections_total.labels(result="self_chat").inc()
            await self.close(code=CLOSE_SELF_CHAT)
            return

        # 3. Product and peer must exist
        if not await self.conversation_exists():
            logger.warning(f"User {self.user.id} opened chat for unknown product/peer {self.product_id}")
            chat_ws_connections_total.labels(result="not_found").inc()
            await self.close(code=CLOSE_NOT_FOUND)
            return

        # 4. Join Group
        self.group_name = conversation_group(self.product_id, self.user.id, self.peer_id)
        await self.channel_layer.group_add(self.group_name, self.channel_name)

        await self.accept()
        chat_ws_connections_total.labels(result="accepted").inc()
        chat_ws_active_connections.inc()
        logger.info(f"User {self.user.id} connected to chat about product {self.product_id}")

    async def disconnect(self, close_code):
        if hasattr(self, "group_name"):
            await self.channel_layer.group_discard(self.group_name, self.channel_name)
            chat_ws_active_connections.dec()

    async def receive(self, text_data=None, bytes_data=None):
        try:
            data = json.loads(text_data or "")
        except json.JSONDecodeError:
            await self.send_error("Invalid JSON", code="invalid_json")
            return
        if not isinstance(data, dict):
            await self.send_error("Frame must be a JSON object", code="invalid_frame")
            return

        msg_type = data.get("type")

        if msg_type == "chat.message":
            payload = data.get("payload") or {}
            content = payload.get("content", "") if isinstance(payload, dict) else None
            if not isinstance(content, str):
                await self.send_error("payload.content must be a string", code="invalid_frame")
                return
            result = await self.send_message(content)
            if not result.ok:
                await self.send_error(result.error_detail, code=result.error)

        elif msg_type == "chat.read":
            await self.mark_read()

        elif msg_type == "ping":
            await self.send(text_data=json.dumps({"type": "pong"}))

        else:
            await self.send_error("Unknown message type", code="unknown_type")

    async def chat_message(self, event):
        """
        Handler for 'chat.message' events sent from the Channel Layer.
        A message id is forwarded to this socket at most once.
        """
        message = event["message"]
        if message["id"] in self.delivered_ids:
            return
        self.delivered_ids[message["id"]] = None
        if len(self.delivered_ids) > DELIVERED_IDS_LIMIT:
            self.delivered_ids.popitem(last=False)
        await self.send(text_data=json.dumps({"type": "chat.message", "data": message}))

    async def chat_read(self, event):
        await self.send(text_data=json.dumps({"type": "chat.read", "data": event["receipt"]}))

    async def send_error(self, message, code="error"):
        await self.send(text_data=json.dumps({"type": "error", "code": code, "message": message}))

    @database_sync_to_async
    def conversation_exists(self) -> bool:
        return (
            Product.objects.filter(id=self.product_id).exists() and User.objects.filter(id=self.peer_id).exists()
        )

    @database_sync_to_async
    def send_message(self, content):
        # Persists and broadcasts to the group, which triggers chat_message here too
        return container.chat_service().send(
            self.user, self.peer_id, self.product_id, content, transport="websocket"
        )

    @database_sync_to_async
    def mark_read(self):
        return container.chat_service().mark_read(self.user, self.peer_id, self.product_id)
