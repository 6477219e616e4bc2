from .message_serializers import (
    ConversationPeerSerializer,
    ConversationSerializer,
    MessagePageSerializer,
    MessageSerializer,
    SendMessageSerializer,
)


__all__ = [
    "ConversationPeerSerializer",
    "ConversationSerializer",
    "MessagePageSerializer",
    "MessageSerializer",
    "SendMessageSerializer",
]
