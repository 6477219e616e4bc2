from .conversation_views import ConversationViewSet, MessageViewSet

__all__ = ["ConversationViewSet", "MessageViewSet"]
