from .chat_service import ChatService, conversation_group

__all__ = ["ChatService", "conversation_group"]
