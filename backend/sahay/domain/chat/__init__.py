from .service import ChatService, ChatTurn, ConversationError

__all__ = ["ChatService", "ChatTurn", "ConversationError"]
