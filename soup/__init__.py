from .chat import ChatService, get_chat_service
from .llm import ChatModel, GeminiChatModel

__all__ = ["ChatService", "get_chat_service", "ChatModel", "GeminiChatModel"]
