from .memory import ChatHistoryStore, ChatMessage, RoomNotFoundError, RoomView
from .prompt import GAME_OVER_MARKER, SYSTEM_PROMPT, is_game_over

__all__ = [
    "ChatHistoryStore",
    "ChatMessage",
    "RoomNotFoundError",
    "RoomView",
    "GAME_OVER_MARKER",
    "SYSTEM_PROMPT",
    "is_game_over",
]
