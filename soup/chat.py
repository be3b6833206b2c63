from __future__ import annotations

import logging
from functools import lru_cache
from typing import List, Optional

from config.settings import get_settings
from soup.core.memory import ChatHistoryStore, ChatMessage, RoomView
from soup.core.prompt import GAME_OVER_MARKER, SYSTEM_PROMPT, is_game_over
from soup.llm import ChatModel, GeminiChatModel


logger = logging.getLogger("turtlesoup.chat")


class ChatService:
    """Runs one game turn per call and keeps each room's transcript."""

    def __init__(
        self,
        model: ChatModel,
        store: Optional[ChatHistoryStore] = None,
        marker: str = GAME_OVER_MARKER,
    ):
        if not marker:
            raise ValueError("Game-over marker must be a non-empty string")
        self.model = model
        self.store = store if store is not None else ChatHistoryStore(SYSTEM_PROMPT)
        self.marker = marker

    def do_chat(self, room_id: int, user_prompt: str) -> str:
        # One turn at a time per room; other rooms are not blocked.
        with self.store.room_lock(room_id):
            self.store.get_or_create(room_id)
            self.store.append(room_id, ChatMessage(role="user", content=user_prompt))

            messages = self.store.get_or_create(room_id)
            logger.info(
                "Chat turn: room=%s history=%s prompt_len=%s",
                room_id,
                len(messages),
                len(user_prompt or ""),
            )
            answer = self.model.complete(messages)

            self.store.append(room_id, ChatMessage(role="assistant", content=answer))
            if is_game_over(answer, self.marker):
                logger.info("Game over detected for room=%s", room_id)
                self.store.remove(room_id)

        return answer

    def get_chat_rooms(self) -> List[RoomView]:
        return self.store.list_all()


@lru_cache(maxsize=1)
def get_chat_service() -> ChatService:
    return ChatService(model=GeminiChatModel(get_settings()))
