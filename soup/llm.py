from __future__ import annotations

import logging
from threading import Lock
from typing import List, Optional, Protocol, Sequence

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from config.settings import Settings, get_settings
from soup.core.memory import ChatMessage


logger = logging.getLogger("turtlesoup.llm")


class ChatModel(Protocol):
    def complete(self, messages: Sequence[ChatMessage]) -> str:
        ...


def build_llm(settings: Optional[Settings] = None) -> ChatGoogleGenerativeAI:
    settings = settings or get_settings()
    if not settings.google_api_key:
        raise RuntimeError(
            "GOOGLE_API_KEY not set. Please configure it in environment or .env"
        )

    return ChatGoogleGenerativeAI(
        model=settings.gemini_model,
        google_api_key=settings.google_api_key,
        temperature=settings.temperature,
        top_p=settings.top_p,
    )


def to_lc_messages(history: Sequence[ChatMessage]) -> List[BaseMessage]:
    messages: List[BaseMessage] = []
    for item in history or []:
        role = (item.role or "").lower()
        content = item.content or ""
        if not content:
            continue
        if role == "system":
            messages.append(SystemMessage(content=content))
        elif role in ("user", "human"):
            messages.append(HumanMessage(content=content))
        elif role in ("assistant", "ai"):
            messages.append(AIMessage(content=content))
        else:
            messages.append(HumanMessage(content=content))
    return messages


def _reply_text(result: BaseMessage) -> str:
    content = result.content
    if isinstance(content, str):
        return content
    # Gemini may answer with a list of parts.
    parts = []
    for part in content or []:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text") or "")
    return "".join(parts)


class GeminiChatModel:
    """ChatModel backed by Gemini through LangChain.

    The client is built on first use, so the app can start without an API key
    and fail on the first chat request instead.
    """

    def __init__(self, settings: Optional[Settings] = None, llm: Optional[BaseChatModel] = None):
        self._settings = settings
        self._llm = llm
        self._lock = Lock()

    @property
    def llm(self) -> BaseChatModel:
        with self._lock:
            if self._llm is None:
                self._llm = build_llm(self._settings)
            return self._llm

    def complete(self, messages: Sequence[ChatMessage]) -> str:
        lc_messages = to_lc_messages(messages)
        logger.info("Invoking model with %s messages", len(lc_messages))
        result = self.llm.invoke(lc_messages)
        return _reply_text(result)
