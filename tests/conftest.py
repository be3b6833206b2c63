from __future__ import annotations

from typing import List, Sequence

import pytest
from fastapi.testclient import TestClient

from app.main import app
from soup.chat import ChatService, get_chat_service
from soup.core.memory import ChatHistoryStore, ChatMessage
from soup.core.prompt import SYSTEM_PROMPT


class ScriptedChatModel:
    """Replies from a fixed script and records every transcript it was sent."""

    def __init__(self, replies: Sequence[str] = ()):
        self.replies = list(replies)
        self.calls: List[List[ChatMessage]] = []

    def complete(self, messages: Sequence[ChatMessage]) -> str:
        self.calls.append(list(messages))
        if self.replies:
            return self.replies.pop(0)
        return f"reply {len(self.calls)}"


@pytest.fixture
def model():
    return ScriptedChatModel()


@pytest.fixture
def store():
    return ChatHistoryStore(SYSTEM_PROMPT)


@pytest.fixture
def service(model, store):
    return ChatService(model=model, store=store)


@pytest.fixture
def client(service):
    app.dependency_overrides[get_chat_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
