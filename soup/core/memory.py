from __future__ import annotations

"""In-process chat history, keyed by room id.

Each room holds the transcript that is sent to the model on every turn:
the system prompt first, then alternating user/assistant messages. Nothing is
persisted; a room lives until a reply ends the game or the process exits.
"""

import logging
import weakref
from threading import Lock
from typing import Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field


logger = logging.getLogger("turtlesoup.memory")

Role = Literal["system", "user", "assistant"]


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


class RoomView(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    room_id: int = Field(..., alias="roomId", description="Room identifier")
    messages: List[ChatMessage] = Field(
        default_factory=list,
        description="Room transcript without the system prompt",
    )


class RoomNotFoundError(LookupError):
    def __init__(self, room_id: int):
        super().__init__(f"No conversation for room {room_id}")
        self.room_id = room_id


class ChatHistoryStore:
    """Thread-safe mapping from room id to its message list.

    ``_lock`` only guards dictionary access. Callers that need a whole
    read-modify-write turn on one room hold ``room_lock(room_id)`` instead, so
    a slow model call on one room never blocks the others.
    """

    def __init__(self, system_prompt: str):
        self._system_prompt = system_prompt
        self._histories: Dict[int, List[ChatMessage]] = {}
        # An entry lives while some caller holds the lock object, so a waiter
        # on a removed room shares its lock with whoever recreates the room.
        self._room_locks: "weakref.WeakValueDictionary[int, Lock]" = weakref.WeakValueDictionary()
        self._lock = Lock()

    def room_lock(self, room_id: int) -> Lock:
        with self._lock:
            lock = self._room_locks.get(room_id)
            if lock is None:
                lock = Lock()
                self._room_locks[room_id] = lock
            return lock

    def get_or_create(self, room_id: int) -> List[ChatMessage]:
        with self._lock:
            history = self._histories.get(room_id)
            if history is None:
                history = [ChatMessage(role="system", content=self._system_prompt)]
                self._histories[room_id] = history
                logger.info("Created conversation for room=%s", room_id)
            return list(history)

    def append(self, room_id: int, message: ChatMessage) -> None:
        with self._lock:
            history = self._histories.get(room_id)
            if history is None:
                raise RoomNotFoundError(room_id)
            history.append(message)

    def remove(self, room_id: int) -> None:
        with self._lock:
            removed = self._histories.pop(room_id, None)
        if removed is not None:
            logger.info("Removed conversation for room=%s (%s messages)", room_id, len(removed))

    def list_all(self) -> List[RoomView]:
        with self._lock:
            snapshot = [(room_id, list(history)) for room_id, history in self._histories.items()]
        return [
            RoomView(
                room_id=room_id,
                messages=[m for m in history if m.role != "system"],
            )
            for room_id, history in snapshot
        ]

    def clear(self) -> None:
        with self._lock:
            self._histories.clear()

    def __contains__(self, room_id: object) -> bool:
        with self._lock:
            return room_id in self._histories

    def __len__(self) -> int:
        with self._lock:
            return len(self._histories)
