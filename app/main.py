from __future__ import annotations

from typing import List

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
import logging
from pydantic import BaseModel, ConfigDict, Field

from config.settings import get_settings
from soup.chat import ChatService, get_chat_service
from soup.core.memory import RoomView


settings = get_settings()
logging.basicConfig(
    level=settings.log_level.upper(),
    format="[%(asctime)s] %(levelname)s - %(message)s",
)
logger = logging.getLogger("turtlesoup")

app = FastAPI(title="Turtle Soup Chat Host", version="1.0.0")

# CORS: allow local frontend during development
if settings.app_env.lower() in {"dev", "development", "local"}:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    room_id: int = Field(..., alias="roomId", description="Room to play in")
    user_prompt: str = Field(..., alias="userPrompt", description="User's latest message")


class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    room_id: int = Field(..., alias="roomId")
    reply: str


@app.post("/chat/do", response_model=ChatResponse)
def do_chat(req: ChatRequest, service: ChatService = Depends(get_chat_service)) -> ChatResponse:
    logger.info("Incoming chat: room=%s prompt_len=%s", req.room_id, len(req.user_prompt))
    try:
        reply = service.do_chat(req.room_id, req.user_prompt)
    except Exception as e:
        logger.exception("Chat processing failed: %s", e)
        raise HTTPException(status_code=500, detail=str(e))

    logger.info("Model responded: room=%s %s chars", req.room_id, len(reply))
    return ChatResponse(room_id=req.room_id, reply=reply)


@app.get("/chat/rooms", response_model=List[RoomView])
def get_chat_rooms(service: ChatService = Depends(get_chat_service)) -> List[RoomView]:
    return service.get_chat_rooms()


@app.get("/health")
def health():
    return {"status": "ok"}
