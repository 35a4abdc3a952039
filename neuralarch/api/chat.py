# neuralarch/api/chat.py

import logging
from typing import List

from fastapi import APIRouter, Request

from neuralarch.middleware.error_handler import ValidationError, limiter, AI_RATE_LIMIT
from neuralarch.nas_engine.chat_responder import generate_chat_reply
from neuralarch.schemas.chat import ChatMessage, ChatRequest, ChatCompletionOut

logger = logging.getLogger(__name__)
router = APIRouter()


def require_user_prompt(messages: List[ChatMessage]) -> str:
    """Content of the final message, which must come from the user"""
    if not messages or messages[-1].role != "user":
        raise ValidationError("Invalid request: last message must be from user",
                              {"messages": len(messages or [])})
    return messages[-1].content


@router.post("/chat", response_model=ChatCompletionOut)
@limiter.limit(AI_RATE_LIMIT)
async def chat(request: Request, payload: ChatRequest):
    prompt = require_user_prompt(payload.messages)
    reply = generate_chat_reply(prompt, payload.messages)
    logger.info(f"Chat reply generated for {len(payload.messages)} message(s)")
    return ChatCompletionOut.from_text(reply)
