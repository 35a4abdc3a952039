# neuralarch/api/assistant.py

import logging

from fastapi import APIRouter, Request

from neuralarch.api.chat import require_user_prompt
from neuralarch.middleware.error_handler import limiter, AI_RATE_LIMIT
from neuralarch.nas_engine.enhanced_responder import generate_enhanced_reply
from neuralarch.schemas.chat import EnhancedChatRequest, EnhancedChatOut

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/shaurya-ai-enhanced", response_model=EnhancedChatOut)
@limiter.limit(AI_RATE_LIMIT)
async def enhanced_chat(request: Request, payload: EnhancedChatRequest):
    """
    Long-form assistant reply. Same text contract as /api/chat plus
    insights, suggestions and visualization hints.
    """
    prompt = require_user_prompt(payload.messages)
    reply = generate_enhanced_reply(prompt, payload.messages, payload.context)
    logger.info(f"Enhanced reply on topic '{reply['topic']}' with {len(reply['insights'])} insight(s)")
    return EnhancedChatOut.from_reply(reply)
