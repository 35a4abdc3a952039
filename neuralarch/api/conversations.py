# neuralarch/api/conversations.py

from fastapi import APIRouter, Depends, status
import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from neuralarch.cache import invalidate_cache
from neuralarch.cache.cache_keys import generate_stats_invalidation_patterns
from neuralarch.db.async_database import get_async_db
from neuralarch.db.nas_db import NeuralArchSearchDB
from neuralarch.schemas.conversation import ConversationCreate, ConversationOut

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=ConversationOut, status_code=status.HTTP_201_CREATED)
@invalidate_cache(patterns_generator=generate_stats_invalidation_patterns)
async def save_conversation(message: ConversationCreate, db: AsyncSession = Depends(get_async_db)):
    if message.experiment_id:
        await NeuralArchSearchDB.get_experiment(db, message.experiment_id)
    conversation = await NeuralArchSearchDB.save_conversation(db, message.model_dump())
    return ConversationOut.model_validate(conversation)


@router.get("/{session_id}", response_model=List[ConversationOut])
async def get_conversations(session_id: str, db: AsyncSession = Depends(get_async_db)):
    """Chat log of one session, oldest first"""
    return await NeuralArchSearchDB.get_conversations(db, session_id)
