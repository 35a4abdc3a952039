from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime

from neuralarch.models.enums import MessageRole


class ConversationCreate(BaseModel):
    session_id: str = Field(..., min_length=1, max_length=255)
    message_role: MessageRole
    message_content: str = Field(..., min_length=1)
    experiment_id: Optional[str] = None
    ai_model: str = "neuralarch-assistant"
    response_time_ms: Optional[int] = None
    tokens_used: Optional[int] = None


class ConversationOut(BaseModel):
    id: str
    session_id: Optional[str] = None
    message_role: MessageRole
    message_content: str
    experiment_id: Optional[str] = None
    ai_model: Optional[str] = None
    response_time_ms: Optional[int] = None
    tokens_used: Optional[int] = None
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
