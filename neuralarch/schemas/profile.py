from pydantic import BaseModel, EmailStr, ConfigDict
from typing import Optional
from datetime import datetime

from neuralarch.models.enums import SearchStrategy, DatasetType


class ProfileUpdate(BaseModel):
    email: Optional[EmailStr] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    preferred_dataset: Optional[DatasetType] = None
    preferred_strategy: Optional[SearchStrategy] = None


class ProfileOut(BaseModel):
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    total_experiments: int = 0
    total_architectures: int = 0
    best_accuracy: Optional[float] = None
    preferred_dataset: Optional[DatasetType] = None
    preferred_strategy: Optional[SearchStrategy] = None

    model_config = ConfigDict(from_attributes=True)


class GlobalStatsOut(BaseModel):
    total_experiments: int
    total_architectures: int
    total_ai_conversations: int
