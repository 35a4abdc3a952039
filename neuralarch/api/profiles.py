# neuralarch/api/profiles.py

from fastapi import APIRouter, Depends
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from neuralarch.db.async_database import get_async_db
from neuralarch.db.nas_db import NeuralArchSearchDB
from neuralarch.schemas.profile import ProfileUpdate, ProfileOut

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/{profile_id}", response_model=ProfileOut)
async def get_profile(profile_id: str, db: AsyncSession = Depends(get_async_db)):
    return await NeuralArchSearchDB.get_profile(db, profile_id)


@router.put("/{profile_id}", response_model=ProfileOut)
async def upsert_profile(profile_id: str, profile_data: ProfileUpdate, db: AsyncSession = Depends(get_async_db)):
    """Create the profile on first write, merge fields afterwards"""
    profile = await NeuralArchSearchDB.upsert_profile(db, profile_id, profile_data.model_dump(exclude_unset=True))
    logger.info(f"Saved profile {profile_id}")
    return profile


@router.post("/{profile_id}/refresh-stats", response_model=ProfileOut)
async def refresh_profile_stats(profile_id: str, db: AsyncSession = Depends(get_async_db)):
    return await NeuralArchSearchDB.refresh_profile_stats(db, profile_id)
