# neuralarch/api/architectures.py

from fastapi import APIRouter, Depends, Query, status
import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from neuralarch.cache import cache_result, invalidate_cache
from neuralarch.cache.cache_keys import (
    LEADERBOARD_TTL,
    generate_leaderboard_key,
    generate_architecture_invalidation_patterns,
)
from neuralarch.db.async_database import get_async_db
from neuralarch.db.nas_db import NeuralArchSearchDB
from neuralarch.schemas.architecture import (
    ArchitectureCreate,
    ArchitectureOut,
    ArchitectureDetailOut,
    LeaderboardEntry,
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=List[ArchitectureOut])
async def list_architectures(
    experiment_id: Optional[str] = Query(None, description="Only architectures of this experiment"),
    db: AsyncSession = Depends(get_async_db)
):
    """Architectures ordered by overall score, then top-1 accuracy"""
    return await NeuralArchSearchDB.get_architectures(db, experiment_id)


@router.post("", response_model=ArchitectureOut, status_code=status.HTTP_201_CREATED)
@invalidate_cache(patterns_generator=generate_architecture_invalidation_patterns)
async def create_architecture(architecture_data: ArchitectureCreate, db: AsyncSession = Depends(get_async_db)):
    if architecture_data.experiment_id:
        await NeuralArchSearchDB.get_experiment(db, architecture_data.experiment_id)
    data = architecture_data.model_dump(exclude={"layers"})
    if architecture_data.layers is not None:
        data["layers"] = [layer.model_dump(exclude_unset=True) for layer in architecture_data.layers]
    architecture = await NeuralArchSearchDB.create_architecture(db, data)
    return ArchitectureOut.model_validate(architecture)


# declared before /{architecture_id} so "leaderboard" is not taken as an id
@router.get("/leaderboard", response_model=List[LeaderboardEntry])
@cache_result(ttl=LEADERBOARD_TTL, key_generator=generate_leaderboard_key)
async def get_leaderboard(
    limit: int = Query(10, ge=1, le=100, description="Number of architectures to return"),
    db: AsyncSession = Depends(get_async_db)
):
    return await NeuralArchSearchDB.get_top_architectures(db, limit)


@router.get("/{architecture_id}", response_model=ArchitectureDetailOut)
async def get_architecture(architecture_id: str, db: AsyncSession = Depends(get_async_db)):
    architecture = await NeuralArchSearchDB.get_architecture(db, architecture_id)
    logger.debug(f"Retrieved architecture {architecture_id} with {len(architecture.layers)} layers")
    return architecture
