# neuralarch/api/progress.py

from fastapi import APIRouter, Depends, status
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from neuralarch.db.async_database import get_async_db
from neuralarch.db.nas_db import NeuralArchSearchDB
from neuralarch.schemas.progress import ProgressCreate, ProgressOut

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=ProgressOut, status_code=status.HTTP_201_CREATED)
async def record_progress(progress_data: ProgressCreate, db: AsyncSession = Depends(get_async_db)):
    await NeuralArchSearchDB.get_experiment(db, progress_data.experiment_id)
    progress = await NeuralArchSearchDB.record_progress(db, progress_data.model_dump())
    logger.info(f"Recorded iteration {progress.iteration} for experiment {progress.experiment_id}")
    return progress
