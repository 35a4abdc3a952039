# neuralarch/api/experiments.py

from fastapi import APIRouter, Depends, Response, status
import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from neuralarch.cache import invalidate_cache
from neuralarch.cache.cache_keys import (
    generate_architecture_invalidation_patterns,
    generate_stats_invalidation_patterns,
)
from neuralarch.db.async_database import get_async_db
from neuralarch.db.nas_db import NeuralArchSearchDB
from neuralarch.schemas.experiment import ExperimentCreate, ExperimentUpdate, ExperimentOut, ExperimentSummaryOut
from neuralarch.schemas.progress import ProgressOut

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=List[ExperimentOut])
async def list_experiments(db: AsyncSession = Depends(get_async_db)):
    """All experiments, newest first"""
    experiments = await NeuralArchSearchDB.get_experiments(db)
    logger.debug(f"Retrieved {len(experiments)} experiments")
    return experiments


@router.post("", response_model=ExperimentOut, status_code=status.HTTP_201_CREATED)
@invalidate_cache(patterns_generator=generate_stats_invalidation_patterns)
async def create_experiment(experiment_data: ExperimentCreate, db: AsyncSession = Depends(get_async_db)):
    experiment = await NeuralArchSearchDB.create_experiment(db, experiment_data.model_dump())
    return ExperimentOut.model_validate(experiment)


@router.get("/{experiment_id}", response_model=ExperimentOut)
async def get_experiment(experiment_id: str, db: AsyncSession = Depends(get_async_db)):
    return await NeuralArchSearchDB.get_experiment(db, experiment_id)


@router.put("/{experiment_id}", response_model=ExperimentOut)
async def update_experiment(experiment_id: str, experiment_update: ExperimentUpdate,
                            db: AsyncSession = Depends(get_async_db)):
    """
    Merge the supplied fields into the experiment.
    Status and convergence values are written as given.
    """
    update_data = experiment_update.model_dump(exclude_unset=True)
    experiment = await NeuralArchSearchDB.update_experiment(db, experiment_id, update_data)
    logger.info(f"Updated experiment {experiment_id}: {sorted(update_data)}")
    return experiment


@router.delete("/{experiment_id}", status_code=status.HTTP_204_NO_CONTENT)
@invalidate_cache(patterns_generator=generate_architecture_invalidation_patterns)
async def delete_experiment(experiment_id: str, db: AsyncSession = Depends(get_async_db)):
    await NeuralArchSearchDB.delete_experiment(db, experiment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{experiment_id}/summary", response_model=ExperimentSummaryOut)
async def get_experiment_summary(experiment_id: str, db: AsyncSession = Depends(get_async_db)):
    return await NeuralArchSearchDB.get_experiment_summary(db, experiment_id)


@router.get("/{experiment_id}/progress", response_model=List[ProgressOut])
async def get_experiment_progress(experiment_id: str, db: AsyncSession = Depends(get_async_db)):
    # confirm the experiment exists so an unknown id is a 404, not an empty log
    await NeuralArchSearchDB.get_experiment(db, experiment_id)
    return await NeuralArchSearchDB.get_progress(db, experiment_id)
