# neuralarch/db/nas_db.py

"""
Data access façade for the NeuralArch Search API.

Every persistence operation goes through ``NeuralArchSearchDB``. Methods are
async static methods taking an ``AsyncSession`` first, except
``get_global_stats`` which opens its own sessions to run its counts
concurrently. Store failures surface as ``DatabaseError`` carrying the
store's raw message; an unset DATABASE_URL surfaces as
``DatabaseNotConfiguredError``.
"""

import asyncio
import logging
from functools import wraps
from typing import Any, Dict, List, Optional

from sqlalchemy import select, update, delete, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from neuralarch.db import async_database
from neuralarch.db.views import (
    architecture_leaderboard,
    experiment_summary,
    leaderboard_row_to_dict,
    summary_row_to_dict,
)
from neuralarch.middleware.error_handler import (
    DatabaseError,
    DatabaseNotConfiguredError,
    ResourceNotFoundError,
)
from neuralarch.models import (
    SearchExperiment,
    NeuralArchitecture,
    ArchitectureLayer,
    SearchProgress,
    AiConversation,
    UserProfile,
)
from neuralarch.models.experiment import utcnow
from neuralarch.utils.error_utils import extract_error_message
from neuralarch.utils.performance_monitor import track_async_performance, DB_OPERATIONS

logger = logging.getLogger(__name__)

# Owner recorded on every experiment and conversation written through the façade
SYSTEM_OWNER = "NeuralArch System"


def store_operation(operation_key: str):
    """Time the call and translate store failures into DatabaseError"""
    def decorator(func):
        @track_async_performance(DB_OPERATIONS[operation_key])
        @wraps(func)
        async def wrapper(*args, **kwargs):
            if async_database.AsyncSessionLocal is None:
                raise DatabaseNotConfiguredError()
            try:
                return await func(*args, **kwargs)
            except SQLAlchemyError as e:
                db = args[0] if args and isinstance(args[0], AsyncSession) else None
                if db is not None:
                    await db.rollback()
                message = extract_error_message(e)
                logger.error(f"{DB_OPERATIONS[operation_key]} failed: {message}")
                raise DatabaseError(message) from e
        return wrapper
    return decorator


def _columns(model, data: Dict[str, Any]) -> Dict[str, Any]:
    """Keep only keys that are columns of the model"""
    names = {column.key for column in model.__table__.columns}
    return {key: value for key, value in data.items() if key in names}


def _layer_from_dict(index: int, layer: Dict[str, Any]) -> ArchitectureLayer:
    layer_type = layer.get("layer_type") or layer.get("type") or "unknown"
    config = layer.get("layer_config")
    if config is None:
        config = {
            key: value for key, value in layer.items()
            if key not in ("layer_type", "type", "layer_config", "input_shape", "output_shape",
                           "parameters_count", "flops_count")
        }
    return ArchitectureLayer(
        layer_index=index,
        layer_type=layer_type,
        layer_config=config,
        input_shape=layer.get("input_shape"),
        output_shape=layer.get("output_shape"),
        parameters_count=layer.get("parameters_count"),
        flops_count=layer.get("flops_count"),
    )


class NeuralArchSearchDB:

    # --- Experiments ---

    @staticmethod
    @store_operation("CREATE_EXPERIMENT")
    async def create_experiment(db: AsyncSession, data: Dict[str, Any]) -> SearchExperiment:
        values = _columns(SearchExperiment, data)
        values.pop("id", None)
        values["created_by"] = SYSTEM_OWNER
        experiment = SearchExperiment(**values)
        db.add(experiment)
        await db.commit()
        await db.refresh(experiment)
        logger.info(f"Created experiment {experiment.id} ({experiment.name})")
        return experiment

    @staticmethod
    @store_operation("LIST_EXPERIMENTS")
    async def get_experiments(db: AsyncSession) -> List[SearchExperiment]:
        result = await db.execute(
            select(SearchExperiment).order_by(SearchExperiment.created_at.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    @store_operation("GET_EXPERIMENT")
    async def get_experiment(db: AsyncSession, experiment_id: str) -> SearchExperiment:
        experiment = await db.get(SearchExperiment, experiment_id)
        if experiment is None:
            raise ResourceNotFoundError(f"Experiment {experiment_id} not found",
                                        {"experiment_id": experiment_id})
        return experiment

    @staticmethod
    @store_operation("UPDATE_EXPERIMENT")
    async def update_experiment(db: AsyncSession, experiment_id: str, data: Dict[str, Any]) -> SearchExperiment:
        experiment = await db.get(SearchExperiment, experiment_id)
        if experiment is None:
            raise ResourceNotFoundError(f"Experiment {experiment_id} not found",
                                        {"experiment_id": experiment_id})

        values = _columns(SearchExperiment, data)
        for key in ("id", "created_by", "created_at"):
            values.pop(key, None)
        for key, value in values.items():
            setattr(experiment, key, value)
        experiment.updated_at = utcnow()

        await db.commit()
        await db.refresh(experiment)
        return experiment

    @staticmethod
    @store_operation("DELETE_EXPERIMENT")
    async def delete_experiment(db: AsyncSession, experiment_id: str) -> None:
        experiment = await db.get(SearchExperiment, experiment_id)
        if experiment is None:
            raise ResourceNotFoundError(f"Experiment {experiment_id} not found",
                                        {"experiment_id": experiment_id})

        # explicit statements, so the cascade holds on backends without FK enforcement
        architecture_ids = select(NeuralArchitecture.id).where(NeuralArchitecture.experiment_id == experiment_id)
        await db.execute(delete(ArchitectureLayer).where(ArchitectureLayer.architecture_id.in_(architecture_ids)))
        await db.execute(delete(NeuralArchitecture).where(NeuralArchitecture.experiment_id == experiment_id))
        await db.execute(delete(SearchProgress).where(SearchProgress.experiment_id == experiment_id))
        await db.execute(
            update(AiConversation)
            .where(AiConversation.experiment_id == experiment_id)
            .values(experiment_id=None)
        )
        await db.execute(delete(SearchExperiment).where(SearchExperiment.id == experiment_id))
        await db.commit()
        db.expunge_all()
        logger.info(f"Deleted experiment {experiment_id}")

    @staticmethod
    @store_operation("EXPERIMENT_SUMMARY")
    async def get_experiment_summary(db: AsyncSession, experiment_id: str) -> Dict[str, Any]:
        result = await db.execute(experiment_summary().where(SearchExperiment.id == experiment_id))
        row = result.first()
        if row is None:
            raise ResourceNotFoundError(f"Experiment {experiment_id} not found",
                                        {"experiment_id": experiment_id})
        return summary_row_to_dict(row)

    # --- Architectures ---

    @staticmethod
    @store_operation("CREATE_ARCHITECTURE")
    async def create_architecture(db: AsyncSession, data: Dict[str, Any]) -> NeuralArchitecture:
        layers = data.get("layers") or []
        values = _columns(NeuralArchitecture, data)
        values.pop("id", None)
        if values.get("architecture_json") is None:
            values["architecture_json"] = {"layers": layers}
        if values.get("layer_count") is None and layers:
            values["layer_count"] = len(layers)

        architecture = NeuralArchitecture(**values)
        architecture.layers = [_layer_from_dict(index, layer) for index, layer in enumerate(layers)]
        db.add(architecture)
        await db.commit()
        logger.info(f"Created architecture {architecture.id} ({architecture.name})")
        return architecture

    @staticmethod
    @store_operation("LIST_ARCHITECTURES")
    async def get_architectures(db: AsyncSession, experiment_id: Optional[str] = None) -> List[NeuralArchitecture]:
        query = select(NeuralArchitecture)
        if experiment_id:
            query = query.where(NeuralArchitecture.experiment_id == experiment_id)
        query = query.order_by(
            NeuralArchitecture.overall_score.desc().nulls_last(),
            NeuralArchitecture.top1_accuracy.desc().nulls_last(),
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    @store_operation("TOP_ARCHITECTURES")
    async def get_top_architectures(db: AsyncSession, limit: int = 10) -> List[Dict[str, Any]]:
        result = await db.execute(architecture_leaderboard().limit(limit))
        return [leaderboard_row_to_dict(row) for row in result.all()]

    @staticmethod
    @store_operation("GET_ARCHITECTURE")
    async def get_architecture(db: AsyncSession, architecture_id: str) -> NeuralArchitecture:
        result = await db.execute(
            select(NeuralArchitecture)
            .options(selectinload(NeuralArchitecture.layers))
            .where(NeuralArchitecture.id == architecture_id)
        )
        architecture = result.scalar_one_or_none()
        if architecture is None:
            raise ResourceNotFoundError(f"Architecture {architecture_id} not found",
                                        {"architecture_id": architecture_id})
        return architecture

    # --- Search progress ---

    @staticmethod
    @store_operation("RECORD_PROGRESS")
    async def record_progress(db: AsyncSession, data: Dict[str, Any]) -> SearchProgress:
        values = _columns(SearchProgress, data)
        values.pop("id", None)
        progress = SearchProgress(**values)
        db.add(progress)
        await db.commit()
        return progress

    @staticmethod
    @store_operation("GET_PROGRESS")
    async def get_progress(db: AsyncSession, experiment_id: str) -> List[SearchProgress]:
        result = await db.execute(
            select(SearchProgress)
            .where(SearchProgress.experiment_id == experiment_id)
            .order_by(SearchProgress.iteration.asc())
        )
        return list(result.scalars().all())

    # --- Conversations ---

    @staticmethod
    @store_operation("SAVE_CONVERSATION")
    async def save_conversation(db: AsyncSession, data: Dict[str, Any]) -> AiConversation:
        values = _columns(AiConversation, data)
        values.pop("id", None)
        values["user_id"] = SYSTEM_OWNER
        conversation = AiConversation(**values)
        db.add(conversation)
        await db.commit()
        return conversation

    @staticmethod
    @store_operation("GET_CONVERSATIONS")
    async def get_conversations(db: AsyncSession, session_id: str) -> List[AiConversation]:
        result = await db.execute(
            select(AiConversation)
            .where(AiConversation.session_id == session_id)
            .order_by(AiConversation.created_at.asc())
        )
        return list(result.scalars().all())

    # --- Aggregates ---

    @staticmethod
    @store_operation("GLOBAL_STATS")
    async def get_global_stats() -> Dict[str, int]:
        session_factory = async_database.get_session_factory()

        async def count_rows(model) -> int:
            async with session_factory() as session:
                result = await session.execute(select(func.count()).select_from(model))
                return int(result.scalar_one() or 0)

        experiments, architectures, conversations = await asyncio.gather(
            count_rows(SearchExperiment),
            count_rows(NeuralArchitecture),
            count_rows(AiConversation),
        )
        return {
            "total_experiments": experiments,
            "total_architectures": architectures,
            "total_ai_conversations": conversations,
        }

    # --- User profiles ---

    @staticmethod
    @store_operation("GET_PROFILE")
    async def get_profile(db: AsyncSession, profile_id: str) -> UserProfile:
        profile = await db.get(UserProfile, profile_id)
        if profile is None:
            raise ResourceNotFoundError(f"Profile {profile_id} not found", {"profile_id": profile_id})
        return profile

    @staticmethod
    @store_operation("UPSERT_PROFILE")
    async def upsert_profile(db: AsyncSession, profile_id: str, data: Dict[str, Any]) -> UserProfile:
        values = _columns(UserProfile, data)
        for key in ("id", "created_at", "total_experiments", "total_architectures", "best_accuracy"):
            values.pop(key, None)

        profile = await db.get(UserProfile, profile_id)
        if profile is None:
            profile = UserProfile(id=profile_id, **values)
            db.add(profile)
        else:
            for key, value in values.items():
                setattr(profile, key, value)
            profile.updated_at = utcnow()

        await db.commit()
        await db.refresh(profile)
        return profile

    @staticmethod
    @store_operation("REFRESH_PROFILE_STATS")
    async def refresh_profile_stats(db: AsyncSession, profile_id: str) -> UserProfile:
        profile = await db.get(UserProfile, profile_id)
        if profile is None:
            raise ResourceNotFoundError(f"Profile {profile_id} not found", {"profile_id": profile_id})

        total_experiments = await db.scalar(
            select(func.count()).select_from(SearchExperiment).where(SearchExperiment.user_id == profile_id)
        )
        architecture_counts = await db.execute(
            select(func.count(NeuralArchitecture.id), func.max(NeuralArchitecture.top1_accuracy))
            .where(NeuralArchitecture.user_id == profile_id)
        )
        total_architectures, best_accuracy = architecture_counts.one()

        profile.total_experiments = int(total_experiments or 0)
        profile.total_architectures = int(total_architectures or 0)
        profile.best_accuracy = best_accuracy
        profile.updated_at = utcnow()

        await db.commit()
        await db.refresh(profile)
        return profile
