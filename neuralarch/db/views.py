# neuralarch/db/views.py
#
# Read-only derived views, built as select() constructs so they run on any backend.

import enum
from datetime import datetime
from typing import Any, Dict

from sqlalchemy import select, func

from neuralarch.models import NeuralArchitecture, SearchExperiment, ArchitectureStatus


def architecture_leaderboard():
    """Completed architectures joined with their experiment, best first"""
    return (
        select(
            NeuralArchitecture.id,
            NeuralArchitecture.name,
            NeuralArchitecture.top1_accuracy,
            NeuralArchitecture.total_parameters,
            NeuralArchitecture.flops,
            NeuralArchitecture.inference_latency_ms,
            NeuralArchitecture.overall_score,
            NeuralArchitecture.pareto_rank,
            SearchExperiment.name.label("experiment_name"),
            SearchExperiment.dataset,
            NeuralArchitecture.created_at,
        )
        .join(SearchExperiment, NeuralArchitecture.experiment_id == SearchExperiment.id)
        .where(NeuralArchitecture.status == ArchitectureStatus.COMPLETED)
        .order_by(
            NeuralArchitecture.overall_score.desc().nulls_last(),
            NeuralArchitecture.top1_accuracy.desc().nulls_last(),
        )
    )


def experiment_summary():
    """Every experiment with aggregates over its architectures (outer join)"""
    return (
        select(
            SearchExperiment,
            func.count(NeuralArchitecture.id).label("total_architectures"),
            func.max(NeuralArchitecture.top1_accuracy).label("best_accuracy_found"),
            func.avg(NeuralArchitecture.top1_accuracy).label("average_accuracy"),
            func.min(NeuralArchitecture.inference_latency_ms).label("fastest_latency"),
            func.max(NeuralArchitecture.created_at).label("last_architecture_created"),
        )
        .outerjoin(NeuralArchitecture, NeuralArchitecture.experiment_id == SearchExperiment.id)
        .group_by(SearchExperiment.id)
    )


def _plain(value: Any) -> Any:
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def leaderboard_row_to_dict(row) -> Dict[str, Any]:
    return {key: _plain(value) for key, value in row._mapping.items()}


def summary_row_to_dict(row) -> Dict[str, Any]:
    experiment, total, best, average, fastest, last_created = row
    data = experiment.to_dict()
    data.update({
        "total_architectures": int(total or 0),
        "best_accuracy_found": best,
        "average_accuracy": float(average) if average is not None else None,
        "fastest_latency": fastest,
        "last_architecture_created": _plain(last_created),
    })
    return data
