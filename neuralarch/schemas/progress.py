from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime


class ProgressCreate(BaseModel):
    experiment_id: str
    iteration: int
    generation: Optional[int] = None
    best_accuracy_so_far: Optional[float] = None
    average_accuracy: Optional[float] = None
    architectures_evaluated: Optional[int] = None
    time_elapsed_hours: Optional[float] = None
    cpu_usage_percent: Optional[float] = None
    gpu_usage_percent: Optional[float] = None
    memory_usage_gb: Optional[float] = None
    convergence_metric: Optional[float] = None
    notes: Optional[str] = None


class ProgressOut(ProgressCreate):
    id: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
