from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime

from neuralarch.models.enums import SearchStrategy, DatasetType, ArchitectureStatus


class ExperimentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    strategy: SearchStrategy = SearchStrategy.EVOLUTIONARY
    dataset: DatasetType = DatasetType.IMAGENET
    search_budget: int = 100
    population_size: int = 50
    max_epochs: int = 200
    target_accuracy: Optional[float] = None
    target_latency: Optional[float] = None
    status: ArchitectureStatus = ArchitectureStatus.PENDING
    # accepted but always replaced by the system owner
    created_by: Optional[str] = None
    user_id: Optional[str] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    total_architectures_tested: int = 0
    best_accuracy: Optional[float] = None
    search_time_hours: Optional[float] = None
    gpu_hours: Optional[float] = None
    convergence_status: str = "running"


class ExperimentUpdate(BaseModel):
    """Partial update; status and convergence_status are free values"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    strategy: Optional[SearchStrategy] = None
    dataset: Optional[DatasetType] = None
    search_budget: Optional[int] = None
    population_size: Optional[int] = None
    max_epochs: Optional[int] = None
    target_accuracy: Optional[float] = None
    target_latency: Optional[float] = None
    status: Optional[ArchitectureStatus] = None
    user_id: Optional[str] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    total_architectures_tested: Optional[int] = None
    best_accuracy: Optional[float] = None
    search_time_hours: Optional[float] = None
    gpu_hours: Optional[float] = None
    convergence_status: Optional[str] = None


class ExperimentOut(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    strategy: SearchStrategy
    dataset: DatasetType
    search_budget: Optional[int] = None
    population_size: Optional[int] = None
    max_epochs: Optional[int] = None
    target_accuracy: Optional[float] = None
    target_latency: Optional[float] = None
    status: Optional[ArchitectureStatus] = None
    created_by: Optional[str] = None
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    total_architectures_tested: Optional[int] = None
    best_accuracy: Optional[float] = None
    search_time_hours: Optional[float] = None
    gpu_hours: Optional[float] = None
    convergence_status: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ExperimentSummaryOut(ExperimentOut):
    total_architectures: int = 0
    best_accuracy_found: Optional[float] = None
    average_accuracy: Optional[float] = None
    fastest_latency: Optional[float] = None
    last_architecture_created: Optional[datetime] = None
