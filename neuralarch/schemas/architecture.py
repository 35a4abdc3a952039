from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional, Dict, Any
from datetime import datetime

from neuralarch.models.enums import ArchitectureStatus, DatasetType


class LayerIn(BaseModel):
    """One layer descriptor; keys beyond the typed ones become the layer_config"""
    type: Optional[str] = None
    layer_type: Optional[str] = None
    layer_config: Optional[Dict[str, Any]] = None
    input_shape: Optional[List[int]] = None
    output_shape: Optional[List[int]] = None
    parameters_count: Optional[int] = None
    flops_count: Optional[int] = None

    model_config = ConfigDict(extra="allow")


class ArchitectureCreate(BaseModel):
    experiment_id: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    architecture_json: Optional[Dict[str, Any]] = None
    # stored as architecture_layers rows, layer_index = position
    layers: Optional[List[LayerIn]] = None
    layer_count: Optional[int] = None
    total_parameters: Optional[int] = None
    flops: Optional[int] = None
    model_size_mb: Optional[float] = None
    generation: int = 1
    parent_ids: Optional[List[str]] = None
    user_id: Optional[str] = None
    top1_accuracy: Optional[float] = None
    top5_accuracy: Optional[float] = None
    validation_loss: Optional[float] = None
    training_time_hours: Optional[float] = None
    inference_latency_ms: Optional[float] = None
    memory_usage_mb: Optional[float] = None
    energy_consumption_kwh: Optional[float] = None
    overall_score: Optional[float] = None
    efficiency_ratio: Optional[float] = None
    pareto_rank: Optional[int] = None
    status: ArchitectureStatus = ArchitectureStatus.PENDING
    training_started_at: Optional[datetime] = None
    training_completed_at: Optional[datetime] = None


class ArchitectureLayerOut(BaseModel):
    id: str
    architecture_id: str
    layer_index: int
    layer_type: str
    layer_config: Dict[str, Any] = {}
    input_shape: Optional[List[int]] = None
    output_shape: Optional[List[int]] = None
    parameters_count: Optional[int] = None
    flops_count: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ArchitectureOut(BaseModel):
    id: str
    experiment_id: Optional[str] = None
    name: str
    description: Optional[str] = None
    architecture_json: Optional[Dict[str, Any]] = None
    layer_count: Optional[int] = None
    total_parameters: Optional[int] = None
    flops: Optional[int] = None
    model_size_mb: Optional[float] = None
    generation: Optional[int] = None
    parent_ids: Optional[List[str]] = None
    user_id: Optional[str] = None
    top1_accuracy: Optional[float] = None
    top5_accuracy: Optional[float] = None
    validation_loss: Optional[float] = None
    training_time_hours: Optional[float] = None
    inference_latency_ms: Optional[float] = None
    memory_usage_mb: Optional[float] = None
    energy_consumption_kwh: Optional[float] = None
    overall_score: Optional[float] = None
    efficiency_ratio: Optional[float] = None
    pareto_rank: Optional[int] = None
    status: Optional[ArchitectureStatus] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    training_started_at: Optional[datetime] = None
    training_completed_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ArchitectureDetailOut(ArchitectureOut):
    layers: List[ArchitectureLayerOut] = []


class LeaderboardEntry(BaseModel):
    id: str
    name: str
    top1_accuracy: Optional[float] = None
    total_parameters: Optional[int] = None
    flops: Optional[int] = None
    inference_latency_ms: Optional[float] = None
    overall_score: Optional[float] = None
    pareto_rank: Optional[int] = None
    experiment_name: str
    dataset: DatasetType
    created_at: Optional[datetime] = None
