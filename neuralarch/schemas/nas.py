from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional, Dict, Any

from neuralarch.nas_engine.search_simulator import MAX_PARALLEL


class Descriptor(BaseModel):
    """Free-form JSON object whose known keys are typed; unknown keys pass through"""

    model_config = ConfigDict(populate_by_name=True, extra="allow")


def to_payload(value):
    """Plain dicts (camelCase keys, unset fields dropped) for the nas_engine generators"""
    if value is None:
        return None
    if isinstance(value, list):
        return [to_payload(item) for item in value]
    return value.model_dump(by_alias=True, exclude_unset=True)


class LayerSpec(Descriptor):
    type: Optional[str] = None
    filters: Optional[int] = None
    kernel_size: Optional[int] = None
    units: Optional[int] = None
    input_size: Optional[int] = None
    features: Optional[int] = None
    rate: Optional[float] = None
    activation: Optional[str] = None
    separable: Optional[bool] = None
    # batch dimension may be null
    input_shape: Optional[List[Optional[int]]] = None


class ArchitectureSpec(Descriptor):
    name: Optional[str] = None
    layers: Optional[List[LayerSpec]] = None
    parameters: Optional[int] = None


class Constraints(Descriptor):
    max_params: Optional[float] = Field(None, alias="maxParams")
    target_latency: Optional[float] = Field(None, alias="targetLatency")
    target_accuracy: Optional[float] = Field(None, alias="targetAccuracy")


class SearchSpace(Descriptor):
    layers: Optional[List[str]] = None
    optimizers: Optional[List[str]] = None
    learning_rates: Optional[List[float]] = Field(None, alias="learningRates")
    batch_sizes: Optional[List[int]] = Field(None, alias="batchSizes")


class CandidateSpec(Descriptor):
    """A known architecture: comparison entry or search seed"""
    name: Optional[str] = None
    layers: Optional[List[LayerSpec]] = None
    score: Optional[float] = None
    accuracy: Optional[float] = None
    parameters: Optional[int] = None
    latency: Optional[float] = None
    efficiency: Optional[float] = None


class Budget(Descriptor):
    max_evaluations: Optional[int] = Field(None, ge=0, alias="maxEvaluations")
    max_time: Optional[float] = Field(None, ge=0, alias="maxTime")
    parallel: Optional[int] = Field(None, ge=0, le=MAX_PARALLEL)


class NASRequest(BaseModel):
    operation: Optional[str] = None
    architecture: Optional[ArchitectureSpec] = None
    constraints: Optional[Constraints] = None
    dataset: Optional[str] = None
    search_space: Optional[SearchSpace] = Field(None, alias="searchSpace")
    current_best: Optional[List[CandidateSpec]] = Field(None, alias="currentBest")

    model_config = ConfigDict(populate_by_name=True)


class OptimizationStartRequest(BaseModel):
    algorithm: Optional[str] = None
    search_space: Optional[SearchSpace] = Field(None, alias="searchSpace")
    constraints: Optional[Constraints] = None
    objectives: Optional[Dict[str, Any]] = None
    budget: Optional[Budget] = None
    current_best: Optional[List[CandidateSpec]] = Field(None, alias="currentBest")

    model_config = ConfigDict(populate_by_name=True)


class OptimizationUpdateRequest(BaseModel):
    action: Optional[str] = None
    parameters: Optional[Dict[str, Any]] = None


class ExternalAIInput(Descriptor):
    architecture: Optional[ArchitectureSpec] = None


class ExternalAIRequest(BaseModel):
    service: Optional[str] = None
    task: Optional[str] = None
    payload: Optional[ExternalAIInput] = Field(None, alias="input")
    parameters: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(populate_by_name=True)
