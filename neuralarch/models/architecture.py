# neuralarch/models/architecture.py

from sqlalchemy import (
    Column, Integer, BigInteger, String, Text, DateTime, Float, JSON, ForeignKey,
    Enum as SQLAlchemyEnum
)
from sqlalchemy.orm import relationship
from ..db.database import Base
from .enums import ArchitectureStatus, enum_values
from .experiment import utcnow, new_uuid


class NeuralArchitecture(Base):
    __tablename__ = "neural_architectures"

    id = Column(String(36), primary_key=True, default=new_uuid)
    experiment_id = Column(
        String(36), ForeignKey("search_experiments.id", ondelete="CASCADE"), index=True, nullable=True
    )
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    architecture_json = Column(JSON, nullable=False, default=dict)
    layer_count = Column(Integer, nullable=True)
    total_parameters = Column(BigInteger, nullable=True)
    flops = Column(BigInteger, nullable=True)
    model_size_mb = Column(Float, nullable=True)
    generation = Column(Integer, default=1)
    # lineage only, ids are not enforced as foreign keys
    parent_ids = Column(JSON, nullable=True)
    user_id = Column(String(255), index=True, nullable=True)

    top1_accuracy = Column(Float, nullable=True)
    top5_accuracy = Column(Float, nullable=True)
    validation_loss = Column(Float, nullable=True)
    training_time_hours = Column(Float, nullable=True)
    inference_latency_ms = Column(Float, nullable=True)
    memory_usage_mb = Column(Float, nullable=True)
    energy_consumption_kwh = Column(Float, nullable=True)

    overall_score = Column(Float, nullable=True)
    efficiency_ratio = Column(Float, nullable=True)
    pareto_rank = Column(Integer, nullable=True)

    status = Column(
        SQLAlchemyEnum(ArchitectureStatus, name="architecture_status", values_callable=enum_values),
        default=ArchitectureStatus.PENDING
    )
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
    training_started_at = Column(DateTime(timezone=True), nullable=True)
    training_completed_at = Column(DateTime(timezone=True), nullable=True)

    experiment = relationship("SearchExperiment", back_populates="architectures")
    layers = relationship(
        "ArchitectureLayer", back_populates="architecture",
        cascade="all, delete-orphan", passive_deletes=True,
        order_by="ArchitectureLayer.layer_index"
    )

    def to_dict(self, include_layers: bool = False):
        """Convert SQLAlchemy model to dictionary for serialization"""
        data = {
            "id": self.id,
            "experiment_id": self.experiment_id,
            "name": self.name,
            "description": self.description,
            "architecture_json": self.architecture_json,
            "layer_count": self.layer_count,
            "total_parameters": self.total_parameters,
            "flops": self.flops,
            "model_size_mb": self.model_size_mb,
            "generation": self.generation,
            "parent_ids": self.parent_ids,
            "user_id": self.user_id,
            "top1_accuracy": self.top1_accuracy,
            "top5_accuracy": self.top5_accuracy,
            "validation_loss": self.validation_loss,
            "training_time_hours": self.training_time_hours,
            "inference_latency_ms": self.inference_latency_ms,
            "memory_usage_mb": self.memory_usage_mb,
            "energy_consumption_kwh": self.energy_consumption_kwh,
            "overall_score": self.overall_score,
            "efficiency_ratio": self.efficiency_ratio,
            "pareto_rank": self.pareto_rank,
            "status": self.status.value if self.status else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "training_started_at": self.training_started_at.isoformat() if self.training_started_at else None,
            "training_completed_at": self.training_completed_at.isoformat() if self.training_completed_at else None,
        }
        if include_layers:
            data["layers"] = [layer.to_dict() for layer in self.layers]
        return data


class ArchitectureLayer(Base):
    __tablename__ = "architecture_layers"

    id = Column(String(36), primary_key=True, default=new_uuid)
    architecture_id = Column(
        String(36), ForeignKey("neural_architectures.id", ondelete="CASCADE"), index=True, nullable=False
    )
    layer_index = Column(Integer, nullable=False)
    layer_type = Column(String(100), nullable=False)  # conv2d, mbconv, dense, ...
    layer_config = Column(JSON, nullable=False, default=dict)
    input_shape = Column(JSON, nullable=True)
    output_shape = Column(JSON, nullable=True)
    parameters_count = Column(Integer, nullable=True)
    flops_count = Column(BigInteger, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    architecture = relationship("NeuralArchitecture", back_populates="layers")

    def to_dict(self):
        return {
            "id": self.id,
            "architecture_id": self.architecture_id,
            "layer_index": self.layer_index,
            "layer_type": self.layer_type,
            "layer_config": self.layer_config,
            "input_shape": self.input_shape,
            "output_shape": self.output_shape,
            "parameters_count": self.parameters_count,
            "flops_count": self.flops_count,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
