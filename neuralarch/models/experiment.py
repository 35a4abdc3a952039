# neuralarch/models/experiment.py

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, DateTime, Float, Enum as SQLAlchemyEnum
from sqlalchemy.orm import relationship
from ..db.database import Base
from .enums import SearchStrategy, DatasetType, ArchitectureStatus, enum_values


def utcnow():
    return datetime.now(timezone.utc)


def new_uuid():
    return str(uuid.uuid4())


class SearchExperiment(Base):
    __tablename__ = "search_experiments"

    id = Column(String(36), primary_key=True, default=new_uuid)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    strategy = Column(
        SQLAlchemyEnum(SearchStrategy, name="search_strategy", values_callable=enum_values),
        nullable=False, default=SearchStrategy.EVOLUTIONARY
    )
    dataset = Column(
        SQLAlchemyEnum(DatasetType, name="dataset_type", values_callable=enum_values),
        nullable=False, default=DatasetType.IMAGENET
    )
    search_budget = Column(Integer, default=100)
    population_size = Column(Integer, default=50)
    max_epochs = Column(Integer, default=200)
    target_accuracy = Column(Float, nullable=True)
    target_latency = Column(Float, nullable=True)
    # no transition guard, any status may be written at any time
    status = Column(
        SQLAlchemyEnum(ArchitectureStatus, name="architecture_status", values_callable=enum_values),
        default=ArchitectureStatus.PENDING
    )
    created_by = Column(String(255), nullable=True)
    user_id = Column(String(255), index=True, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
    started_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    total_architectures_tested = Column(Integer, default=0)
    best_accuracy = Column(Float, nullable=True)
    search_time_hours = Column(Float, nullable=True)
    gpu_hours = Column(Float, nullable=True)
    convergence_status = Column(String(50), default="running")

    architectures = relationship(
        "NeuralArchitecture", back_populates="experiment",
        cascade="all, delete-orphan", passive_deletes=True
    )
    progress_entries = relationship(
        "SearchProgress", back_populates="experiment",
        cascade="all, delete-orphan", passive_deletes=True
    )
    conversations = relationship("AiConversation", back_populates="experiment", passive_deletes=True)

    def to_dict(self):
        """Convert SQLAlchemy model to dictionary for serialization"""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "strategy": self.strategy.value if self.strategy else None,
            "dataset": self.dataset.value if self.dataset else None,
            "search_budget": self.search_budget,
            "population_size": self.population_size,
            "max_epochs": self.max_epochs,
            "target_accuracy": self.target_accuracy,
            "target_latency": self.target_latency,
            "status": self.status.value if self.status else None,
            "created_by": self.created_by,
            "user_id": self.user_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "total_architectures_tested": self.total_architectures_tested,
            "best_accuracy": self.best_accuracy,
            "search_time_hours": self.search_time_hours,
            "gpu_hours": self.gpu_hours,
            "convergence_status": self.convergence_status,
        }
