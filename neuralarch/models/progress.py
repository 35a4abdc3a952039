# neuralarch/models/progress.py

from sqlalchemy import Column, Integer, String, Text, DateTime, Float, ForeignKey
from sqlalchemy.orm import relationship
from ..db.database import Base
from .experiment import utcnow, new_uuid


class SearchProgress(Base):
    __tablename__ = "search_progress"

    id = Column(String(36), primary_key=True, default=new_uuid)
    experiment_id = Column(
        String(36), ForeignKey("search_experiments.id", ondelete="CASCADE"), index=True, nullable=False
    )
    iteration = Column(Integer, nullable=False)
    generation = Column(Integer, nullable=True)
    best_accuracy_so_far = Column(Float, nullable=True)
    average_accuracy = Column(Float, nullable=True)
    architectures_evaluated = Column(Integer, nullable=True)
    time_elapsed_hours = Column(Float, nullable=True)
    cpu_usage_percent = Column(Float, nullable=True)
    gpu_usage_percent = Column(Float, nullable=True)
    memory_usage_gb = Column(Float, nullable=True)
    convergence_metric = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    experiment = relationship("SearchExperiment", back_populates="progress_entries")

    def to_dict(self):
        return {
            "id": self.id,
            "experiment_id": self.experiment_id,
            "iteration": self.iteration,
            "generation": self.generation,
            "best_accuracy_so_far": self.best_accuracy_so_far,
            "average_accuracy": self.average_accuracy,
            "architectures_evaluated": self.architectures_evaluated,
            "time_elapsed_hours": self.time_elapsed_hours,
            "cpu_usage_percent": self.cpu_usage_percent,
            "gpu_usage_percent": self.gpu_usage_percent,
            "memory_usage_gb": self.memory_usage_gb,
            "convergence_metric": self.convergence_metric,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
