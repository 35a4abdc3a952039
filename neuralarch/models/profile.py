# neuralarch/models/profile.py

from sqlalchemy import Column, Integer, String, Text, DateTime, Float, Enum as SQLAlchemyEnum
from ..db.database import Base
from .enums import SearchStrategy, DatasetType, enum_values
from .experiment import utcnow


class UserProfile(Base):
    __tablename__ = "user_profiles"

    # external identity, supplied by the caller
    id = Column(String(255), primary_key=True)
    email = Column(String(255), nullable=True)
    full_name = Column(String(255), nullable=True)
    avatar_url = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    total_experiments = Column(Integer, default=0)
    total_architectures = Column(Integer, default=0)
    best_accuracy = Column(Float, nullable=True)
    preferred_dataset = Column(
        SQLAlchemyEnum(DatasetType, name="dataset_type", values_callable=enum_values),
        default=DatasetType.IMAGENET
    )
    preferred_strategy = Column(
        SQLAlchemyEnum(SearchStrategy, name="search_strategy", values_callable=enum_values),
        default=SearchStrategy.EVOLUTIONARY
    )

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "full_name": self.full_name,
            "avatar_url": self.avatar_url,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "total_experiments": self.total_experiments,
            "total_architectures": self.total_architectures,
            "best_accuracy": self.best_accuracy,
            "preferred_dataset": self.preferred_dataset.value if self.preferred_dataset else None,
            "preferred_strategy": self.preferred_strategy.value if self.preferred_strategy else None,
        }
