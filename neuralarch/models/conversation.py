# neuralarch/models/conversation.py

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum as SQLAlchemyEnum
from sqlalchemy.orm import relationship
from ..db.database import Base
from .enums import MessageRole, enum_values
from .experiment import utcnow, new_uuid


class AiConversation(Base):
    __tablename__ = "ai_conversations"

    id = Column(String(36), primary_key=True, default=new_uuid)
    # conversations outlive their experiment
    experiment_id = Column(
        String(36), ForeignKey("search_experiments.id", ondelete="SET NULL"), index=True, nullable=True
    )
    session_id = Column(String(255), index=True, nullable=True)
    message_role = Column(
        SQLAlchemyEnum(MessageRole, name="message_role", values_callable=enum_values), nullable=False
    )
    message_content = Column(Text, nullable=False)
    ai_model = Column(String(100), default="neuralarch-assistant")
    response_time_ms = Column(Integer, nullable=True)
    tokens_used = Column(Integer, nullable=True)
    user_id = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    experiment = relationship("SearchExperiment", back_populates="conversations")

    def to_dict(self):
        return {
            "id": self.id,
            "experiment_id": self.experiment_id,
            "session_id": self.session_id,
            "message_role": self.message_role.value if self.message_role else None,
            "message_content": self.message_content,
            "ai_model": self.ai_model,
            "response_time_ms": self.response_time_ms,
            "tokens_used": self.tokens_used,
            "user_id": self.user_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
