"""
ModuleProgress model - per (user, module) lesson completion
"""
from sqlalchemy import Column, Integer, TIMESTAMP, Uuid, ForeignKey, UniqueConstraint
from app.database import Base, JSONType
import uuid


class ModuleProgress(Base):
    """
    Module progress table - one mutable row per (user, module) pair
    """
    __tablename__ = "module_progress"
    __table_args__ = (UniqueConstraint("user_id", "module_id", name="uq_module_progress_user_module"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    module_id = Column(Uuid, ForeignKey("learning_modules.id"), nullable=False, index=True)
    lessons_completed = Column(JSONType, nullable=False, default=list)  # set semantics, insertion ordered
    completion_percentage = Column(Integer, nullable=False, default=0)
    started_at = Column(TIMESTAMP(timezone=True))
    completed_at = Column(TIMESTAMP(timezone=True))  # set once, never cleared
    last_accessed_at = Column(TIMESTAMP(timezone=True))

    def __repr__(self):
        return f"<ModuleProgress(user_id={self.user_id}, module_id={self.module_id}, pct={self.completion_percentage})>"
