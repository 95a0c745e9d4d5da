"""
LearningModule model - a bundle of lessons
"""
from sqlalchemy import Column, String, Text, Integer, TIMESTAMP, Uuid
from app.database import Base, JSONType, utcnow
import uuid


class LearningModule(Base):
    """
    Learning modules table - lessons stored as a JSON array of
    {id, title, content, video_url, resource_url}
    """
    __tablename__ = "learning_modules"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    skill_level = Column(String(50), nullable=False, default="basic")
    lessons = Column(JSONType, nullable=False, default=list)
    duration = Column(Integer)  # minutes
    order = Column(Integer, default=0)
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow)

    @property
    def lesson_ids(self):
        return [lesson.get("id") for lesson in self.lessons or []]

    def __repr__(self):
        return f"<LearningModule(id={self.id}, title={self.title})>"
