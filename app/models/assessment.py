"""
Assessment model - owns its question bank
"""
from sqlalchemy import Column, String, Text, Integer, Float, Boolean, TIMESTAMP, Uuid
from app.database import Base, JSONType, utcnow
import uuid


class Assessment(Base):
    """
    Assessments table - question bank stored as a JSON array of
    {id, question, options, correct_answer, explanation}
    """
    __tablename__ = "assessments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    skill_category = Column(String(50), nullable=False, default="basic")
    questions = Column(JSONType, nullable=False, default=list)
    total_points = Column(Float, nullable=False, default=100.0)
    time_limit = Column(Integer)  # minutes
    is_ai_generated = Column(Boolean, nullable=False, default=False)
    created_by = Column(Uuid)
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<Assessment(id={self.id}, title={self.title})>"
