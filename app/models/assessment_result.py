"""
AssessmentResult model - immutable record of one graded submission
"""
from sqlalchemy import Column, String, Text, Integer, Float, TIMESTAMP, Uuid, ForeignKey
from app.database import Base, JSONType, utcnow
import uuid


class AssessmentResult(Base):
    """
    Assessment results table - append-only history per user
    """
    __tablename__ = "assessment_results"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    assessment_id = Column(Uuid, ForeignKey("assessments.id"), nullable=False, index=True)
    score = Column(Float, nullable=False)
    max_score = Column(Float, nullable=False)
    percentage = Column(Integer, nullable=False)
    answers = Column(JSONType, nullable=False)  # [{question_id, user_answer, is_correct}]
    literacy_level = Column(String(20), nullable=False)
    feedback = Column(Text)
    completed_at = Column(TIMESTAMP(timezone=True), default=utcnow, index=True)

    def __repr__(self):
        return f"<AssessmentResult(user_id={self.user_id}, assessment_id={self.assessment_id}, percentage={self.percentage})>"
