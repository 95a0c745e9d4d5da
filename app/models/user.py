"""
User model - platform accounts with role and current literacy tier
"""
from sqlalchemy import Column, String, TIMESTAMP, Uuid
from app.database import Base, utcnow
from app.models.enums import UserRole, LiteracyLevel
import uuid


class User(Base):
    """
    Users table

    literacy_level is a denormalized copy of the tier of the user's most
    recent assessment result; it is written in the same transaction as
    that result and never merged with earlier history.
    """
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255))
    role = Column(String(20), nullable=False, default=UserRole.STUDENT.value)
    literacy_level = Column(String(20), nullable=False, default=LiteracyLevel.NOT_TESTED.value)
    profile_picture = Column(String(512))
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow)

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
