"""
Pydantic schemas for users
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from uuid import UUID
from datetime import datetime

from app.models import UserRole


class UserCreate(BaseModel):
    """Schema for registering a user"""
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    name: str = Field(..., min_length=1, max_length=255)
    role: UserRole = UserRole.STUDENT

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v):
        return v.lower()


class UserUpdate(BaseModel):
    """Profile fields a user may change"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    profile_picture: Optional[str] = Field(None, max_length=512)


class UserResponse(BaseModel):
    id: UUID
    email: str
    name: Optional[str] = None
    role: str
    literacy_level: str
    profile_picture: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
