"""
Pydantic schemas for learning modules and progress
"""
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional
from uuid import UUID
from datetime import datetime

from app.schemas.assessment import check_skill_category, reject_cleared_fields


class Lesson(BaseModel):
    """Single lesson inside a module"""
    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    content: Optional[str] = None
    video_url: Optional[str] = None
    resource_url: Optional[str] = None


def check_unique_lessons(lessons: Optional[List[Lesson]]) -> Optional[List[Lesson]]:
    if lessons is None:
        return lessons
    ids = [lesson.id for lesson in lessons]
    if len(ids) != len(set(ids)):
        raise ValueError("Lesson ids must be unique within a module")
    return lessons


class ModuleCreate(BaseModel):
    """Schema for authoring a new learning module"""
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    skill_level: str = "basic"
    lessons: List[Lesson] = []
    duration: Optional[int] = Field(None, ge=0, description="Duration in minutes")
    order: int = 0

    @field_validator("skill_level")
    @classmethod
    def known_skill_level(cls, v):
        return check_skill_category(v)

    @field_validator("lessons")
    @classmethod
    def unique_lesson_ids(cls, v):
        return check_unique_lessons(v)


class ModuleUpdate(BaseModel):
    """Partial module update; supplied lessons replace the whole list"""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    skill_level: Optional[str] = None
    lessons: Optional[List[Lesson]] = None
    duration: Optional[int] = Field(None, ge=0)
    order: Optional[int] = None

    @field_validator("skill_level")
    @classmethod
    def known_skill_level(cls, v):
        return check_skill_category(v)

    @field_validator("lessons")
    @classmethod
    def unique_lesson_ids(cls, v):
        return check_unique_lessons(v)

    @model_validator(mode="after")
    def only_duration_clears(self):
        return reject_cleared_fields(self, nullable={"duration"})


class ModuleResponse(BaseModel):
    id: UUID
    title: str
    description: Optional[str] = None
    skill_level: str
    lessons: List[Lesson]
    duration: Optional[int] = None
    order: Optional[int] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class LessonCompletion(BaseModel):
    """Schema for marking a lesson complete"""
    module_id: UUID
    lesson_id: str = Field(..., min_length=1)


class ProgressResponse(BaseModel):
    """Progress of one user through one module"""
    id: UUID
    user_id: UUID
    module_id: UUID
    lessons_completed: List[str]
    completion_percentage: int
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    last_accessed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class StudentModuleProgress(BaseModel):
    student_name: Optional[str] = None
    student_email: Optional[str] = None
    completion_percentage: int
    lessons_completed: int
    last_accessed: Optional[datetime] = None


class ModuleStatistics(BaseModel):
    """Aggregated progress for one module"""
    module_id: UUID
    title: str
    total_lessons: int
    total_students: int
    completed_students: int
    in_progress: int
    average_completion: int
    student_progress: List[StudentModuleProgress]
