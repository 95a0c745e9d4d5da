"""
Pydantic schemas for dashboard endpoints
"""
from pydantic import BaseModel
from typing import List, Dict
from uuid import UUID

from app.schemas.assessment import AssessmentResultResponse
from app.schemas.module import ProgressResponse
from app.schemas.user import UserResponse


class StudentStats(BaseModel):
    assessments_completed: int
    average_score: int
    modules_in_progress: int
    modules_completed: int


class StudentDashboard(BaseModel):
    """Dashboard for the calling student"""
    user: UserResponse
    stats: StudentStats
    recent_results: List[AssessmentResultResponse]
    module_progress: List[ProgressResponse]


class StudentPerformance(BaseModel):
    """Per-student summary on the teacher dashboard"""
    user_id: UUID
    student_name: str
    assessment_count: int
    average_score: int


class TeacherStats(BaseModel):
    total_students: int
    average_class_score: int
    assessments_given: int


class TeacherDashboard(BaseModel):
    stats: TeacherStats
    student_performance: List[StudentPerformance]
    progress_overview: List[ProgressResponse]


class AdminStats(BaseModel):
    total_users: int
    total_assessments: int
    average_score: int


class AdminDashboard(BaseModel):
    stats: AdminStats
    literacy_distribution: Dict[str, int]
    users_by_role: Dict[str, int]
    recent_users: List[UserResponse]
