"""
Database models package
"""
from app.models.enums import UserRole, LiteracyLevel
from app.models.user import User
from app.models.assessment import Assessment
from app.models.assessment_result import AssessmentResult
from app.models.learning_module import LearningModule
from app.models.module_progress import ModuleProgress

__all__ = [
    "UserRole",
    "LiteracyLevel",
    "User",
    "Assessment",
    "AssessmentResult",
    "LearningModule",
    "ModuleProgress",
]
