"""
Analytics service for dashboards and content statistics
"""
import logging
from typing import Dict, List, Any, Optional
from sqlalchemy.orm import Session
from uuid import UUID
from collections import defaultdict
from app.models import (
    User,
    UserRole,
    LiteracyLevel,
    Assessment,
    AssessmentResult,
    LearningModule,
    ModuleProgress,
)
from app.schemas.assessment import AssessmentResultResponse
from app.services.grading_service import round_half_up
from app.services.literacy_service import literacy_service

logger = logging.getLogger(__name__)


def average_percentage(values: List[int]) -> int:
    """Rounded mean of integer percentages, 0 for no values"""
    if not values:
        return 0
    return round_half_up(sum(values) / len(values))


class AnalyticsService:
    """Service for dashboard aggregation and per-content statistics"""

    RECENT_RESULTS = 5
    RECENT_ATTEMPTS = 10
    RECENT_USERS = 10

    def get_student_dashboard(self, db: Session, user: User) -> Dict[str, Any]:
        """
        Dashboard for one student

        Args:
            db: Database session
            user: Calling user

        Returns:
            Dictionary with user summary, stats, recent results and module progress
        """
        rows = db.query(AssessmentResult, Assessment.title).outerjoin(
            Assessment, Assessment.id == AssessmentResult.assessment_id
        ).filter(
            AssessmentResult.user_id == user.id
        ).order_by(AssessmentResult.completed_at.desc()).all()
        results = [result for result, _ in rows]

        progress_records = db.query(ModuleProgress).filter(
            ModuleProgress.user_id == user.id
        ).all()

        return {
            "user": user,
            "stats": {
                "assessments_completed": len(results),
                "average_score": average_percentage([r.percentage for r in results]),
                "modules_in_progress": sum(1 for p in progress_records if p.completion_percentage < 100),
                "modules_completed": sum(1 for p in progress_records if p.completion_percentage == 100),
            },
            "recent_results": [
                AssessmentResultResponse.from_result(result, title)
                for result, title in rows[:self.RECENT_RESULTS]
            ],
            "module_progress": progress_records,
        }

    def get_teacher_dashboard(self, db: Session) -> Dict[str, Any]:
        """Class-wide performance, restricted to student accounts"""

        students = {
            u.id: u for u in db.query(User).filter(User.role == UserRole.STUDENT.value).all()
        }

        results = db.query(AssessmentResult).filter(
            AssessmentResult.user_id.in_(list(students.keys()))
        ).all() if students else []

        percentages_by_student = defaultdict(list)
        for result in results:
            percentages_by_student[result.user_id].append(result.percentage)

        student_performance = [
            {
                "user_id": user_id,
                "student_name": students[user_id].name or students[user_id].email,
                "assessment_count": len(percentages),
                "average_score": average_percentage(percentages),
            }
            for user_id, percentages in percentages_by_student.items()
        ]
        student_performance.sort(key=lambda s: s["student_name"])

        progress_overview = db.query(ModuleProgress).filter(
            ModuleProgress.user_id.in_(list(students.keys()))
        ).all() if students else []

        return {
            "stats": {
                "total_students": len(student_performance),
                "average_class_score": average_percentage(
                    [s["average_score"] for s in student_performance]
                ),
                "assessments_given": len(results),
            },
            "student_performance": student_performance,
            "progress_overview": progress_overview,
        }

    def get_admin_dashboard(self, db: Session) -> Dict[str, Any]:
        """Platform-wide user and result totals"""

        users = db.query(User).order_by(User.created_at.desc()).all()
        percentages = [row[0] for row in db.query(AssessmentResult.percentage).all()]

        literacy_distribution = {
            level.value: sum(1 for u in users if u.literacy_level == level.value)
            for level in (LiteracyLevel.LITERATE, LiteracyLevel.SEMI_LITERATE, LiteracyLevel.ILLITERATE)
        }

        users_by_role = {
            "students": sum(1 for u in users if u.role == UserRole.STUDENT.value),
            "teachers": sum(1 for u in users if u.role == UserRole.TEACHER.value),
            "admins": sum(1 for u in users if u.role == UserRole.ADMIN.value),
        }

        return {
            "stats": {
                "total_users": len(users),
                "total_assessments": len(percentages),
                "average_score": average_percentage(percentages),
            },
            "literacy_distribution": literacy_distribution,
            "users_by_role": users_by_role,
            "recent_users": users[:self.RECENT_USERS],
        }

    def get_assessment_statistics(self, db: Session, assessment_id: UUID) -> Optional[Dict[str, Any]]:
        """
        Attempt statistics for one assessment

        Returns:
            Dictionary with statistics, or None if the assessment does not exist
        """
        assessment = db.query(Assessment).filter(Assessment.id == assessment_id).first()
        if not assessment:
            return None

        rows = db.query(AssessmentResult, User).outerjoin(
            User, User.id == AssessmentResult.user_id
        ).filter(
            AssessmentResult.assessment_id == assessment_id
        ).order_by(AssessmentResult.completed_at.desc()).all()

        percentages = [result.percentage for result, _ in rows]

        distribution = {"literate": 0, "semi_literate": 0, "illiterate": 0}
        for percentage in percentages:
            level = literacy_service.classify(percentage)
            distribution[level.value.replace("-", "_")] += 1

        return {
            "assessment_id": str(assessment.id),
            "title": assessment.title,
            "total_questions": len(assessment.questions or []),
            "total_attempts": len(rows),
            "average_score": average_percentage(percentages),
            "score_distribution": distribution,
            "highest_score": max(percentages) if percentages else 0,
            "lowest_score": min(percentages) if percentages else 0,
            "recent_results": [
                {
                    "student_name": user.name if user else None,
                    "student_email": user.email if user else None,
                    "score": result.percentage,
                    "completed_at": result.completed_at,
                }
                for result, user in rows[:self.RECENT_ATTEMPTS]
            ],
        }

    def get_module_statistics(self, db: Session, module_id: UUID) -> Optional[Dict[str, Any]]:
        """
        Completion statistics for one learning module

        Returns:
            Dictionary with statistics, or None if the module does not exist
        """
        module = db.query(LearningModule).filter(LearningModule.id == module_id).first()
        if not module:
            return None

        rows = db.query(ModuleProgress, User).outerjoin(
            User, User.id == ModuleProgress.user_id
        ).filter(ModuleProgress.module_id == module_id).all()

        total_students = len(rows)
        completed_students = sum(1 for progress, _ in rows if progress.completion_percentage == 100)

        return {
            "module_id": str(module.id),
            "title": module.title,
            "total_lessons": len(module.lessons or []),
            "total_students": total_students,
            "completed_students": completed_students,
            "in_progress": total_students - completed_students,
            "average_completion": average_percentage(
                [progress.completion_percentage for progress, _ in rows]
            ),
            "student_progress": [
                {
                    "student_name": user.name if user else None,
                    "student_email": user.email if user else None,
                    "completion_percentage": progress.completion_percentage,
                    "lessons_completed": len(progress.lessons_completed or []),
                    "last_accessed": progress.last_accessed_at,
                }
                for progress, user in rows
            ],
        }


# Global instance
analytics_service = AnalyticsService()
