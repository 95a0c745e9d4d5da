"""
Role-based dashboard API endpoints
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from app.api.deps import get_current_user, require_admin, require_staff
from app.database import get_db
from app.models import User
from app.schemas.dashboard import StudentDashboard, TeacherDashboard, AdminDashboard
from app.services.analytics_service import analytics_service

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])
logger = logging.getLogger(__name__)


@router.get("/student", response_model=StudentDashboard)
async def get_student_dashboard(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Dashboard for the current user

    Returns:
    - Profile summary with current literacy level
    - Assessments completed and average score
    - Modules in progress / completed
    - Five most recent results
    """
    logger.info(f"Building student dashboard for user {user.id}")
    return analytics_service.get_student_dashboard(db, user)


@router.get("/teacher", response_model=TeacherDashboard)
async def get_teacher_dashboard(
    user: User = Depends(require_staff),
    db: Session = Depends(get_db)
):
    """Class performance across student accounts (teacher/admin)"""
    return analytics_service.get_teacher_dashboard(db)


@router.get("/admin", response_model=AdminDashboard)
async def get_admin_dashboard(
    user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Platform-wide totals and literacy distribution (admin)"""
    return analytics_service.get_admin_dashboard(db)
