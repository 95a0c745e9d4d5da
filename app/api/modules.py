"""
Learning module and lesson progress API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List
from uuid import UUID
import logging

from app.api.deps import get_current_user, require_staff
from app.database import get_db
from app.exceptions import ConflictError, NotFoundError
from app.models import LearningModule, ModuleProgress, User
from app.schemas.module import (
    ModuleCreate,
    ModuleUpdate,
    ModuleResponse,
    LessonCompletion,
    ProgressResponse,
    ModuleStatistics,
)
from app.services.analytics_service import analytics_service
from app.services.progress_service import progress_service
from app.utils.cache import cache_service

router = APIRouter(prefix="/api/learning-modules", tags=["learning-modules"])
logger = logging.getLogger(__name__)


def get_module_or_404(db: Session, module_id: UUID) -> LearningModule:
    module = db.query(LearningModule).filter(LearningModule.id == module_id).first()
    if not module:
        raise NotFoundError("Module not found")
    return module


@router.get("/", response_model=List[ModuleResponse])
async def list_modules(db: Session = Depends(get_db)):
    """All learning modules in display order"""
    return db.query(LearningModule).order_by(LearningModule.order.asc(), LearningModule.created_at.asc()).all()


@router.get("/progress/me", response_model=List[ProgressResponse])
async def get_my_progress(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """The current user's progress across modules"""
    return db.query(ModuleProgress).filter(ModuleProgress.user_id == user.id).all()


@router.post("/complete-lesson", response_model=ProgressResponse)
async def complete_lesson(
    payload: LessonCompletion,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Mark a lesson complete for the current user

    - Completed lessons form a set; repeats only refresh last_accessed_at
    - completion_percentage = round(completed / lessons * 100), capped at 100
    - Any lesson id is recorded as given
    - completed_at is stamped once, the first time the module reaches 100%
    """

    progress = progress_service.record_lesson_completion(
        db,
        user_id=user.id,
        module_id=payload.module_id,
        lesson_id=payload.lesson_id,
    )

    try:
        db.commit()
        db.refresh(progress)
    except SQLAlchemyError as e:
        logger.error(f"Failed to store module progress: {str(e)}")
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to store module progress")

    cache_service.invalidate_module(payload.module_id)

    return progress


@router.get("/{module_id}", response_model=ModuleResponse)
async def get_module(module_id: UUID, db: Session = Depends(get_db)):
    """Single learning module"""
    return get_module_or_404(db, module_id)


@router.post("/", response_model=ModuleResponse, status_code=201)
async def create_module(
    payload: ModuleCreate,
    user: User = Depends(require_staff),
    db: Session = Depends(get_db)
):
    """Author a learning module (teacher/admin)"""

    module = LearningModule(
        title=payload.title,
        description=payload.description,
        skill_level=payload.skill_level,
        lessons=[lesson.model_dump() for lesson in payload.lessons],
        duration=payload.duration,
        order=payload.order,
    )

    db.add(module)
    db.commit()
    db.refresh(module)

    logger.info(f"Learning module created: {module.id} with {len(payload.lessons)} lessons")

    return module


@router.put("/{module_id}", response_model=ModuleResponse)
async def update_module(
    module_id: UUID,
    payload: ModuleUpdate,
    user: User = Depends(require_staff),
    db: Session = Depends(get_db)
):
    """
    Update a learning module (teacher/admin)

    Existing progress records are not recomputed; their completed_at stays as is.
    """

    module = get_module_or_404(db, module_id)

    updates = payload.model_dump(exclude_unset=True)
    for field, value in updates.items():
        setattr(module, field, value)

    db.commit()
    db.refresh(module)
    cache_service.invalidate_module(module.id)

    logger.info(f"Learning module updated: {module.id} fields={sorted(updates)}")

    return module


@router.delete("/{module_id}")
async def delete_module(
    module_id: UUID,
    user: User = Depends(require_staff),
    db: Session = Depends(get_db)
):
    """Delete a learning module (teacher/admin) nobody has started"""

    module = get_module_or_404(db, module_id)

    progress_count = db.query(ModuleProgress).filter(
        ModuleProgress.module_id == module_id
    ).count()

    if progress_count > 0:
        raise ConflictError(
            f"Cannot delete module. {progress_count} student(s) are using this module."
        )

    db.delete(module)
    db.commit()
    cache_service.invalidate_module(module_id)

    logger.info(f"Learning module deleted: {module_id}")

    return {"message": "Learning module deleted successfully"}


@router.get("/{module_id}/statistics", response_model=ModuleStatistics)
async def get_module_statistics(
    module_id: UUID,
    user: User = Depends(require_staff),
    db: Session = Depends(get_db)
):
    """Completion statistics for a module (teacher/admin)"""

    cache_key = cache_service.module_stats_key(str(module_id))
    cached = cache_service.get(cache_key)
    if cached:
        return ModuleStatistics(**cached)

    statistics = analytics_service.get_module_statistics(db, module_id)
    if statistics is None:
        raise NotFoundError("Module not found")

    cache_service.set(cache_key, statistics)

    return ModuleStatistics(**statistics)
