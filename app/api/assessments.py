"""
Assessment authoring, statistics and submission API endpoints
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List
from uuid import UUID
import logging

from app.api.deps import get_current_user, require_staff
from app.database import get_db, utcnow
from app.exceptions import ConflictError, NotFoundError
from app.models import Assessment, AssessmentResult, User
from app.schemas.assessment import (
    AssessmentCreate,
    AssessmentUpdate,
    AssessmentResponse,
    AssessmentSubmission,
    AssessmentResultResponse,
    AssessmentStatistics,
)
from app.services.analytics_service import analytics_service
from app.services.grading_service import grading_service
from app.services.literacy_service import literacy_service
from app.utils.cache import cache_service


router = APIRouter(prefix="/api/assessments", tags=["assessments"])
logger = logging.getLogger(__name__)


def get_assessment_or_404(db: Session, assessment_id: UUID) -> Assessment:
    assessment = db.query(Assessment).filter(Assessment.id == assessment_id).first()
    if not assessment:
        raise NotFoundError("Assessment not found")
    return assessment


@router.get("/", response_model=List[AssessmentResponse])
async def list_assessments(db: Session = Depends(get_db)):
    """All assessments, newest first"""
    return db.query(Assessment).order_by(Assessment.created_at.desc()).all()


@router.post("/submit", response_model=AssessmentResultResponse, status_code=201)
async def submit_assessment(
    submission: AssessmentSubmission,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Submit and grade an assessment

    - Each question is worth total_points / question_count
    - Only submitted answers are graded; unknown question ids count as incorrect
    - Percentage maps to a literacy level (>=70 literate, >=50 semi-literate)
    - The result and the user's new literacy level are committed together
    """

    assessment = get_assessment_or_404(db, submission.assessment_id)

    logger.info(f"Grading assessment {assessment.id} for user {user.id}")

    outcome = grading_service.grade(
        questions=assessment.questions or [],
        total_points=assessment.total_points,
        submissions=[answer.model_dump() for answer in submission.answers],
    )
    level = literacy_service.classify(outcome.percentage)

    try:
        result = AssessmentResult(
            user_id=user.id,
            assessment_id=assessment.id,
            score=outcome.raw_score,
            max_score=assessment.total_points,
            percentage=outcome.percentage,
            answers=outcome.graded_answers,
            literacy_level=level.value,
            feedback=grading_service.generate_feedback(outcome.percentage, level.value),
            completed_at=utcnow(),
        )
        db.add(result)
        literacy_service.apply_to_user(user, level)

        db.commit()
        db.refresh(result)

    except SQLAlchemyError as e:
        logger.error(f"Failed to store assessment result: {str(e)}")
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to store assessment result")

    cache_service.invalidate_assessment(assessment.id)

    logger.info(
        f"Assessment result saved: {result.id}, score: {outcome.raw_score:.2f}/{assessment.total_points}, "
        f"level: {level.value}"
    )

    return AssessmentResultResponse.from_result(result, assessment.title)


@router.get("/{assessment_id}", response_model=AssessmentResponse)
async def get_assessment(assessment_id: UUID, db: Session = Depends(get_db)):
    """Single assessment with its question bank"""
    return get_assessment_or_404(db, assessment_id)


@router.post("/", response_model=AssessmentResponse, status_code=201)
async def create_assessment(
    payload: AssessmentCreate,
    user: User = Depends(require_staff),
    db: Session = Depends(get_db)
):
    """
    Author a new assessment (teacher/admin)

    - At least one question, each with >= 2 options
    - correct_answer must be one of the options
    - Question ids are unique; missing ids default to their position
    """

    assessment = Assessment(
        title=payload.title,
        description=payload.description,
        skill_category=payload.skill_category,
        questions=[q.model_dump() for q in payload.questions],
        total_points=payload.total_points,
        time_limit=payload.time_limit,
        created_by=user.id,
    )

    db.add(assessment)
    db.commit()
    db.refresh(assessment)

    logger.info(f"Assessment created: {assessment.id} with {len(payload.questions)} questions")

    return assessment


@router.put("/{assessment_id}", response_model=AssessmentResponse)
async def update_assessment(
    assessment_id: UUID,
    payload: AssessmentUpdate,
    user: User = Depends(require_staff),
    db: Session = Depends(get_db)
):
    """Update an assessment (teacher/admin); supplied questions replace the bank"""

    assessment = get_assessment_or_404(db, assessment_id)

    updates = payload.model_dump(exclude_unset=True)

    for field, value in updates.items():
        setattr(assessment, field, value)

    db.commit()
    db.refresh(assessment)
    cache_service.invalidate_assessment(assessment.id)

    logger.info(f"Assessment updated: {assessment.id} fields={sorted(updates)}")

    return assessment


@router.delete("/{assessment_id}")
async def delete_assessment(
    assessment_id: UUID,
    user: User = Depends(require_staff),
    db: Session = Depends(get_db)
):
    """Delete an assessment (teacher/admin) that no result references"""

    assessment = get_assessment_or_404(db, assessment_id)

    result_count = db.query(AssessmentResult).filter(
        AssessmentResult.assessment_id == assessment_id
    ).count()

    if result_count > 0:
        raise ConflictError(
            f"Cannot delete assessment. {result_count} student(s) have already taken this assessment."
        )

    db.delete(assessment)
    db.commit()
    cache_service.invalidate_assessment(assessment_id)

    logger.info(f"Assessment deleted: {assessment_id}")

    return {"message": "Assessment deleted successfully"}


@router.post("/{assessment_id}/duplicate", response_model=AssessmentResponse, status_code=201)
async def duplicate_assessment(
    assessment_id: UUID,
    user: User = Depends(require_staff),
    db: Session = Depends(get_db)
):
    """Copy an assessment (teacher/admin)"""

    original = get_assessment_or_404(db, assessment_id)

    duplicate = Assessment(
        title=f"{original.title} (Copy)",
        description=original.description,
        skill_category=original.skill_category,
        questions=[dict(q) for q in original.questions or []],
        total_points=original.total_points,
        time_limit=original.time_limit,
        created_by=user.id,
    )

    db.add(duplicate)
    db.commit()
    db.refresh(duplicate)

    logger.info(f"Assessment {assessment_id} duplicated as {duplicate.id}")

    return duplicate


@router.get("/{assessment_id}/statistics", response_model=AssessmentStatistics)
async def get_assessment_statistics(
    assessment_id: UUID,
    user: User = Depends(require_staff),
    db: Session = Depends(get_db)
):
    """
    Attempt statistics for an assessment (teacher/admin)

    - Cached in Redis; invalidated by new submissions and edits
    """

    cache_key = cache_service.assessment_stats_key(str(assessment_id))
    cached = cache_service.get(cache_key)
    if cached:
        return AssessmentStatistics(**cached)

    statistics = analytics_service.get_assessment_statistics(db, assessment_id)
    if statistics is None:
        raise NotFoundError("Assessment not found")

    cache_service.set(cache_key, statistics)

    return AssessmentStatistics(**statistics)
