"""
Assessment result history endpoints
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from uuid import UUID

from app.api.deps import get_current_user
from app.database import get_db
from app.exceptions import NotFoundError, PermissionDeniedError
from app.models import Assessment, AssessmentResult, User
from app.schemas.assessment import AssessmentResultResponse

router = APIRouter(prefix="/api/results", tags=["results"])


def results_with_titles(db: Session):
    """Results joined to the title of the assessment they were taken on"""
    return db.query(AssessmentResult, Assessment.title).outerjoin(
        Assessment, Assessment.id == AssessmentResult.assessment_id
    )


@router.get("/", response_model=List[AssessmentResultResponse])
async def list_my_results(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """The current user's results, newest first"""
    rows = results_with_titles(db).filter(
        AssessmentResult.user_id == user.id
    ).order_by(AssessmentResult.completed_at.desc()).all()

    return [AssessmentResultResponse.from_result(result, title) for result, title in rows]


@router.get("/{result_id}", response_model=AssessmentResultResponse)
async def get_result(
    result_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """A single result; only its owner may read it"""

    row = results_with_titles(db).filter(AssessmentResult.id == result_id).first()
    if not row:
        raise NotFoundError("Result not found")

    result, title = row
    if result.user_id != user.id:
        raise PermissionDeniedError("Unauthorized")

    return AssessmentResultResponse.from_result(result, title)
