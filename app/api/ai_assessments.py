"""
AI-generated assessment endpoint
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from app.api.deps import require_student
from app.config import settings
from app.database import get_db
from app.models import Assessment, User
from app.schemas.assessment import AIAssessmentRequest, AssessmentResponse
from app.services.gemini_service import gemini_service

router = APIRouter(prefix="/api/ai-assessments", tags=["ai-assessments"])
logger = logging.getLogger(__name__)


@router.post("/generate", response_model=AssessmentResponse, status_code=201)
async def generate_assessment(
    request: AIAssessmentRequest,
    user: User = Depends(require_student),
    db: Session = Depends(get_db)
):
    """
    Generate a personal assessment with Gemini (students only)

    - 3 to 30 multiple-choice questions
    - One point per question
    - Falls back to template questions if the model is unavailable
    """

    logger.info(
        f"Generating AI assessment for user {user.id}: "
        f"age_group={request.age_group}, questions={request.question_count}"
    )

    questions = gemini_service.generate_questions(
        age_group=request.age_group,
        question_count=request.question_count,
    )

    assessment = Assessment(
        title=f"AI assessment ({request.age_group})",
        description=f"Auto-generated digital skills assessment for age {request.age_group}.",
        skill_category="basic",
        questions=questions,
        total_points=float(len(questions)),
        time_limit=settings.AI_TIME_LIMIT_MINUTES,
        is_ai_generated=True,
        created_by=user.id,
    )

    db.add(assessment)
    db.commit()
    db.refresh(assessment)

    logger.info(f"AI assessment created: {assessment.id} with {len(questions)} questions")

    return assessment
