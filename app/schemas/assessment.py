"""
Pydantic schemas for assessment-related requests and responses
"""
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional
from uuid import UUID
from datetime import datetime

from app.config import settings


def check_skill_category(value: Optional[str]) -> Optional[str]:
    """Validate a skill tag against the configured registry"""
    if value is not None and value not in settings.SKILL_CATEGORIES:
        raise ValueError(
            f"Unknown skill category '{value}'. Allowed: {', '.join(settings.SKILL_CATEGORIES)}"
        )
    return value


def reject_cleared_fields(model: BaseModel, nullable: set) -> BaseModel:
    """Only nullable fields may be explicitly set to null in a partial update"""
    cleared = sorted(
        name for name in model.model_fields_set
        if getattr(model, name) is None and name not in nullable
    )
    if cleared:
        raise ValueError(f"Fields cannot be cleared: {', '.join(cleared)}")
    return model


class Question(BaseModel):
    """Single multiple-choice question"""
    id: Optional[str] = None
    question: str = Field(..., min_length=1)
    options: List[str] = Field(..., min_length=2)
    correct_answer: str = Field(..., min_length=1)
    explanation: str = ""

    @model_validator(mode="after")
    def correct_answer_is_an_option(self):
        if self.correct_answer not in self.options:
            raise ValueError("correct_answer must be one of the options")
        return self


def normalize_question_bank(questions: List[Question]) -> List[Question]:
    """Fill missing ids with their 1-based position and enforce unique ids"""
    for index, question in enumerate(questions):
        if not question.id:
            question.id = str(index + 1)

    ids = [q.id for q in questions]
    duplicates = sorted({qid for qid in ids if ids.count(qid) > 1})
    if duplicates:
        raise ValueError(f"Duplicate question ids: {', '.join(duplicates)}")
    return questions


class AssessmentCreate(BaseModel):
    """Schema for authoring a new assessment"""
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    skill_category: str = "basic"
    questions: List[Question] = Field(..., min_length=1, description="At least one question")
    total_points: float = Field(settings.DEFAULT_TOTAL_POINTS, gt=0)
    time_limit: Optional[int] = Field(None, gt=0, description="Time limit in minutes")

    @field_validator("skill_category")
    @classmethod
    def known_skill_category(cls, v):
        return check_skill_category(v)

    @field_validator("questions")
    @classmethod
    def unique_question_ids(cls, questions):
        return normalize_question_bank(questions)


class AssessmentUpdate(BaseModel):
    """Partial update; a supplied question bank replaces the whole bank"""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    skill_category: Optional[str] = None
    questions: Optional[List[Question]] = Field(None, min_length=1)
    total_points: Optional[float] = Field(None, gt=0)
    time_limit: Optional[int] = Field(None, gt=0)

    @field_validator("skill_category")
    @classmethod
    def known_skill_category(cls, v):
        return check_skill_category(v)

    @field_validator("questions")
    @classmethod
    def unique_question_ids(cls, questions):
        if questions is None:
            return questions
        return normalize_question_bank(questions)

    @model_validator(mode="after")
    def only_time_limit_clears(self):
        return reject_cleared_fields(self, nullable={"time_limit"})


class AssessmentResponse(BaseModel):
    """Assessment with its question bank"""
    id: UUID
    title: str
    description: Optional[str] = None
    skill_category: str
    questions: List[Question]
    total_points: float
    time_limit: Optional[int] = None
    is_ai_generated: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AIAssessmentRequest(BaseModel):
    """Request schema for AI-generated assessments"""
    age_group: str = Field(..., min_length=1, max_length=50, description="Target age group, e.g. '10-14'")
    question_count: int = Field(
        ...,
        ge=settings.AI_MIN_QUESTIONS,
        le=settings.AI_MAX_QUESTIONS,
        description="Number of questions to generate"
    )


class AnswerSubmission(BaseModel):
    """One submitted answer"""
    question_id: str
    user_answer: str


class AssessmentSubmission(BaseModel):
    """Schema for assessment submission"""
    assessment_id: UUID
    answers: List[AnswerSubmission]


class GradedAnswer(BaseModel):
    """Grading details for a single answer"""
    question_id: str
    user_answer: str
    is_correct: bool


class AssessmentResultResponse(BaseModel):
    """Stored outcome of a graded submission"""
    id: UUID
    user_id: UUID
    assessment_id: UUID
    assessment_title: Optional[str] = None
    score: float
    max_score: float
    percentage: int
    answers: List[GradedAnswer]
    literacy_level: str
    feedback: Optional[str] = None
    completed_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @classmethod
    def from_result(cls, result, assessment_title: Optional[str] = None) -> "AssessmentResultResponse":
        return cls.model_validate(result).model_copy(update={"assessment_title": assessment_title})


class ScoreDistribution(BaseModel):
    literate: int = 0
    semi_literate: int = 0
    illiterate: int = 0


class RecentAttempt(BaseModel):
    student_name: Optional[str] = None
    student_email: Optional[str] = None
    score: int
    completed_at: Optional[datetime] = None


class AssessmentStatistics(BaseModel):
    """Aggregated attempts for one assessment"""
    assessment_id: UUID
    title: str
    total_questions: int
    total_attempts: int
    average_score: int
    score_distribution: ScoreDistribution
    highest_score: int
    lowest_score: int
    recent_results: List[RecentAttempt]
