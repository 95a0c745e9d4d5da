"""
Assessment grading service
Multiple-choice: exact string match against the stored answer key
"""
import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Any, List, Sequence

from app.exceptions import ConfigurationError, ValidationError

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for non-negatives"""
    return int(math.floor(value + 0.5))


@dataclass
class GradingOutcome:
    """Result of grading one submission"""
    raw_score: float
    percentage: int
    graded_answers: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def correct_count(self) -> int:
        return sum(1 for answer in self.graded_answers if answer["is_correct"])


class GradingService:
    """
    Service for grading assessment submissions

    Strategy:
    - Every question is worth total_points / question_count
    - Only submitted answers are graded; unanswered questions are not
      synthesized as incorrect entries
    - Answers for unknown question ids are graded incorrect, never rejected
    """

    def grade(
        self,
        questions: Sequence[Dict[str, Any]],
        total_points: float,
        submissions: Sequence[Dict[str, Any]]
    ) -> GradingOutcome:
        """
        Grade a submission against an assessment's question bank

        Args:
            questions: Question bank [{id, correct_answer, ...}]
            total_points: Assessment total points
            submissions: Ordered [{question_id, user_answer}]

        Returns:
            GradingOutcome with graded answers in submission order

        Raises:
            ConfigurationError: question bank is empty or total_points is not positive
            ValidationError: a question id is submitted more than once
        """
        if not questions:
            raise ConfigurationError("Assessment has no questions and cannot be graded")
        if total_points is None or total_points <= 0:
            raise ConfigurationError("Assessment total points must be positive")

        self._check_unique_submissions(submissions)

        answer_key = {q.get("id"): q.get("correct_answer") for q in questions}
        points_per_question = total_points / len(questions)

        raw_score = 0.0
        graded_answers = []

        for submission in submissions:
            question_id = submission["question_id"]
            user_answer = submission["user_answer"]

            is_correct = question_id in answer_key and answer_key[question_id] == user_answer
            if is_correct:
                raw_score += points_per_question

            graded_answers.append({
                "question_id": question_id,
                "user_answer": user_answer,
                "is_correct": is_correct,
            })

        percentage = round_half_up(raw_score / total_points * 100)

        logger.info(
            f"Graded submission: {raw_score:.2f}/{total_points:.2f} ({percentage}%), "
            f"answered={len(graded_answers)}/{len(questions)}"
        )

        return GradingOutcome(
            raw_score=raw_score,
            percentage=percentage,
            graded_answers=graded_answers,
        )

    def _check_unique_submissions(self, submissions: Sequence[Dict[str, Any]]) -> None:
        # A repeated id would let one question score twice and push the percentage past 100
        seen = set()
        for submission in submissions:
            question_id = submission["question_id"]
            if question_id in seen:
                raise ValidationError(f"Question '{question_id}' was answered more than once")
            seen.add(question_id)

    def generate_feedback(self, percentage: int, literacy_level: str) -> str:
        """Generate overall feedback message"""

        if literacy_level == "literate":
            return f"Great job! You scored {percentage}% on this assessment."
        if literacy_level == "semi-literate":
            return (
                f"Good effort! You scored {percentage}% on this assessment. "
                "Review the learning modules to strengthen your digital skills."
            )
        return (
            f"You scored {percentage}% on this assessment. "
            "Start with the basic learning modules and try again."
        )


# Global instance
grading_service = GradingService()
