"""
Gemini AI service for digital-literacy question generation
"""
import google.generativeai as genai
from pydantic import ValidationError as SchemaValidationError
from app.config import settings
from app.schemas.assessment import Question, normalize_question_bank
import json
import logging
from typing import List, Dict, Any

logger = logging.getLogger(__name__)


class GeminiService:
    """Service for all Gemini AI operations"""

    TOPICS = [
        "email and messaging",
        "web browsing and search",
        "online safety and passwords",
        "files and folders",
        "social media etiquette",
        "recognizing misinformation",
    ]

    def __init__(self, api_key: str = settings.GEMINI_API_KEY, model_name: str = settings.GEMINI_MODEL):
        self.model = None
        if api_key:
            genai.configure(api_key=api_key)
            self.model = genai.GenerativeModel(model_name)
        else:
            logger.warning("GEMINI_API_KEY not set. Using template questions.")

    def generate_questions(self, age_group: str, question_count: int) -> List[Dict[str, Any]]:
        """
        Generate multiple-choice digital-literacy questions

        Args:
            age_group: Target age group (e.g. "10-14")
            question_count: Number of questions

        Returns:
            List of question dictionaries conforming to the Question shape
        """
        if self.model is None:
            return self._create_fallback_questions(age_group, question_count)

        try:
            prompt = self._create_question_prompt(age_group, question_count)
            response = self.model.generate_content(prompt)
            return self._parse_question_response(response.text, age_group, question_count)

        except Exception as e:
            logger.error(f"Failed to generate questions: {str(e)}")
            return self._create_fallback_questions(age_group, question_count)

    def _create_question_prompt(self, age_group: str, question_count: int) -> str:
        """Create structured prompt for question generation"""

        return f"""
You are an expert educator assessing the digital literacy of learners aged {age_group}.

Topics to cover: {', '.join(self.TOPICS)}

Generate EXACTLY {question_count} multiple choice questions:
- 4 options each
- One correct answer, copied verbatim from the options
- Language appropriate for the age group
- A one-sentence explanation of the correct answer

Return ONLY valid JSON in this exact format (no markdown, no preamble):

[
  {{
    "id": "1",
    "question": "Question text here?",
    "options": ["Option A", "Option B", "Option C", "Option D"],
    "correct_answer": "Option A",
    "explanation": "Why Option A is correct."
  }}
]
"""

    def _parse_question_response(
        self,
        response_text: str,
        age_group: str,
        question_count: int
    ) -> List[Dict[str, Any]]:
        """Parse Gemini's response into validated question dictionaries"""
        try:
            # Clean response
            cleaned = response_text.strip()

            # Remove markdown code blocks
            if cleaned.startswith("```json"):
                cleaned = cleaned[7:-3].strip()
            elif cleaned.startswith("```"):
                cleaned = cleaned[3:-3].strip()

            raw_questions = json.loads(cleaned)

            if not isinstance(raw_questions, list) or not raw_questions:
                raise ValueError("Response is not a list of questions")

            if len(raw_questions) != question_count:
                logger.warning(f"Expected {question_count} questions, got {len(raw_questions)}")

            questions = normalize_question_bank([
                Question.model_validate({
                    "id": str(item.get("id") or index + 1),
                    "question": item.get("question"),
                    "options": item.get("options"),
                    "correct_answer": item.get("correct_answer", item.get("correctAnswer")),
                    "explanation": item.get("explanation") or "",
                })
                for index, item in enumerate(raw_questions)
            ])

            return [q.model_dump() for q in questions]

        except (json.JSONDecodeError, ValueError, AttributeError, SchemaValidationError) as e:
            logger.error(f"Failed to parse generated questions: {str(e)}")
            logger.error(f"Response text: {response_text[:500]}")

            return self._create_fallback_questions(age_group, question_count)

    def _create_fallback_questions(self, age_group: str, question_count: int) -> List[Dict[str, Any]]:
        """Create template questions when the model is unavailable"""
        questions = []
        options = ["Option A", "Option B", "Option C", "Option D"]

        for i in range(question_count):
            questions.append({
                "id": str(i + 1),
                "question": f"Sample question {i + 1} for age {age_group}?",
                "options": list(options),
                "correct_answer": options[0],
                "explanation": "Sample explanation."
            })

        return questions


# Global instance
gemini_service = GeminiService()
