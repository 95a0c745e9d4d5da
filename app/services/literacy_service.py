"""
Literacy classification service
"""
import logging

from app.config import settings
from app.exceptions import ValidationError
from app.models import LiteracyLevel, User

logger = logging.getLogger(__name__)


class LiteracyService:
    """
    Maps an assessment percentage onto a literacy tier

    Threshold ladder, evaluated top-down:
    - >= 70: literate
    - >= 50: semi-literate
    - otherwise: illiterate
    """

    def __init__(
        self,
        literate_threshold: int = settings.LITERATE_THRESHOLD,
        semi_literate_threshold: int = settings.SEMI_LITERATE_THRESHOLD
    ):
        self.literate_threshold = literate_threshold
        self.semi_literate_threshold = semi_literate_threshold

    def classify(self, percentage: int) -> LiteracyLevel:
        """
        Classify a percentage score

        Raises:
            ValidationError: percentage outside [0, 100]
        """
        if isinstance(percentage, bool) or not isinstance(percentage, int):
            raise ValidationError(f"Percentage must be an integer, got {percentage!r}")
        if not 0 <= percentage <= 100:
            raise ValidationError(f"Percentage must be between 0 and 100, got {percentage}")

        if percentage >= self.literate_threshold:
            return LiteracyLevel.LITERATE
        if percentage >= self.semi_literate_threshold:
            return LiteracyLevel.SEMI_LITERATE
        return LiteracyLevel.ILLITERATE

    def apply_to_user(self, user: User, level: LiteracyLevel) -> None:
        """Overwrite the user's current tier (last write wins)"""
        previous = user.literacy_level
        user.literacy_level = level.value
        logger.info(f"Literacy level for user {user.id}: {previous} -> {level.value}")


# Global instance
literacy_service = LiteracyService()
