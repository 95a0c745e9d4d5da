"""
Module progress tracking service
Lesson-completion state machine per (user, module)
"""
import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.database import utcnow
from app.exceptions import ConfigurationError, NotFoundError
from app.models import LearningModule, ModuleProgress
from app.services.grading_service import round_half_up

logger = logging.getLogger(__name__)


class ProgressService:
    """
    Service for tracking lesson completion inside learning modules

    Transition on every completion event:
    1. Look up or create the (user, module) record
    2. Add the lesson id to the completed set (duplicates are no-ops)
    3. Recompute completion percentage and refresh last_accessed_at
    4. Stamp completed_at the first time the percentage reaches 100

    completed_at is never cleared, even if the module later gains lessons.
    """

    def calculate_completion(self, completed_count: int, lesson_count: int) -> int:
        """
        Completion percentage for a module

        Capped at 100 so modules that later lose lessons never report more.
        """
        if lesson_count <= 0:
            raise ConfigurationError("Module has no lessons; completion cannot be tracked")
        return min(round_half_up(completed_count / lesson_count * 100), 100)

    def apply_lesson_completion(
        self,
        progress: ModuleProgress,
        lesson_id: str,
        lesson_count: int,
        now: Optional[datetime] = None
    ) -> ModuleProgress:
        """
        Apply one completion event to a progress record in place

        Args:
            progress: Existing or freshly created progress record
            lesson_id: Completed lesson
            lesson_count: Current number of lessons in the module
            now: Event time (defaults to current UTC time)

        Returns:
            The same progress record
        """
        now = now or utcnow()
        percentage = self.calculate_completion(
            len(set(progress.lessons_completed or []) | {lesson_id}),
            lesson_count
        )

        completed = list(progress.lessons_completed or [])
        if lesson_id not in completed:
            # reassign so the JSON column is flagged dirty
            progress.lessons_completed = completed + [lesson_id]

        progress.completion_percentage = percentage
        progress.last_accessed_at = now

        if progress.completion_percentage == 100 and progress.completed_at is None:
            progress.completed_at = now

        return progress

    def record_lesson_completion(
        self,
        db: Session,
        user_id: UUID,
        module_id: UUID,
        lesson_id: str
    ) -> ModuleProgress:
        """
        Record a lesson completion for a user

        All checks run before the session is touched, so a failure leaves
        nothing to persist. The caller commits.

        Raises:
            NotFoundError: module does not exist
            ConfigurationError: module has no lessons
        """
        module = db.query(LearningModule).filter(LearningModule.id == module_id).first()
        if not module:
            raise NotFoundError("Module not found")

        lesson_ids = module.lesson_ids
        if not lesson_ids:
            raise ConfigurationError("Module has no lessons; completion cannot be tracked")

        now = utcnow()

        progress = db.query(ModuleProgress).filter(
            ModuleProgress.user_id == user_id,
            ModuleProgress.module_id == module_id
        ).first()

        if not progress:
            progress = ModuleProgress(
                user_id=user_id,
                module_id=module_id,
                lessons_completed=[],
                completion_percentage=0,
                started_at=now
            )
            db.add(progress)

        self.apply_lesson_completion(progress, lesson_id, len(lesson_ids), now)

        logger.info(
            f"Lesson completed: user={user_id}, module={module_id}, lesson={lesson_id}, "
            f"lessons={len(progress.lessons_completed)}/{len(lesson_ids)}, "
            f"pct={progress.completion_percentage}, completed={progress.completed_at is not None}"
        )

        return progress


# Global instance
progress_service = ProgressService()
