"""Repository for the multi-plan progress record."""
import logging
from datetime import datetime
from typing import Optional

from reading_tracker.models.domain import MultiPlanProgress
from reading_tracker.repositories.base import JsonDocumentRepository
from reading_tracker.services.progress_migration import parse_progress_record
from reading_tracker.services.progress_tracker import new_plan_progress
from reading_tracker.services.streak_calculator import utc_now
from reading_tracker.utils.ids import generate_id

logger = logging.getLogger(__name__)


class ProgressRepository(JsonDocumentRepository):
    """Loads, migrates and overwrites the progress aggregate."""

    def load(self, now: Optional[datetime] = None) -> Optional[MultiPlanProgress]:
        """Return the stored progress, or None when there is none usable.

        A legacy single-plan record is migrated and written back before it is
        returned, so migration runs once per stored record.
        """
        raw = self._read()
        if self._is_missing(raw):
            return None

        progress, migrated = parse_progress_record(raw, now=now)
        if progress is None:
            logger.warning(f"Ignoring unrecognized progress record under {self.key}")
            return None
        if migrated:
            self.save(progress)
        return progress

    def save(self, progress: MultiPlanProgress) -> bool:
        """Overwrite the stored record with the full aggregate."""
        return self._write(progress.model_dump(mode="json", by_alias=True))

    @staticmethod
    def create_default(plan_id: str, now: Optional[datetime] = None) -> MultiPlanProgress:
        entry = new_plan_progress(plan_id, now or utc_now())
        return MultiPlanProgress(
            user_id=generate_id("user"),
            current_plan_id=plan_id,
            plan_progress={plan_id: entry},
        )
