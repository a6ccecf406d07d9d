"""Repository for user-authored reading plans."""
import logging
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from reading_tracker.models.domain import ReadingPlan
from reading_tracker.repositories.base import JsonDocumentRepository

logger = logging.getLogger(__name__)


class CustomPlanRepository(JsonDocumentRepository):
    """Stores custom plans as one list; malformed entries are skipped on read."""

    def list_plans(self) -> List[ReadingPlan]:
        raw = self._read()
        if self._is_missing(raw) or not isinstance(raw, list):
            return []
        plans: List[ReadingPlan] = []
        for item in raw:
            try:
                plans.append(ReadingPlan.model_validate(item))
            except PydanticValidationError as e:
                logger.warning(f"Skipping malformed custom plan: {e}")
        return plans

    def get_plan(self, plan_id: str) -> Optional[ReadingPlan]:
        for plan in self.list_plans():
            if plan.id == plan_id:
                return plan
        return None

    def save_plan(self, plan: ReadingPlan) -> bool:
        plans = self.list_plans()
        for index, existing in enumerate(plans):
            if existing.id == plan.id:
                plans[index] = plan
                break
        else:
            plans.append(plan)
        return self._write_plans(plans)

    def delete_plan(self, plan_id: str) -> bool:
        plans = self.list_plans()
        remaining = [plan for plan in plans if plan.id != plan_id]
        if len(remaining) == len(plans):
            return False
        return self._write_plans(remaining)

    def _write_plans(self, plans: List[ReadingPlan]) -> bool:
        return self._write([plan.model_dump(mode="json", by_alias=True) for plan in plans])
