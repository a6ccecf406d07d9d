"""Read-only catalog of built-in and user-authored reading plans."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from reading_tracker.models.domain import Reading, ReadingPlan
from reading_tracker.repositories.custom_plans import CustomPlanRepository

logger = logging.getLogger(__name__)


def load_builtin_plans(path: str) -> List[ReadingPlan]:
    """Load the ``{"plans": [...]}`` catalog file, skipping invalid plans."""
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load plan catalog {path}: {e}")
        return []

    plans: List[ReadingPlan] = []
    for item in payload.get("plans", []):
        try:
            plans.append(ReadingPlan.model_validate(item))
        except PydanticValidationError as e:
            logger.warning(f"Skipping invalid plan {item.get('id')!r} in {path}: {e}")
    logger.info(f"Loaded {len(plans)} built-in reading plans from {path}")
    return plans


class PlanCatalog:
    """Built-in plans followed by custom plans, in that order."""

    def __init__(self, builtin_plans: List[ReadingPlan], custom_plans: CustomPlanRepository):
        self._builtin = list(builtin_plans)
        self._custom = custom_plans

    def list_all(self) -> List[ReadingPlan]:
        return self._builtin + self._custom.list_plans()

    def get_by_id(self, plan_id: str) -> Optional[ReadingPlan]:
        for plan in self.list_all():
            if plan.id == plan_id:
                return plan
        return None

    def is_builtin(self, plan_id: str) -> bool:
        return any(plan.id == plan_id for plan in self._builtin)

    @staticmethod
    def get_reading_by_day(plan: ReadingPlan, day: int) -> Optional[Reading]:
        for reading in plan.readings:
            if reading.day == day:
                return reading
        return None

    @staticmethod
    def get_reading_by_id(plan: ReadingPlan, reading_id: str) -> Optional[Reading]:
        for reading in plan.readings:
            if reading.id == reading_id:
                return reading
        return None
