"""Business logic for the plan catalog and custom plan authoring."""
from __future__ import annotations

import logging
from typing import List

from fastapi import Depends

from reading_tracker.dependencies import (
    get_custom_plan_repository,
    get_note_repository,
    get_plan_catalog,
    get_progress_repository,
)
from reading_tracker.models.domain import Reading, ReadingPlan
from reading_tracker.models.schemas import CustomPlanDraft, PlanSummary, SequentialPlanCreate
from reading_tracker.repositories.custom_plans import CustomPlanRepository
from reading_tracker.repositories.notes import NoteRepository
from reading_tracker.repositories.progress import ProgressRepository
from reading_tracker.services import progress_tracker
from reading_tracker.services.custom_plan_builder import (
    build_custom_plan,
    generate_sequential_plan,
    validate_custom_plan,
)
from reading_tracker.services.plan_catalog import PlanCatalog
from reading_tracker.utils.exceptions import NotFoundError, PlanValidationError, ValidationError

logger = logging.getLogger(__name__)


class PlanService:
    """Read access to all plans; create and delete for custom ones."""

    def __init__(
        self,
        catalog: PlanCatalog,
        custom_plans: CustomPlanRepository,
        progress: ProgressRepository,
        notes: NoteRepository,
    ):
        self.catalog = catalog
        self.custom_plans = custom_plans
        self.progress = progress
        self.notes = notes

    def list_plans(self) -> List[PlanSummary]:
        return [PlanSummary.from_plan(plan) for plan in self.catalog.list_all()]

    def get_plan(self, plan_id: str) -> ReadingPlan:
        plan = self.catalog.get_by_id(plan_id)
        if plan is None:
            raise NotFoundError(f"Reading plan {plan_id} not found")
        return plan

    def get_reading_for_day(self, plan_id: str, day: int) -> Reading:
        plan = self.get_plan(plan_id)
        reading = self.catalog.get_reading_by_day(plan, day)
        if reading is None:
            raise NotFoundError(f"Plan {plan_id} has no reading for day {day}")
        return reading

    def create_custom_plan(self, draft: CustomPlanDraft) -> ReadingPlan:
        errors = validate_custom_plan(draft)
        if errors:
            raise PlanValidationError(errors)
        plan = build_custom_plan(draft)
        self.custom_plans.save_plan(plan)
        logger.info(f"Created custom plan {plan.id} with {plan.total_days} readings")
        return plan

    def create_sequential_plan(self, payload: SequentialPlanCreate) -> ReadingPlan:
        plan = generate_sequential_plan(
            payload.name.strip(),
            payload.description.strip(),
            payload.start_book.strip(),
            payload.chapters,
        )
        self.custom_plans.save_plan(plan)
        logger.info(f"Created sequential plan {plan.id} for {payload.start_book}")
        return plan

    def delete_custom_plan(self, plan_id: str) -> None:
        """Delete a custom plan together with its progress entry and notes."""
        if self.catalog.is_builtin(plan_id):
            raise ValidationError("Built-in plans cannot be deleted")
        plan = self.custom_plans.get_plan(plan_id)
        if plan is None:
            raise NotFoundError(f"Custom plan {plan_id} not found")

        self.custom_plans.delete_plan(plan_id)

        progress = self.progress.load()
        if progress is not None and progress_tracker.get_plan_progress(progress, plan_id) is not None:
            self.progress.save(progress_tracker.remove_plan_progress(progress, plan_id))

        removed_notes = self.notes.delete_for_readings(reading.id for reading in plan.readings)
        logger.info(f"Deleted custom plan {plan_id} and {removed_notes} notes")


def get_plan_service(
    catalog: PlanCatalog = Depends(get_plan_catalog),
    custom_plans: CustomPlanRepository = Depends(get_custom_plan_repository),
    progress: ProgressRepository = Depends(get_progress_repository),
    notes: NoteRepository = Depends(get_note_repository),
) -> PlanService:
    return PlanService(catalog, custom_plans, progress, notes)
