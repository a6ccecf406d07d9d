"""Business logic for reading progress: load, transform, save."""
from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import Optional

from fastapi import Depends

from reading_tracker.config import Settings
from reading_tracker.dependencies import get_app_settings, get_plan_catalog, get_progress_repository
from reading_tracker.models.domain import MultiPlanProgress, ReadingPlan
from reading_tracker.models.schemas import (
    PlanProgressResponse,
    PlanSummary,
    StreakCheckResponse,
    TodayReadingResponse,
)
from reading_tracker.repositories.progress import ProgressRepository
from reading_tracker.services import progress_tracker
from reading_tracker.services.plan_catalog import PlanCatalog
from reading_tracker.services.streak_calculator import (
    completion_percentage,
    compute_streak_from_history,
    current_day_index,
    has_completed_today,
    is_streak_milestone,
    scheduled_date,
    utc_now,
)
from reading_tracker.utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class ProgressService:
    """Coordinates the progress repository, the pure tracker and the plan catalog."""

    def __init__(self, repository: ProgressRepository, catalog: PlanCatalog, tz: Optional[tzinfo] = None):
        self.repository = repository
        self.catalog = catalog
        self.tz = tz

    def get_progress(self) -> MultiPlanProgress:
        progress = self.repository.load()
        if progress is None:
            raise NotFoundError("No reading progress yet; start a plan first")
        return progress

    def start_plan(self, plan_id: str, now: Optional[datetime] = None) -> PlanProgressResponse:
        """Begin tracking ``plan_id``, creating the progress record on first use."""
        plan = self._require_plan(plan_id)
        progress = self.repository.load()
        if progress is None:
            progress = self.repository.create_default(plan.id, now=now)
            logger.info(f"Created progress record {progress.user_id} on plan {plan.id}")
        else:
            progress = progress_tracker.switch_active_plan(progress, plan.id, now=now)
        self.repository.save(progress)
        return self._respond(progress, plan)

    def switch_plan(self, plan_id: str, now: Optional[datetime] = None) -> PlanProgressResponse:
        plan = self._require_plan(plan_id)
        progress = progress_tracker.switch_active_plan(self.get_progress(), plan.id, now=now)
        self.repository.save(progress)
        return self._respond(progress, plan)

    def get_today(self, now: Optional[datetime] = None) -> TodayReadingResponse:
        """Reading for today on the current plan, healing a missing plan entry."""
        now = now or utc_now()
        stored = self.get_progress()
        progress = progress_tracker.ensure_current_plan_progress(stored, now=now)
        if progress is not stored:
            logger.info(f"Created missing progress entry for current plan {progress.current_plan_id}")
            self.repository.save(progress)

        plan = self._require_plan(progress.current_plan_id)
        entry = progress_tracker.get_current_plan_progress(progress)
        day_index = current_day_index(entry.start_date, now=now, tz=self.tz)
        day_number = min(day_index, plan.total_days) if plan.total_days else day_index
        reading = self.catalog.get_reading_by_day(plan, day_number)
        completed = set(entry.completed_readings)

        return TodayReadingResponse(
            plan=PlanSummary.from_plan(plan),
            day_number=day_number,
            scheduled_date=scheduled_date(entry.start_date, day_number, tz=self.tz),
            reading=reading,
            is_completed=reading is not None and reading.id in completed,
            has_read_today=has_completed_today(entry.completed_dates, now=now, tz=self.tz),
            plan_finished=bool(plan.readings) and all(r.id in completed for r in plan.readings),
            plan_progress=entry,
            completion_percentage=self._percentage(plan, entry.completed_readings),
        )

    def complete_reading(self, plan_id: str, reading_id: str, now: Optional[datetime] = None) -> PlanProgressResponse:
        plan = self._require_plan(plan_id)
        if self.catalog.get_reading_by_id(plan, reading_id) is None:
            raise NotFoundError(f"Reading {reading_id} is not part of plan {plan_id}")

        progress = self.get_progress()
        previous = progress_tracker.get_plan_progress(progress, plan.id)
        previous_streak = previous.current_streak if previous else 0

        progress = progress_tracker.record_completion(progress, plan.id, reading_id, now=now, tz=self.tz)
        self.repository.save(progress)

        streak = progress_tracker.get_plan_progress(progress, plan.id).current_streak
        milestone = streak != previous_streak and is_streak_milestone(streak)
        if milestone:
            logger.info(f"Streak milestone of {streak} days reached on plan {plan.id}")
        return self._respond(progress, plan, milestone_reached=milestone)

    def advance_plan(self, plan_id: str, now: Optional[datetime] = None) -> PlanProgressResponse:
        """Complete today's reading if still open, then move to the next day.

        The start date only moves while a next day exists, so advancing on
        the last day just records the completion.
        """
        now = now or utc_now()
        plan = self._require_plan(plan_id)
        progress = self.get_progress()
        entry = progress_tracker.get_plan_progress(progress, plan.id)
        previous_streak = entry.current_streak if entry else 0

        day_index = current_day_index(entry.start_date if entry else now, now=now, tz=self.tz)
        reading = self.catalog.get_reading_by_day(plan, min(day_index, plan.total_days))
        completed = entry.completed_readings if entry else []
        if reading is not None and reading.id not in completed:
            progress = progress_tracker.record_completion(progress, plan.id, reading.id, now=now, tz=self.tz)

        if day_index + 1 <= plan.total_days:
            progress = progress_tracker.advance_plan(progress, plan.id, now=now)
        self.repository.save(progress)

        streak = progress_tracker.get_plan_progress(progress, plan.id).current_streak
        milestone = streak != previous_streak and is_streak_milestone(streak)
        return self._respond(progress, plan, milestone_reached=milestone)

    def reset_plan(self, plan_id: str, now: Optional[datetime] = None) -> PlanProgressResponse:
        plan = self._require_plan(plan_id)
        progress = progress_tracker.reset_plan_progress(self.get_progress(), plan.id, now=now)
        self.repository.save(progress)
        logger.info(f"Reset progress for plan {plan.id}")
        return self._respond(progress, plan)

    def check_streak(self, plan_id: str, now: Optional[datetime] = None) -> StreakCheckResponse:
        entry = progress_tracker.get_plan_progress(self.get_progress(), plan_id)
        if entry is None:
            raise NotFoundError(f"Plan {plan_id} has not been started")
        summary = compute_streak_from_history(entry.completed_dates, now=now, tz=self.tz)
        return StreakCheckResponse(
            plan_id=plan_id,
            stored_current=entry.current_streak,
            stored_longest=entry.longest_streak,
            recomputed_current=summary.current,
            recomputed_longest=summary.longest,
            consistent=(entry.current_streak == summary.current and entry.longest_streak >= summary.longest),
        )

    def repair_streaks(self, now: Optional[datetime] = None) -> MultiPlanProgress:
        progress = progress_tracker.recompute_streaks(self.get_progress(), now=now, tz=self.tz)
        self.repository.save(progress)
        return progress

    def _require_plan(self, plan_id: str) -> ReadingPlan:
        plan = self.catalog.get_by_id(plan_id)
        if plan is None:
            raise NotFoundError(f"Reading plan {plan_id} not found")
        return plan

    @staticmethod
    def _percentage(plan: ReadingPlan, completed_readings) -> int:
        plan_reading_ids = {reading.id for reading in plan.readings}
        done = len(plan_reading_ids.intersection(completed_readings))
        return completion_percentage(done, plan.total_days)

    def _respond(self, progress: MultiPlanProgress, plan: ReadingPlan, milestone_reached: bool = False) -> PlanProgressResponse:
        entry = progress_tracker.get_plan_progress(progress, plan.id)
        return PlanProgressResponse(
            progress=progress,
            plan_progress=entry,
            completion_percentage=self._percentage(plan, entry.completed_readings),
            milestone_reached=milestone_reached,
        )


def get_progress_service(
    repository: ProgressRepository = Depends(get_progress_repository),
    catalog: PlanCatalog = Depends(get_plan_catalog),
    settings: Settings = Depends(get_app_settings),
) -> ProgressService:
    return ProgressService(repository, catalog, tz=settings.local_timezone)
