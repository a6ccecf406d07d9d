"""Pure transformations over the multi-plan progress aggregate.

Every function returns a new ``MultiPlanProgress`` (or a lookup result) and
leaves its input untouched. Only the named plan's entry changes; all other
entries are carried over as they were.
"""
from __future__ import annotations

from datetime import datetime, timedelta, tzinfo
from typing import Optional

from reading_tracker.models.domain import CompletionEntry, MultiPlanProgress, PlanProgress
from reading_tracker.services.streak_calculator import (
    compute_streak_from_history,
    should_extend_streak,
    utc_now,
)


def new_plan_progress(plan_id: str, now: Optional[datetime] = None) -> PlanProgress:
    """Zeroed entry for a plan started at ``now``."""
    started = now or utc_now()
    return PlanProgress(plan_id=plan_id, start_date=started, last_accessed_date=started)


def get_plan_progress(progress: MultiPlanProgress, plan_id: str) -> Optional[PlanProgress]:
    return progress.plan_progress.get(plan_id)


def get_current_plan_progress(progress: MultiPlanProgress) -> Optional[PlanProgress]:
    return get_plan_progress(progress, progress.current_plan_id)


def _with_entry(progress: MultiPlanProgress, entry: PlanProgress) -> MultiPlanProgress:
    updated = progress.model_copy(deep=True)
    updated.plan_progress[entry.plan_id] = entry
    return updated


def _entry_or_new(progress: MultiPlanProgress, plan_id: str, now: datetime) -> PlanProgress:
    existing = get_plan_progress(progress, plan_id)
    if existing is None:
        return new_plan_progress(plan_id, now)
    return existing.model_copy(deep=True)


def ensure_current_plan_progress(progress: MultiPlanProgress, now: Optional[datetime] = None) -> MultiPlanProgress:
    """Create the missing entry for ``current_plan_id``, if any."""
    if get_current_plan_progress(progress) is not None:
        return progress
    return _with_entry(progress, new_plan_progress(progress.current_plan_id, now))


def switch_active_plan(
    progress: MultiPlanProgress,
    new_plan_id: str,
    now: Optional[datetime] = None,
) -> MultiPlanProgress:
    """Make ``new_plan_id`` current without discarding any plan's history."""
    now = now or utc_now()
    updated = progress.model_copy(deep=True)

    outgoing = updated.plan_progress.get(updated.current_plan_id)
    if outgoing is not None:
        outgoing.last_accessed_date = now

    target = updated.plan_progress.get(new_plan_id)
    if target is None:
        target = new_plan_progress(new_plan_id, now)
        updated.plan_progress[new_plan_id] = target
    target.last_accessed_date = now

    updated.current_plan_id = new_plan_id
    return updated


def record_completion(
    progress: MultiPlanProgress,
    plan_id: str,
    reading_id: str,
    *,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> MultiPlanProgress:
    """Append a completion for ``reading_id`` and update the plan's streak.

    The streak grows by one on the first completion of a calendar day and
    stays put for later ones. Gaps are not detected here; see
    ``recompute_streaks``.
    """
    now = now or utc_now()
    entry = _entry_or_new(progress, plan_id, now)

    extend = should_extend_streak(entry.completed_dates, entry.last_reading_date, now=now, tz=tz)
    current = entry.current_streak + (1 if extend else 0)

    entry.completions.append(CompletionEntry(reading_id=reading_id, completed_at=now))
    entry.current_streak = current
    entry.longest_streak = max(entry.longest_streak, current)
    entry.last_reading_date = now
    entry.total_readings += 1
    return _with_entry(progress, entry)


def reset_plan_progress(
    progress: MultiPlanProgress,
    plan_id: str,
    now: Optional[datetime] = None,
) -> MultiPlanProgress:
    """Replace one plan's entry with a zeroed one. Notes are not touched."""
    return _with_entry(progress, new_plan_progress(plan_id, now))


def advance_plan(
    progress: MultiPlanProgress,
    plan_id: str,
    now: Optional[datetime] = None,
) -> MultiPlanProgress:
    """Move the plan one day ahead by starting it a day earlier."""
    now = now or utc_now()
    entry = _entry_or_new(progress, plan_id, now)
    entry.start_date = entry.start_date - timedelta(days=1)
    entry.last_accessed_date = now
    return _with_entry(progress, entry)


def remove_plan_progress(progress: MultiPlanProgress, plan_id: str) -> MultiPlanProgress:
    """Drop a plan's entry; used when its custom plan is deleted."""
    updated = progress.model_copy(deep=True)
    updated.plan_progress.pop(plan_id, None)
    return updated


def recompute_streaks(
    progress: MultiPlanProgress,
    *,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> MultiPlanProgress:
    """Rebuild every plan's streaks from its completion history.

    The longest streak is never lowered.
    """
    updated = progress.model_copy(deep=True)
    for entry in updated.plan_progress.values():
        summary = compute_streak_from_history(entry.completed_dates, now=now, tz=tz)
        entry.current_streak = summary.current
        entry.longest_streak = max(entry.longest_streak, summary.longest, summary.current)
    return updated
