"""Classification and migration of persisted progress records."""
from __future__ import annotations

import logging
from enum import Enum
from datetime import datetime
from typing import Any, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from reading_tracker.models.domain import (
    CompletionEntry,
    LegacyProgress,
    MultiPlanProgress,
    PlanProgress,
)
from reading_tracker.services.streak_calculator import utc_now

logger = logging.getLogger(__name__)


class ProgressRecordKind(str, Enum):
    CURRENT = "current"
    LEGACY = "legacy"
    UNKNOWN = "unknown"


def classify_progress_record(raw: Any) -> ProgressRecordKind:
    """Decide which stored shape ``raw`` is.

    CURRENT records carry a ``planProgress`` mapping; LEGACY records have the
    flat completion lists and no mapping. Either must also validate fully,
    otherwise the record is UNKNOWN.
    """
    if not isinstance(raw, dict):
        return ProgressRecordKind.UNKNOWN

    if "planProgress" in raw:
        if not isinstance(raw["planProgress"], dict):
            return ProgressRecordKind.UNKNOWN
        try:
            MultiPlanProgress.model_validate(raw)
        except PydanticValidationError:
            return ProgressRecordKind.UNKNOWN
        return ProgressRecordKind.CURRENT

    readings = raw.get("completedReadings")
    dates = raw.get("completedDates")
    if not isinstance(readings, list) or not isinstance(dates, list):
        return ProgressRecordKind.UNKNOWN
    try:
        LegacyProgress.model_validate(raw)
    except PydanticValidationError:
        return ProgressRecordKind.UNKNOWN
    return ProgressRecordKind.LEGACY


def migrate_legacy_progress(legacy: LegacyProgress, now: Optional[datetime] = None) -> MultiPlanProgress:
    """Wrap a single-plan record into a multi-plan aggregate without dropping data.

    Every field is carried over as stored, except that a ``longestStreak``
    below ``currentStreak`` is raised to ``currentStreak`` (the same repair
    ``PlanProgress`` applies to every record it reads).
    """
    plan_progress = PlanProgress(
        plan_id=legacy.current_plan_id,
        completions=[
            CompletionEntry(reading_id=reading_id, completed_at=completed_at)
            for reading_id, completed_at in zip(legacy.completed_readings, legacy.completed_dates)
        ],
        current_streak=legacy.current_streak,
        longest_streak=legacy.longest_streak,
        last_reading_date=legacy.last_reading_date,
        total_readings=legacy.total_readings,
        start_date=legacy.start_date,
        last_accessed_date=now or utc_now(),
    )
    return MultiPlanProgress(
        user_id=legacy.user_id,
        current_plan_id=legacy.current_plan_id,
        plan_progress={legacy.current_plan_id: plan_progress},
    )


def parse_progress_record(raw: Any, now: Optional[datetime] = None) -> Tuple[Optional[MultiPlanProgress], bool]:
    """Turn a decoded JSON payload into the current aggregate.

    Returns ``(progress, migrated)``. ``progress`` is None for unrecognized
    shapes; nothing is guessed.
    """
    kind = classify_progress_record(raw)
    if kind is ProgressRecordKind.CURRENT:
        return MultiPlanProgress.model_validate(raw), False
    if kind is ProgressRecordKind.LEGACY:
        legacy = LegacyProgress.model_validate(raw)
        logger.info(f"Migrating legacy progress for plan {legacy.current_plan_id}")
        return migrate_legacy_progress(legacy, now=now), True
    logger.warning("Progress record matches neither the current nor the legacy shape")
    return None, False
