"""Pydantic models for request/response schemas."""
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import Field

from reading_tracker.models.domain import (
    CamelModel,
    MultiPlanProgress,
    Note,
    PlanProgress,
    Reading,
    ReadingPlan,
    StudyFocus,
)

NOTE_MAX_LENGTH = 10000
EXPORT_VERSION = 2


class HealthCheck(CamelModel):
    """Health check response model."""
    status: str
    timestamp: datetime
    version: str = "1.0.0"


# Plan catalog schemas

class ReadingDraft(CamelModel):
    """One reading of a custom plan being authored; checked by the plan builder."""
    passages: List[str] = Field(default_factory=list)
    study_tags: Optional[List[str]] = None
    theme: Optional[str] = None


class CustomPlanDraft(CamelModel):
    """Custom plan as submitted; every field may be missing or blank."""
    name: Optional[str] = None
    description: Optional[str] = None
    readings: List[ReadingDraft] = Field(default_factory=list)


class SequentialPlanCreate(CamelModel):
    """Request for a one-chapter-a-day plan through a single book."""
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=1000)
    start_book: str = Field(..., min_length=1, max_length=100)
    chapters: int = Field(..., ge=1, le=150)


class PlanSummary(CamelModel):
    """Plan without its readings, for listings."""
    id: str
    name: str
    description: str
    type: str
    total_days: int
    estimated_duration: str

    @classmethod
    def from_plan(cls, plan: ReadingPlan) -> "PlanSummary":
        return cls(
            id=plan.id,
            name=plan.name,
            description=plan.description,
            type=plan.type.value,
            total_days=plan.total_days,
            estimated_duration=plan.estimated_duration,
        )


# Progress schemas

class StartPlanRequest(CamelModel):
    plan_id: str = Field(..., min_length=1)


class CompletionRequest(CamelModel):
    reading_id: str = Field(..., min_length=1)


class PlanProgressResponse(CamelModel):
    """Progress aggregate plus the entry for the plan just touched."""
    progress: MultiPlanProgress
    plan_progress: PlanProgress
    completion_percentage: int
    milestone_reached: bool = False


class TodayReadingResponse(CamelModel):
    """Reading scheduled for today on the current plan."""
    plan: PlanSummary
    day_number: int
    scheduled_date: date
    reading: Optional[Reading] = None
    is_completed: bool
    has_read_today: bool
    plan_finished: bool
    plan_progress: PlanProgress
    completion_percentage: int


class StreakCheckResponse(CamelModel):
    """Stored streak counters next to the values recomputed from history."""
    plan_id: str
    stored_current: int
    stored_longest: int
    recomputed_current: int
    recomputed_longest: int
    consistent: bool


# Note schemas

class NoteUpsert(CamelModel):
    content: str = Field(..., max_length=NOTE_MAX_LENGTH)


# Export / import schemas

class ExportBundle(CamelModel):
    progress: Optional[MultiPlanProgress] = None
    notes: List[Note] = Field(default_factory=list)
    study_focus: StudyFocus = Field(default_factory=StudyFocus)
    exported_at: datetime
    version: int = EXPORT_VERSION


class ImportRequest(CamelModel):
    """Import payload; ``progress`` may be the current or the legacy shape."""
    progress: Optional[Dict[str, Any]] = None
    notes: Optional[List[Note]] = None
    study_focus: Optional[StudyFocus] = None
    exported_at: Optional[datetime] = None
    version: Optional[int] = None


class ImportResult(CamelModel):
    progress_imported: bool = False
    progress_migrated: bool = False
    notes_imported: int = 0
    study_focus_imported: bool = False
    warnings: List[str] = Field(default_factory=list)
