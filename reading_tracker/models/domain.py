"""Domain models persisted in the key-value store.

Stored JSON uses camelCase keys; Python code uses the snake_case attributes.
Always dump with ``by_alias=True`` when writing back to storage.
"""
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model reading and writing camelCase JSON."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PlanType(str, Enum):
    CHRONOLOGICAL = "chronological"
    THEMATIC = "thematic"
    BOOK_BY_BOOK = "book-by-book"
    CUSTOM = "custom"


class Reading(CamelModel):
    """One day of a reading plan."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(..., min_length=1)
    day: int = Field(..., ge=1)
    passages: List[str] = Field(..., min_length=1)
    study_tags: Optional[List[str]] = None
    theme: Optional[str] = None

    @field_validator("passages")
    @classmethod
    def _passages_not_blank(cls, passages: List[str]) -> List[str]:
        if any(not passage.strip() for passage in passages):
            raise ValueError("passages must not be blank")
        return passages


class ReadingPlan(CamelModel):
    """An immutable multi-day reading schedule."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    description: str
    type: PlanType
    readings: List[Reading]
    total_days: int = Field(..., ge=0)
    estimated_duration: str

    @model_validator(mode="after")
    def _days_match_positions(self) -> "ReadingPlan":
        if self.total_days != len(self.readings):
            raise ValueError(
                f"totalDays ({self.total_days}) does not match number of readings ({len(self.readings)})"
            )
        for index, reading in enumerate(self.readings, start=1):
            if reading.day != index:
                raise ValueError(f"reading at position {index} has day {reading.day}")
        return self


class CompletionEntry(CamelModel):
    reading_id: str
    completed_at: datetime


class PlanProgress(CamelModel):
    """Progress for one plan the user has started."""

    plan_id: str
    completions: List[CompletionEntry] = Field(default_factory=list)
    current_streak: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)
    last_reading_date: Optional[datetime] = None
    total_readings: int = Field(default=0, ge=0)
    start_date: datetime
    last_accessed_date: datetime

    @model_validator(mode="before")
    @classmethod
    def _pair_parallel_lists(cls, data: Any) -> Any:
        """Accept the older ``completedReadings``/``completedDates`` pair of lists."""
        if not isinstance(data, dict) or "completions" in data:
            return data
        readings = data.get("completedReadings", data.get("completed_readings"))
        dates = data.get("completedDates", data.get("completed_dates"))
        if readings is None and dates is None:
            return data
        readings = readings or []
        dates = dates or []
        if len(readings) != len(dates):
            raise ValueError("completedReadings and completedDates must have the same length")
        paired = {
            key: value for key, value in data.items()
            if key not in ("completedReadings", "completed_readings", "completedDates", "completed_dates")
        }
        paired["completions"] = [
            {"readingId": reading_id, "completedAt": completed_at}
            for reading_id, completed_at in zip(readings, dates)
        ]
        return paired

    @model_validator(mode="after")
    def _longest_covers_current(self) -> "PlanProgress":
        if self.longest_streak < self.current_streak:
            self.longest_streak = self.current_streak
        return self

    @property
    def completed_readings(self) -> List[str]:
        return [entry.reading_id for entry in self.completions]

    @property
    def completed_dates(self) -> List[datetime]:
        return [entry.completed_at for entry in self.completions]


class MultiPlanProgress(CamelModel):
    """Root progress aggregate, stored whole under the progress key."""

    user_id: str
    current_plan_id: str
    plan_progress: Dict[str, PlanProgress] = Field(default_factory=dict)


class LegacyProgress(CamelModel):
    """Retired single-plan progress record, only read as a migration source."""

    user_id: str
    current_plan_id: str
    completed_readings: List[str] = Field(default_factory=list)
    completed_dates: List[datetime] = Field(default_factory=list)
    current_streak: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)
    last_reading_date: Optional[datetime] = None
    total_readings: int = Field(default=0, ge=0)
    start_date: datetime

    @model_validator(mode="after")
    def _lists_line_up(self) -> "LegacyProgress":
        if len(self.completed_readings) != len(self.completed_dates):
            raise ValueError("completedReadings and completedDates must have the same length")
        return self


class Note(CamelModel):
    id: str
    reading_id: str
    content: str
    created_at: datetime
    updated_at: datetime


class StudyFocus(CamelModel):
    tags: List[str] = Field(default_factory=list)
    custom_tags: List[str] = Field(default_factory=list)


class ReminderSettings(CamelModel):
    """Reminder preferences; the reminders themselves are scheduled by the client."""
    enabled: bool = False
    daily_reminder_time: str = Field(default="09:00", pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    streak_reminders: bool = True
    missed_day_reminders: bool = True
