"""Validation and construction of user-authored reading plans."""
from __future__ import annotations

from typing import List, Optional

from reading_tracker.models.domain import PlanType, Reading, ReadingPlan
from reading_tracker.models.schemas import CustomPlanDraft
from reading_tracker.utils.ids import generate_id


def validate_custom_plan(draft: CustomPlanDraft) -> List[str]:
    """Return every problem with ``draft``; an empty list means it is valid."""
    errors: List[str] = []

    if not draft.name or not draft.name.strip():
        errors.append("Plan name is required")

    if not draft.description or not draft.description.strip():
        errors.append("Plan description is required")

    if not draft.readings:
        errors.append("At least one reading is required")

    for index, reading in enumerate(draft.readings, start=1):
        if not reading.passages:
            errors.append(f"Reading {index} must have at least one passage")
        elif any(not passage.strip() for passage in reading.passages):
            errors.append(f"Reading {index} has an empty passage")

    return errors


def parse_passages(text: str) -> List[str]:
    """Split ``"Genesis 1-2, Psalm 1"`` into trimmed passage references."""
    return [part.strip() for part in text.split(",") if part.strip()]


def create_reading(
    day: int,
    passages: List[str],
    study_tags: Optional[List[str]] = None,
    theme: Optional[str] = None,
) -> Reading:
    return Reading(
        id=generate_id(f"reading-{day}"),
        day=day,
        passages=passages,
        study_tags=study_tags,
        theme=theme,
    )


def create_custom_plan(name: str, description: str, readings: List[Reading]) -> ReadingPlan:
    return ReadingPlan(
        id=generate_id("custom"),
        name=name,
        description=description,
        type=PlanType.CUSTOM,
        readings=readings,
        total_days=len(readings),
        estimated_duration=f"{len(readings)} days",
    )


def build_custom_plan(draft: CustomPlanDraft) -> ReadingPlan:
    """Construct a plan from a draft that passed ``validate_custom_plan``."""
    readings = [
        create_reading(
            day,
            [passage.strip() for passage in reading.passages],
            study_tags=reading.study_tags,
            theme=reading.theme.strip() if reading.theme and reading.theme.strip() else None,
        )
        for day, reading in enumerate(draft.readings, start=1)
    ]
    return create_custom_plan(draft.name.strip(), draft.description.strip(), readings)


def generate_sequential_plan(name: str, description: str, start_book: str, chapters: int) -> ReadingPlan:
    """One chapter a day through ``start_book``."""
    readings = [create_reading(chapter, [f"{start_book} {chapter}"]) for chapter in range(1, chapters + 1)]
    return create_custom_plan(name, description, readings)
