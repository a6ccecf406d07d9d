"""Configuration for pytest."""
import sys
import os
from datetime import datetime, timezone

# Add the project root to Python path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

# Common test fixtures can be defined here
import pytest
from unittest.mock import Mock

from reading_tracker.models.domain import PlanType, Reading, ReadingPlan
from reading_tracker.storage import InMemoryKeyValueStore

FIXED_NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


def build_plan(plan_id: str = "plan-a", days: int = 3, plan_type: PlanType = PlanType.THEMATIC) -> ReadingPlan:
    """Build a plan whose readings are ``<plan_id>-day-<n>``."""
    readings = [
        Reading(id=f"{plan_id}-day-{day}", day=day, passages=[f"Psalm {day}"])
        for day in range(1, days + 1)
    ]
    return ReadingPlan(
        id=plan_id,
        name=f"Plan {plan_id}",
        description="Test plan",
        type=plan_type,
        readings=readings,
        total_days=days,
        estimated_duration=f"{days} days",
    )


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def plan_factory():
    return build_plan


@pytest.fixture
def plan_a():
    return build_plan("plan-a", days=3)


@pytest.fixture
def plan_b():
    return build_plan("plan-b", days=5, plan_type=PlanType.CHRONOLOGICAL)


@pytest.fixture
def mock_settings():
    """Mock application settings for testing."""
    settings = Mock()
    settings.app_name = "Test Reading Tracker API"
    settings.debug = True
    settings.storage_backend = "memory"
    settings.progress_key = "test-progress"
    settings.notes_key = "test-notes"
    settings.study_focus_key = "test-study-focus"
    settings.custom_plans_key = "test-custom-plans"
    settings.reminders_key = "test-reminders"
    settings.local_timezone = timezone.utc
    settings.storage_keys = [
        "test-progress", "test-notes", "test-study-focus", "test-custom-plans", "test-reminders",
    ]
    return settings
