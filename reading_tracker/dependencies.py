"""FastAPI dependencies handing out the store and repositories built at startup."""
from fastapi import Depends, Request

from reading_tracker.config import Settings
from reading_tracker.repositories import (
    CustomPlanRepository,
    NoteRepository,
    ProgressRepository,
    ReminderSettingsRepository,
    StudyFocusRepository,
)
from reading_tracker.services.plan_catalog import PlanCatalog
from reading_tracker.storage import KeyValueStore


def get_store(request: Request) -> KeyValueStore:
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_progress_repository(
    store: KeyValueStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> ProgressRepository:
    return ProgressRepository(store, settings.progress_key)


def get_note_repository(
    store: KeyValueStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> NoteRepository:
    return NoteRepository(store, settings.notes_key)


def get_study_focus_repository(
    store: KeyValueStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> StudyFocusRepository:
    return StudyFocusRepository(store, settings.study_focus_key)


def get_reminder_settings_repository(
    store: KeyValueStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> ReminderSettingsRepository:
    return ReminderSettingsRepository(store, settings.reminders_key)


def get_custom_plan_repository(
    store: KeyValueStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> CustomPlanRepository:
    return CustomPlanRepository(store, settings.custom_plans_key)


def get_plan_catalog(
    request: Request,
    custom_plans: CustomPlanRepository = Depends(get_custom_plan_repository),
) -> PlanCatalog:
    return PlanCatalog(request.app.state.builtin_plans, custom_plans)
