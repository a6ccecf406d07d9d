"""Routes for study focus and reminder preferences."""
from fastapi import APIRouter, Depends

from reading_tracker.dependencies import get_reminder_settings_repository, get_study_focus_repository
from reading_tracker.models.domain import ReminderSettings, StudyFocus
from reading_tracker.repositories.preferences import ReminderSettingsRepository, StudyFocusRepository

router = APIRouter(prefix="/api/preferences", tags=["preferences"])


@router.get("/study-focus", response_model=StudyFocus)
def get_study_focus(repository: StudyFocusRepository = Depends(get_study_focus_repository)):
    return repository.load()


@router.put("/study-focus", response_model=StudyFocus)
def save_study_focus(
    payload: StudyFocus,
    repository: StudyFocusRepository = Depends(get_study_focus_repository),
):
    repository.save(payload)
    return payload


@router.get("/reminders", response_model=ReminderSettings)
def get_reminder_settings(repository: ReminderSettingsRepository = Depends(get_reminder_settings_repository)):
    return repository.load()


@router.put("/reminders", response_model=ReminderSettings)
def save_reminder_settings(
    payload: ReminderSettings,
    repository: ReminderSettingsRepository = Depends(get_reminder_settings_repository),
):
    repository.save(payload)
    return payload
