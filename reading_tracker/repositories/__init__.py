"""Repository modules for key-value storage operations.

All repository classes are re-exported here for convenient imports.
"""
from reading_tracker.repositories.progress import ProgressRepository
from reading_tracker.repositories.notes import NoteRepository
from reading_tracker.repositories.preferences import StudyFocusRepository, ReminderSettingsRepository
from reading_tracker.repositories.custom_plans import CustomPlanRepository

__all__ = [
    "ProgressRepository",
    "NoteRepository",
    "StudyFocusRepository",
    "ReminderSettingsRepository",
    "CustomPlanRepository",
]
