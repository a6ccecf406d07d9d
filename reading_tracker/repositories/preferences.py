"""Repositories for study focus and reminder preferences."""
import logging

from pydantic import ValidationError as PydanticValidationError

from reading_tracker.models.domain import ReminderSettings, StudyFocus
from reading_tracker.repositories.base import JsonDocumentRepository

logger = logging.getLogger(__name__)


class StudyFocusRepository(JsonDocumentRepository):

    def load(self) -> StudyFocus:
        raw = self._read()
        if self._is_missing(raw):
            return StudyFocus()
        try:
            return StudyFocus.model_validate(raw)
        except PydanticValidationError as e:
            logger.warning(f"Ignoring malformed study focus under {self.key}: {e}")
            return StudyFocus()

    def save(self, focus: StudyFocus) -> bool:
        return self._write(focus.model_dump(mode="json", by_alias=True))


class ReminderSettingsRepository(JsonDocumentRepository):

    def load(self) -> ReminderSettings:
        raw = self._read()
        if self._is_missing(raw):
            return ReminderSettings()
        try:
            return ReminderSettings.model_validate(raw)
        except PydanticValidationError as e:
            logger.warning(f"Ignoring malformed reminder settings under {self.key}: {e}")
            return ReminderSettings()

    def save(self, settings: ReminderSettings) -> bool:
        return self._write(settings.model_dump(mode="json", by_alias=True))
